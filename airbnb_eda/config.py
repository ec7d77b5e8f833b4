"""
Configuration module: paths, cleaning thresholds, amenity categories and plot settings.
"""

from pathlib import Path
import logging
import os

# ============================================================================
# PROJECT PATHS (all relative to PROJECT_ROOT)
# ============================================================================

# Detect PROJECT_ROOT: either cwd or parent if in notebooks/scripts
def get_project_root():
    """Auto-detect project root by checking for data/ and airbnb_eda/ folders."""
    override = os.environ.get("AIRBNB_EDA_ROOT")
    if override:
        return Path(override)

    cwd = Path.cwd()

    # If already in project root
    if (cwd / "data").exists() and (cwd / "airbnb_eda").exists():
        return cwd

    # If in notebooks/ or scripts/
    if cwd.name in ["notebooks", "scripts"] and (cwd.parent / "airbnb_eda").exists():
        return cwd.parent

    # Installed in place: the package sits in the project root
    return Path(__file__).resolve().parent.parent

PROJECT_ROOT = get_project_root()

# Core data paths
DATA_DIR = PROJECT_ROOT / "data"
ORIGINAL_DIR = DATA_DIR / "original"
PROCESSED_DIR = DATA_DIR / "processed"
OUTPUTS_DIR = PROJECT_ROOT / "outputs"
TABLES_DIR = OUTPUTS_DIR / "tables"
FIGURES_DIR = PROJECT_ROOT / "reports" / "figures"

# Input files (raw data)
INPUT_FILES = {
    "listings": Path(os.environ.get("AIRBNB_LISTINGS_CSV", ORIGINAL_DIR / "listings.csv")),
    "neighbourhoods": ORIGINAL_DIR / "neighbourhoods.geojson",  # Optional
}

# Output files (processed)
OUTPUT_FILES = {
    "listings_clean": PROCESSED_DIR / "listings_clean.parquet",
    "listing_amenities": PROCESSED_DIR / "listing_amenities.parquet",
    "price_by_neighbourhood": TABLES_DIR / "price_by_neighbourhood.csv",
    "price_by_room_type": TABLES_DIR / "price_by_room_type.csv",
    "price_by_availability": TABLES_DIR / "price_by_availability.csv",
    "amenity_frequency": TABLES_DIR / "amenity_frequency.csv",
    "price_by_amenity": TABLES_DIR / "price_by_amenity.csv",
    "price_by_amenity_category": TABLES_DIR / "price_by_amenity_category.csv",
    "price_by_host": TABLES_DIR / "price_by_host.csv",
    "price_correlations": TABLES_DIR / "price_correlations.csv",
    "neighbourhoods_price": PROCESSED_DIR / "neighbourhoods_price.geojson",
}


def ensure_output_dirs():
    """Create processed/output/figure folders if missing."""
    for folder in [PROCESSED_DIR, TABLES_DIR, FIGURES_DIR]:
        folder.mkdir(parents=True, exist_ok=True)


# ============================================================================
# COLUMNS
# ============================================================================

# Subset of the Inside Airbnb export used by the analysis
LISTING_COLUMNS = [
    "id", "name", "neighbourhood_cleansed", "neighbourhood_group_cleansed",
    "latitude", "longitude", "property_type", "room_type", "accommodates",
    "bathrooms", "bathrooms_text", "bedrooms", "beds", "amenities", "price",
    "minimum_nights", "maximum_nights",
    "availability_30", "availability_60", "availability_90", "availability_365",
    "number_of_reviews", "reviews_per_month", "first_review", "last_review",
    "review_scores_rating", "review_scores_cleanliness", "review_scores_location",
    "review_scores_value",
    "host_id", "host_since", "host_response_time", "host_response_rate",
    "host_acceptance_rate", "host_is_superhost", "host_listings_count",
    "host_total_listings_count", "host_has_profile_pic", "host_identity_verified",
    "instant_bookable",
]

NUMERIC_COLUMNS = [
    "latitude", "longitude", "accommodates", "bedrooms", "beds",
    "minimum_nights", "maximum_nights",
    "availability_30", "availability_60", "availability_90", "availability_365",
    "number_of_reviews", "reviews_per_month",
    "review_scores_rating", "review_scores_cleanliness", "review_scores_location",
    "review_scores_value", "host_listings_count", "host_total_listings_count",
]

BOOLEAN_COLUMNS = [
    "host_is_superhost", "host_has_profile_pic", "host_identity_verified",
    "instant_bookable",
]

PERCENT_COLUMNS = ["host_response_rate", "host_acceptance_rate"]

DATE_COLUMNS = ["host_since", "first_review", "last_review"]

# ============================================================================
# DATA QUALITY CONSTANTS
# ============================================================================

# Price cleaning
PRICE_OUTLIER_THRESHOLD_HIGH = 10000  # Remove prices > 10k/night
PRICE_OUTLIER_THRESHOLD_LOW = 10      # Remove prices < 10/night

# Bathrooms: "Half-bath" style descriptions carry no digit
HALF_BATH_VALUE = 0.5

# Boolean flags as exported ('t'/'f')
BOOLEAN_MAP = {
    "t": True, "f": False, "true": True, "false": False,
    "1": True, "0": False, "yes": True, "no": False,
}

# Availability over the next 365 days
AVAILABILITY_BINS = [-1, 0, 90, 180, 270, 365]
AVAILABILITY_LABELS = ["0 days", "1-90", "91-180", "181-270", "271-365"]

# Host portfolio size (host_listings_count)
HOST_PORTFOLIO_BINS = [0, 1, 5, 20, float("inf")]
HOST_PORTFOLIO_LABELS = ["1", "2-5", "6-20", "21+"]

# Spatial join
SPATIAL_JOIN_PREDICATE = "within"
MIN_SPATIAL_JOIN_COVERAGE = 0.95
CRS_WEB = "EPSG:4326"

# (lat, lon); None = median of listing coordinates
CITY_CENTRE = None

# ============================================================================
# AMENITY CATEGORIES (lowercase keywords, substring match, first hit wins)
# ============================================================================

AMENITY_CATEGORIES = {
    "safety": ["smoke alarm", "carbon monoxide", "fire extinguisher", "first aid",
               "lock on bedroom", "security camera"],
    "family": ["crib", "high chair", "children", "baby"],
    "internet": ["wifi", "wi-fi", "internet", "ethernet"],
    "kitchen": ["kitchen", "oven", "stove", "microwave", "refrigerator", "freezer",
                "dishwasher", "dishes", "coffee", "kettle", "cooking", "toaster"],
    "bathroom": ["hair dryer", "shampoo", "conditioner", "body soap", "shower gel",
                 "hot water", "bathtub"],
    "laundry": ["washer", "dryer", "iron", "drying rack"],
    "climate": ["air conditioning", "central air", "heating", "ceiling fan",
                "portable fan", "fireplace"],
    "parking": ["parking", "garage", "ev charger"],
    "outdoor": ["pool", "hot tub", "patio", "balcony", "backyard", "garden", "bbq", "grill"],
    "entertainment": ["tv", "netflix", "hbo", "game console", "sound system", "piano"],
    "work": ["workspace", "desk"],
    "building": ["elevator", "gym", "doorman", "building staff"],
    "pets": ["pets allowed"],
}

# Amenity tables: only amenities present in at least this many listings
AMENITY_MIN_LISTINGS = 20
TOP_AMENITIES = 20

# ============================================================================
# PLOTTING
# ============================================================================

FIGURE_DPI = 150
PLOT_STYLE = "whitegrid"
PLOT_PALETTE = "husl"
TOP_NEIGHBOURHOODS = 15
SCATTER_SAMPLE_SIZE = 5000
RANDOM_SEED = 42

# ============================================================================
# LOGGING
# ============================================================================

LOG_LEVEL = os.environ.get("AIRBNB_EDA_LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR


def setup_logging(level=None):
    """Configure the root logger; called once from each script's main()."""
    logging.basicConfig(
        level=level or LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def get_logger(name):
    """Return a module logger. Handlers and level come from setup_logging()."""
    return logging.getLogger(name)


def print_config():
    """Print all configuration settings."""
    print("\n" + "=" * 80)
    print("EDA CONFIGURATION")
    print("=" * 80)
    print(f"\n📁 PROJECT ROOT: {PROJECT_ROOT}")
    print(f"📄 LISTINGS CSV: {INPUT_FILES['listings']}")
    print(f"📂 PROCESSED DIR: {PROCESSED_DIR}")
    print(f"📂 TABLES DIR: {TABLES_DIR}")
    print(f"📂 FIGURES DIR: {FIGURES_DIR}")
    print(f"\n💵 Price range kept: {PRICE_OUTLIER_THRESHOLD_LOW}-{PRICE_OUTLIER_THRESHOLD_HIGH}")
    print(f"\n✓ Configuration loaded successfully")
    print("=" * 80 + "\n")
