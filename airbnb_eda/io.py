"""
I/O module: Load the listings export and save tables, caches and figures.
"""

import pandas as pd
import geopandas as gpd
import matplotlib.pyplot as plt
from pathlib import Path
import warnings

from . import config

logger = config.get_logger(__name__)


def load_csv(filepath, **kwargs):
    """
    Load CSV file with error handling.

    Args:
        filepath: Path to CSV file (.csv or .csv.gz)
        **kwargs: Additional arguments for pd.read_csv()

    Returns:
        pd.DataFrame
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"CSV file not found: {filepath}")

    return pd.read_csv(filepath, **kwargs)


def load_listings(filepath=None, columns=None):
    """
    Load the Inside Airbnb listings export.

    Args:
        filepath: Path to listings.csv; defaults to config.INPUT_FILES['listings']
        columns: Optional list of columns to keep. Columns missing from the
            export are skipped (and logged) rather than raising.

    Returns:
        pd.DataFrame
    """
    filepath = Path(filepath) if filepath is not None else config.INPUT_FILES["listings"]
    df = load_csv(filepath, low_memory=False)
    logger.info("Loaded %s listings x %s columns from %s", len(df), len(df.columns), filepath.name)

    if columns is not None:
        missing = [c for c in columns if c not in df.columns]
        if missing:
            logger.warning("Columns not in export (skipped): %s", ", ".join(missing))
        df = df[[c for c in columns if c in df.columns]].copy()

    return df


def load_geojson(filepath, **kwargs):
    """
    Load GeoJSON file with CRS validation.

    Args:
        filepath: Path to GeoJSON file
        **kwargs: Additional arguments for gpd.read_file()

    Returns:
        geopandas.GeoDataFrame
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"GeoJSON file not found: {filepath}")

    gdf = gpd.read_file(filepath, **kwargs)

    if gdf.crs is None:
        warnings.warn(f"⚠️  CRS missing in {filepath.name}. Assuming {config.CRS_WEB}")
        gdf = gdf.set_crs(config.CRS_WEB)

    return gdf


def load_parquet(filepath, **kwargs):
    """Load Parquet file."""
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Parquet file not found: {filepath}")

    return pd.read_parquet(filepath, **kwargs)


def save_parquet(df, filepath, **kwargs):
    """
    Save DataFrame to Parquet.

    Args:
        df: DataFrame to save
        filepath: Output path
        **kwargs: Additional arguments for df.to_parquet()

    Returns:
        Path to saved file
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    df.to_parquet(filepath, index=False, **kwargs)

    return filepath


def save_geojson(gdf, filepath, **kwargs):
    """Save GeoDataFrame to GeoJSON (always EPSG:4326)."""
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    if gdf.crs != config.CRS_WEB:
        gdf = gdf.to_crs(config.CRS_WEB)

    gdf.to_file(filepath, driver="GeoJSON", **kwargs)

    return filepath


def save_csv(df, filepath, **kwargs):
    """
    Save DataFrame to CSV.

    Args:
        df: DataFrame to save
        filepath: Output path
        **kwargs: Additional arguments for df.to_csv()

    Returns:
        Path to saved file
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    df.to_csv(filepath, index=False, **kwargs)

    return filepath


def save_figure(fig, name, dpi=None):
    """
    Save a matplotlib Figure as PNG and close it.

    Args:
        fig: matplotlib Figure
        name: File name (placed in config.FIGURES_DIR) or full path
        dpi: Resolution; defaults to config.FIGURE_DPI

    Returns:
        Path to saved file
    """
    filepath = Path(name)
    if filepath.parent == Path("."):
        filepath = config.FIGURES_DIR / filepath
    if filepath.suffix == "":
        filepath = filepath.with_suffix(".png")
    filepath.parent.mkdir(parents=True, exist_ok=True)

    fig.savefig(filepath, dpi=dpi or config.FIGURE_DPI, bbox_inches="tight")
    plt.close(fig)

    return filepath


def file_size_mb(filepath):
    """Get file size in MB."""
    return Path(filepath).stat().st_size / (1024 ** 2)
