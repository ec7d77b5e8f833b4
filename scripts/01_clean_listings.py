#!/usr/bin/env python
"""
01_clean_listings.py
- Load the Inside Airbnb listings export
- Parse price, bathrooms text, host fields; explode amenities
- Derive availability bins, host features, distance to centre
- QC report + save cleaned data into data/processed/
"""

from pathlib import Path
import sys

# ensure repo root on path for package imports when running as script
REPO_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(REPO_ROOT))

from airbnb_eda import config, io, cleaning, amenities, analysis, qc


def main():
    config.setup_logging()
    config.print_config()
    config.ensure_output_dirs()

    # ========================================================================
    # 1. LOAD
    # ========================================================================
    print("=" * 80)
    print("LOAD LISTINGS")
    print("=" * 80)
    df_raw = io.load_listings(columns=config.LISTING_COLUMNS)
    print(f"\n✓ Loaded {len(df_raw):,} listings with {len(df_raw.columns)} columns")

    # ========================================================================
    # 2. CLEAN
    # ========================================================================
    print("\n" + "=" * 80)
    print("CLEAN LISTINGS")
    print("=" * 80)
    df, log = cleaning.clean_listings(df_raw)
    for line in log:
        print(f"  {line}")

    # ========================================================================
    # 3. DERIVED FEATURES
    # ========================================================================
    print("\n" + "=" * 80)
    print("DERIVED FEATURES")
    print("=" * 80)
    df = analysis.add_price_features(df)
    if 'amenities' in df.columns:
        df = amenities.add_amenity_features(df)
        df_amenities = amenities.explode_amenities(df)
        print(f"  ✓ Amenities exploded: {len(df_amenities):,} (listing, amenity) rows")
    else:
        df_amenities = None
        print(f"  ⚠️  No amenities column; skipping amenity features")
    if 'availability_365' in df.columns:
        df = analysis.add_availability_bins(df)
        print(f"  ✓ Availability bins added")
    df = analysis.add_host_features(df)
    print(f"  ✓ Host features added")
    if 'latitude' in df.columns and 'longitude' in df.columns:
        df = analysis.add_distance_to_centre(df)
        print(f"  ✓ Distance to centre added (median {df['dist_centre_km'].median():.2f} km)")

    # ========================================================================
    # 4. QC
    # ========================================================================
    checks = [
        ("Unique listing ids", qc.check_unique_ids, {'df': df}),
        ("Non-negative listing ids", qc.check_no_negative_ids, {'df': df}),
        ("Price is numeric", qc.check_price_numeric, {'df': df}),
        ("Price range", qc.check_price_range, {'df': df}),
        ("Bathrooms parsed", qc.check_bathrooms_parsed, {'df': df}),
    ]
    if df_amenities is not None:
        checks.append(("Amenity relation", qc.check_amenity_relation, {'df': df, 'long_df': df_amenities}))
    qc.print_qc_report(checks)

    # ========================================================================
    # 5. SAVE
    # ========================================================================
    path = io.save_parquet(df, config.OUTPUT_FILES['listings_clean'])
    print(f"\n✓ Saved: {path} ({io.file_size_mb(path):.2f} MB)")
    if df_amenities is not None:
        path = io.save_parquet(df_amenities, config.OUTPUT_FILES['listing_amenities'])
        print(f"✓ Saved: {path} ({io.file_size_mb(path):.2f} MB)")


if __name__ == "__main__":
    main()
