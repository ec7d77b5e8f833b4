"""
Quality Control (QC) module: Assertions and data quality checks.
"""

import pandas as pd
from . import config

def check_unique_ids(df, id_col='listing_id'):
    """Assert IDs are unique (no duplicates)."""
    assert df[id_col].duplicated().sum() == 0, f"Duplicate {id_col} values found!"
    assert df[id_col].isnull().sum() == 0, f"Null {id_col} values found!"
    return f"✓ {id_col} is unique (n={len(df)})"

def check_no_negative_ids(df, id_col='listing_id'):
    """Assert no negative IDs."""
    assert (df[id_col] >= 0).all(), f"Found negative {id_col} values!"
    return f"✓ No negative {id_col} values"

def check_price_numeric(df, price_col='price'):
    """Assert price is a float column without missing values."""
    assert price_col in df.columns, f"{price_col} column not found"
    assert pd.api.types.is_float_dtype(df[price_col]), f"{price_col} is {df[price_col].dtype}, expected float"
    assert df[price_col].notna().all(), f"{df[price_col].isna().sum()} missing {price_col} values"
    return f"✓ {price_col} is numeric (median {df[price_col].median():,.2f})"

def check_price_range(df, price_col='price', min_price=None, max_price=None):
    """Check prices are in expected range (logs outliers)."""
    min_price = config.PRICE_OUTLIER_THRESHOLD_LOW if min_price is None else min_price
    max_price = config.PRICE_OUTLIER_THRESHOLD_HIGH if max_price is None else max_price
    if price_col not in df.columns:
        return f"⚠️  {price_col} column not found"

    outliers_low = (df[price_col] < min_price).sum()
    outliers_high = (df[price_col] > max_price).sum()

    if outliers_low > 0 or outliers_high > 0:
        return f"⚠️  Price outliers: <{min_price}: {outliers_low}, >{max_price}: {outliers_high}"

    return f"✓ Prices in range {min_price}-{max_price}"

def check_bathrooms_parsed(df):
    """Report how many bathrooms_text values produced a bathroom count."""
    if 'bathrooms_text' not in df.columns or 'bathrooms' not in df.columns:
        return f"⚠️  bathrooms_text/bathrooms columns not found"

    has_text = df['bathrooms_text'].notna()
    unparsed = (has_text & df['bathrooms'].isna()).sum()
    if unparsed > 0:
        return f"⚠️  {unparsed} of {has_text.sum()} bathrooms_text values without a count"

    return f"✓ All {has_text.sum()} bathrooms_text values parsed"

def check_amenity_relation(df, long_df, id_col='listing_id'):
    """Assert the (listing, amenity) relation matches the listings it came from."""
    unknown = ~long_df[id_col].isin(df[id_col])
    assert unknown.sum() == 0, f"{unknown.sum()} amenity rows reference unknown listings"
    assert long_df.duplicated(subset=[id_col, 'amenity']).sum() == 0, "Duplicate (listing, amenity) rows"

    if 'amenities_count' in df.columns:
        expected = int(df['amenities_count'].sum())
        assert len(long_df) == expected, f"Amenity rows {len(long_df)} != amenities_count total {expected}"

    return f"✓ Amenity relation: {len(long_df):,} rows, {long_df['amenity'].nunique():,} distinct amenities"

def check_geometry_validity(gdf):
    """Assert all geometries are valid."""
    assert (~gdf.geometry.is_valid).sum() == 0, "Found invalid geometries!"
    assert gdf.geometry.is_empty.sum() == 0, "Found empty geometries!"
    return f"✓ All {len(gdf)} geometries are valid"

def check_crs(gdf, expected_crs=None):
    """Assert CRS matches expected."""
    expected_crs = config.CRS_WEB if expected_crs is None else expected_crs
    assert gdf.crs == expected_crs, f"CRS mismatch: {gdf.crs} != {expected_crs}"
    return f"✓ CRS is {expected_crs}"

def check_spatial_join_coverage(gdf_joined, min_coverage=None):
    """Assert spatial join coverage meets minimum threshold."""
    min_coverage = config.MIN_SPATIAL_JOIN_COVERAGE if min_coverage is None else min_coverage
    matched = gdf_joined['neighbourhood_idx'].notna().sum()
    total = len(gdf_joined)
    coverage = matched / total if total > 0 else 0

    assert coverage >= min_coverage, f"Spatial join coverage {coverage:.1%} < {min_coverage:.1%}"
    return f"✓ Spatial join coverage: {coverage:.1%}"

def run_checks(checks):
    """
    Run QC checks and collect results.

    Args:
        checks: List of (name, check_func, kwargs) tuples

    Returns:
        List of (status, name, message) with status in {'ok', 'error', 'warning'}
    """
    results = []
    for name, check_func, kwargs in checks:
        try:
            message = check_func(**kwargs)
            status = 'warning' if message.startswith('⚠️') else 'ok'
            results.append((status, name, message))
        except AssertionError as e:
            results.append(('error', name, f"ERROR: {e}"))
        except Exception as e:
            results.append(('warning', name, f"WARNING: {e}"))
    return results

def print_qc_report(checks):
    """
    Print formatted QC report.

    Args:
        checks: List of (name, check_func, kwargs) tuples

    Returns:
        The collected results (see run_checks)
    """
    print("\n" + "=" * 80)
    print("QUALITY CONTROL REPORT")
    print("=" * 80)

    results = run_checks(checks)
    icons = {'ok': '', 'error': '❌ ', 'warning': '⚠️  '}
    for status, name, message in results:
        print(f"\n{icons[status]}{name}")
        print(f"  {message}")

    print("\n" + "=" * 80)
    return results
