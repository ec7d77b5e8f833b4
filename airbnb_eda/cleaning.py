"""
Cleaning module: Parsing and normalization of the Inside Airbnb listings export.
"""

import pandas as pd
import numpy as np
import re
from . import config


def normalize_columns(df):
    """Lowercase column names and replace spaces with underscores."""
    df = df.copy()
    df.columns = [str(col).strip().lower().replace(' ', '_') for col in df.columns]
    return df


def parse_price_series(s: pd.Series) -> pd.Series:
    """
    Robustly parse price series, handling $ € £ symbols, spaces, NBSP, and decimal formats.

    Handles both 1,234.56 (comma thousands sep) and 1.234,56 (comma decimal sep).
    Decision: use the LAST separator (comma or dot) as decimal point, unless it
    is a lone separator followed by exactly three digits (1,234 or 1.234),
    which is read as a thousands separator.

    Args:
        s: pd.Series of price strings (e.g., '$157.00', '€100,50', etc.)

    Returns:
        pd.Series of float values (NaN for unparseable)
    """
    def parse_single(val):
        if val is None or (not isinstance(val, str) and pd.isna(val)):
            return np.nan
        if isinstance(val, (int, float, np.integer, np.floating)) and not isinstance(val, bool):
            return float(val)

        # Convert to string and strip
        val_str = str(val).strip()

        # Remove currency symbols, spaces, NBSP
        val_str = re.sub(r'[$€£\s\xa0]', '', val_str)

        # Keep only digits, dots, commas, minus sign
        val_str = re.sub(r'[^\d.,\-]', '', val_str)

        if not val_str or val_str == '-':
            return np.nan

        last_comma_idx = val_str.rfind(',')
        last_dot_idx = val_str.rfind('.')
        one_kind = (',' in val_str) != ('.' in val_str)
        sep_idx = max(last_comma_idx, last_dot_idx)
        n_seps = val_str.count(',') + val_str.count('.')

        if one_kind and (n_seps > 1 or len(val_str) - sep_idx - 1 == 3):
            # 1,234 / 1.234 / 1,234,567 -> thousands separators only
            val_str = val_str.replace(',', '').replace('.', '')
        elif last_comma_idx > last_dot_idx:
            # Last separator is comma -> comma is decimal sep
            val_str = val_str.replace('.', '').replace(',', '.')
        elif last_dot_idx > last_comma_idx:
            # Last separator is dot -> commas are thousands separators
            val_str = val_str.replace(',', '')

        try:
            return float(val_str)
        except ValueError:
            return np.nan

    return s.apply(parse_single).astype(float)


def parse_bathrooms_text(s: pd.Series) -> pd.DataFrame:
    """
    Extract bathroom count and type from free-text descriptions.

    Examples: '1 bath' -> (1.0, standard), '1.5 shared baths' -> (1.5, shared),
    'Half-bath' -> (0.5, standard), 'Private half-bath' -> (0.5, private).

    Args:
        s: pd.Series of bathrooms_text values

    Returns:
        pd.DataFrame with 'bathrooms' (float) and 'bathroom_type' columns,
        aligned on the input index
    """
    text = s.map(lambda v: v.strip().lower() if isinstance(v, str) else np.nan).astype(object)

    number = pd.to_numeric(text.str.extract(r'(\d+(?:\.\d+)?)', expand=False), errors='coerce')
    is_half = text.str.contains('half', na=False) & number.isna()
    bathrooms = number.mask(is_half, config.HALF_BATH_VALUE).astype(float)

    bathroom_type = pd.Series(
        np.where(text.str.contains('shared', na=False), 'shared',
                 np.where(text.str.contains('private', na=False), 'private', 'standard')),
        index=s.index,
        dtype=object,
    )
    bathroom_type = bathroom_type.where(text.notna(), np.nan)

    return pd.DataFrame({'bathrooms': bathrooms, 'bathroom_type': bathroom_type}, index=s.index)


def parse_percentage_series(s: pd.Series) -> pd.Series:
    """Convert '95%' style strings to fractions (0.95); 'N/A' -> NaN."""
    cleaned = s.astype(str).str.replace('%', '', regex=False).str.strip()
    return pd.to_numeric(cleaned, errors='coerce') / 100


def parse_boolean_series(s: pd.Series) -> pd.Series:
    """Map exported 't'/'f' (and true/false, yes/no, 1/0) flags to nullable booleans."""
    mapped = s.astype(str).str.strip().str.lower().map(config.BOOLEAN_MAP)
    return mapped.astype('boolean')


def clean_listings(df_listings):
    """
    Clean listings data: normalize columns, parse prices, bathrooms, host fields.

    Args:
        df_listings: Raw listings DataFrame

    Returns:
        Cleaned DataFrame and log info
    """
    log = []
    df_clean = normalize_columns(df_listings)

    # 1. Normalize column names
    log.append(f"✓ Column names normalized")

    # 2. Rename ID column
    if 'listing_id' not in df_clean.columns:
        if 'id' not in df_clean.columns:
            raise ValueError("'id' column not found in listings")
        df_clean.rename(columns={'id': 'listing_id'}, inplace=True)
        log.append(f"✓ Renamed 'id' to 'listing_id'")

    # 3. Ensure listing_id is int64
    df_clean['listing_id'] = pd.to_numeric(df_clean['listing_id'], errors='coerce')
    bad_ids = df_clean['listing_id'].isna().sum()
    if bad_ids > 0:
        df_clean = df_clean[df_clean['listing_id'].notna()]
        log.append(f"⚠️  Removed {bad_ids} listings with non-numeric id")
    df_clean['listing_id'] = df_clean['listing_id'].astype('int64')
    assert (df_clean['listing_id'] >= 0).all(), "Found negative listing_id!"
    log.append(f"✓ listing_id converted to int64 ({df_clean['listing_id'].nunique()} unique listings)")

    # 4. Parse price (MANDATORY)
    if 'price' not in df_clean.columns:
        raise ValueError("'price' column not found in listings")

    raw_price = df_clean['price']
    df_clean['price'] = parse_price_series(raw_price)
    price_not_null = df_clean['price'].notna().sum()
    if price_not_null == 0:
        raw_examples = raw_price.dropna().astype(str).head(10).tolist()
        raise ValueError(f"PRICE PARSING FAILED: 0 valid prices. Raw examples: {raw_examples}")
    log.append(f"✓ price: {price_not_null:,} prices parsed successfully")

    missing_price = df_clean['price'].isna().sum()
    if missing_price > 0:
        df_clean = df_clean[df_clean['price'].notna()]
        log.append(f"⚠️  Removed {missing_price} listings without a price")

    # 5. Remove price outliers
    before = len(df_clean)
    df_clean = df_clean[df_clean['price'].between(
        config.PRICE_OUTLIER_THRESHOLD_LOW, config.PRICE_OUTLIER_THRESHOLD_HIGH
    )]
    removed = before - len(df_clean)
    if removed > 0:
        log.append(f"⚠️  Removed {removed} listings with price outliers " +
                   f"(<{config.PRICE_OUTLIER_THRESHOLD_LOW} or >{config.PRICE_OUTLIER_THRESHOLD_HIGH})")
    else:
        log.append(f"✓ price: all values in range " +
                   f"{config.PRICE_OUTLIER_THRESHOLD_LOW}-{config.PRICE_OUTLIER_THRESHOLD_HIGH}")
    df_clean = df_clean.copy()

    # 6. Bathrooms: numeric column is empty in recent exports, text carries the value
    if 'bathrooms' in df_clean.columns:
        df_clean['bathrooms'] = pd.to_numeric(df_clean['bathrooms'], errors='coerce')
    if 'bathrooms_text' in df_clean.columns:
        parsed = parse_bathrooms_text(df_clean['bathrooms_text'])
        if 'bathrooms' in df_clean.columns:
            to_fill = df_clean['bathrooms'].isna() & parsed['bathrooms'].notna()
            df_clean['bathrooms'] = df_clean['bathrooms'].fillna(parsed['bathrooms'])
        else:
            to_fill = parsed['bathrooms'].notna()
            df_clean['bathrooms'] = parsed['bathrooms']
        df_clean['bathroom_type'] = parsed['bathroom_type']
        log.append(f"✓ bathrooms: {to_fill.sum():,} values extracted from bathrooms_text")

        unparsed = df_clean['bathrooms_text'].notna() & df_clean['bathrooms'].isna()
        if unparsed.sum() > 0:
            log.append(f"⚠️  {unparsed.sum()} bathrooms_text values without a number")

    # 7. Numeric columns
    for col in config.NUMERIC_COLUMNS:
        if col in df_clean.columns:
            df_clean[col] = pd.to_numeric(df_clean[col], errors='coerce')

    # 8. Host fields
    for col in config.PERCENT_COLUMNS:
        if col in df_clean.columns:
            df_clean[col] = parse_percentage_series(df_clean[col])
    for col in config.BOOLEAN_COLUMNS:
        if col in df_clean.columns:
            df_clean[col] = parse_boolean_series(df_clean[col])
    log.append(f"✓ Host percentage and boolean fields parsed")

    # 9. Dates
    for col in config.DATE_COLUMNS:
        if col in df_clean.columns:
            df_clean[col] = pd.to_datetime(df_clean[col], errors='coerce')

    # 10. room_type: strip only, keep export labels ('Entire home/apt', ...)
    if 'room_type' in df_clean.columns:
        df_clean['room_type'] = df_clean['room_type'].map(lambda v: v.strip() if isinstance(v, str) else np.nan)
        log.append(f"✓ room_type standardized ({df_clean['room_type'].nunique()} types)")

    # 11. Remove complete duplicates
    dup_count = df_clean.duplicated().sum()
    if dup_count > 0:
        log.append(f"⚠️  Removed {dup_count} duplicate listing rows")
        df_clean = df_clean.drop_duplicates()

    # 12. Remove duplicate listing_ids (keep first)
    duplicate_ids = df_clean['listing_id'].duplicated(keep='first').sum()
    if duplicate_ids > 0:
        log.append(f"⚠️  Removed {duplicate_ids} duplicate listing_ids (kept first occurrence)")
        df_clean = df_clean.drop_duplicates(subset=['listing_id'], keep='first')

    df_clean = df_clean.reset_index(drop=True)
    log.append(f"✓ Listings cleaning complete: {df_listings.shape} → {df_clean.shape}")

    return df_clean, log
