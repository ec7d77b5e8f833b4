"""
Amenities module: Parse amenity lists, explode to (listing, amenity) rows, match categories.
"""

import ast
import csv
import json
import re

import pandas as pd
import numpy as np
from . import config

UNICODE_ESCAPE = re.compile(r'\\u([0-9a-fA-F]{4})')


def _decode_unicode_escapes(text):
    """Turn literal '\\u2013' sequences left by the brace format into characters."""
    return UNICODE_ESCAPE.sub(lambda m: chr(int(m.group(1), 16)), text)


def parse_amenities(value):
    """
    Parse one amenities cell into a list of amenity names.

    Accepts the current JSON export ('["Wifi", "Kitchen"]'), the older brace
    format ('{TV,"Air conditioning"}') and already-parsed lists.

    Returns:
        list of stripped, de-duplicated amenity strings (order kept)
    """
    if isinstance(value, (list, tuple, set, np.ndarray)):
        items = list(value)
    elif not isinstance(value, str):
        return []
    else:
        raw = value.strip()
        if not raw or raw in ('[]', '{}'):
            return []

        items = None
        if raw.startswith('['):
            try:
                items = json.loads(raw)
            except json.JSONDecodeError:
                try:
                    items = ast.literal_eval(raw)
                except (ValueError, SyntaxError):
                    items = None

        if not isinstance(items, list):
            content = raw.strip('[]{}')
            items = next(csv.reader([content], skipinitialspace=True), [])
            items = [_decode_unicode_escapes(item) for item in items]

    cleaned = [str(item).strip().strip('"\'').strip() for item in items if item is not None]
    return list(dict.fromkeys(item for item in cleaned if item))


def match_amenity_category(amenity, categories=None):
    """Return the first category whose keyword is a substring of the amenity, else 'other'."""
    categories = config.AMENITY_CATEGORIES if categories is None else categories
    name = str(amenity).lower()
    for category, keywords in categories.items():
        if any(keyword in name for keyword in keywords):
            return category
    return 'other'


def explode_amenities(df, id_col='listing_id', categories=None):
    """
    Denormalize the amenities field into one row per (listing, amenity).

    Args:
        df: Listings DataFrame with id_col and 'amenities'
        id_col: Listing identifier column
        categories: Optional category -> keywords mapping

    Returns:
        DataFrame with columns [id_col, 'amenity', 'category']
    """
    if 'amenities' not in df.columns or id_col not in df.columns:
        raise ValueError(f"'{id_col}' and 'amenities' columns required")

    long_df = pd.DataFrame({
        id_col: df[id_col].values,
        'amenity': df['amenities'].map(parse_amenities).values,
    })
    long_df = long_df.explode('amenity')
    # empty lists explode to NaN
    long_df = long_df[long_df['amenity'].notna()].reset_index(drop=True)
    long_df['amenity'] = long_df['amenity'].astype(str)
    long_df['category'] = long_df['amenity'].map(lambda a: match_amenity_category(a, categories))

    return long_df


def add_amenity_features(df, categories=None):
    """Add 'amenities_count' and one boolean 'has_<category>' column per category."""
    categories = config.AMENITY_CATEGORIES if categories is None else categories
    df = df.copy()

    parsed = df['amenities'].map(parse_amenities)
    df['amenities_count'] = parsed.map(len).astype('int64')

    matched = parsed.map(lambda items: {match_amenity_category(a, categories) for a in items})
    for category in categories:
        df[f'has_{category}'] = matched.map(lambda found: category in found).astype(bool)

    return df


def amenity_frequency(long_df, n_listings, id_col='listing_id'):
    """Number and share of listings offering each amenity, most common first."""
    freq = (
        long_df.groupby('amenity')
        .agg(n_listings=(id_col, 'nunique'), category=('category', 'first'))
        .reset_index()
    )
    freq['share'] = freq['n_listings'] / n_listings if n_listings else np.nan
    freq = freq.sort_values(['n_listings', 'amenity'], ascending=[False, True])
    return freq.reset_index(drop=True)[['amenity', 'category', 'n_listings', 'share']]


def price_by_amenity(df, long_df, top_n=None, min_listings=None, price_col='price', id_col='listing_id'):
    """
    Compare median price of listings with and without each common amenity.

    Returns:
        DataFrame [amenity, category, n_with, n_without, median_with,
        median_without, median_diff] sorted by median_diff (desc)
    """
    top_n = config.TOP_AMENITIES if top_n is None else top_n
    min_listings = config.AMENITY_MIN_LISTINGS if min_listings is None else min_listings

    freq = amenity_frequency(long_df, df[id_col].nunique(), id_col=id_col)
    freq = freq[freq['n_listings'] >= min_listings].head(top_n)

    rows = []
    for amenity, category in zip(freq['amenity'], freq['category']):
        ids = long_df.loc[long_df['amenity'] == amenity, id_col].unique()
        has = df[id_col].isin(ids)
        rows.append({
            'amenity': amenity,
            'category': category,
            'n_with': int(has.sum()),
            'n_without': int((~has).sum()),
            'median_with': df.loc[has, price_col].median(),
            'median_without': df.loc[~has, price_col].median(),
        })

    columns = ['amenity', 'category', 'n_with', 'n_without', 'median_with', 'median_without']
    result = pd.DataFrame(rows, columns=columns)
    result['median_diff'] = result['median_with'] - result['median_without']
    return result.sort_values('median_diff', ascending=False).reset_index(drop=True)


def category_price_summary(df, price_col='price'):
    """Price count/median/mean for listings with and without each amenity category."""
    flag_cols = [c for c in df.columns if c.startswith('has_')]
    rows = []
    for col in flag_cols:
        for flag, group in df.groupby(col)[price_col]:
            rows.append({
                'category': col[len('has_'):],
                'has_amenity': bool(flag),
                'count': int(group.count()),
                'median': group.median(),
                'mean': group.mean(),
            })
    return pd.DataFrame(rows, columns=['category', 'has_amenity', 'count', 'median', 'mean'])
