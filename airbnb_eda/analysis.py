"""
Analysis module: Derived subsets and descriptive tables relating price to listing attributes.
"""

import pandas as pd
import numpy as np
from scipy import stats
from . import config


def price_summary(df, by, price_col='price', min_count=1):
    """
    Descriptive price statistics per group.

    Args:
        df: Listings DataFrame
        by: Column name (or list of names) to group by
        price_col: Price column
        min_count: Drop groups with fewer listings

    Returns:
        DataFrame [by..., count, mean, median, std, q25, q75] sorted by median (desc)
    """
    by = [by] if isinstance(by, str) else list(by)
    missing = [c for c in by + [price_col] if c not in df.columns]
    if missing:
        raise ValueError(f"Columns not found: {missing}")

    grouped = df.dropna(subset=[price_col]).groupby(by, observed=True)[price_col]
    summary = grouped.agg(
        count='count',
        mean='mean',
        median='median',
        std='std',
        q25=lambda s: s.quantile(0.25),
        q75=lambda s: s.quantile(0.75),
    ).reset_index()

    summary = summary[summary['count'] >= min_count]
    return summary.sort_values('median', ascending=False).reset_index(drop=True)


def top_groups(df, by, n):
    """Labels of the n largest groups in column `by`."""
    return df[by].value_counts().head(n).index.tolist()


def add_price_features(df, price_col='price'):
    """Add log price and price per guest."""
    df = df.copy()
    df['log_price'] = np.log(df[price_col].where(df[price_col] > 0))
    if 'accommodates' in df.columns:
        df['price_per_person'] = df[price_col] / df['accommodates'].clip(lower=1)
    return df


def add_availability_bins(df, col='availability_365'):
    """Add ordered categorical 'availability_bin' from days available in the next year."""
    df = df.copy()
    df['availability_bin'] = pd.cut(
        df[col],
        bins=config.AVAILABILITY_BINS,
        labels=config.AVAILABILITY_LABELS,
        ordered=True,
    )
    return df


def add_host_features(df, reference_date=None):
    """
    Add host tenure, portfolio size bin and a superhost label.

    Args:
        df: Listings DataFrame (cleaned)
        reference_date: Date tenure is measured against; defaults to today
    """
    df = df.copy()
    reference_date = pd.Timestamp.now().normalize() if reference_date is None else pd.Timestamp(reference_date)

    if 'host_since' in df.columns:
        since = pd.to_datetime(df['host_since'], errors='coerce')
        df['host_tenure_years'] = (reference_date - since).dt.days / 365.25

    if 'host_listings_count' in df.columns:
        df['host_portfolio'] = pd.cut(
            df['host_listings_count'],
            bins=config.HOST_PORTFOLIO_BINS,
            labels=config.HOST_PORTFOLIO_LABELS,
            ordered=True,
        )

    if 'host_is_superhost' in df.columns:
        df['host_status'] = df['host_is_superhost'].map(
            {True: 'Superhost', False: 'Regular host'}
        ).astype(object)

    return df


def haversine_km(lat1, lon1, lat2, lon2):
    """Great-circle distance in km (vectorised)."""
    R = 6371
    lat1, lon1, lat2, lon2 = map(np.radians, [lat1, lon1, lat2, lon2])
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = np.sin(dlat/2)**2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlon/2)**2
    c = 2 * np.arcsin(np.sqrt(a))
    return R * c


def city_centre(df):
    """Configured city centre, or the median listing coordinate."""
    if config.CITY_CENTRE is not None:
        return config.CITY_CENTRE
    return float(df['latitude'].median()), float(df['longitude'].median())


def add_distance_to_centre(df, centre=None):
    """Add 'dist_centre_km' from each listing to the city centre (lat, lon)."""
    if 'latitude' not in df.columns or 'longitude' not in df.columns:
        raise ValueError("'latitude' and 'longitude' columns required")

    df = df.copy()
    centre_lat, centre_lon = city_centre(df) if centre is None else centre
    df['dist_centre_km'] = haversine_km(df['latitude'], df['longitude'], centre_lat, centre_lon)
    return df


def _as_numeric(s):
    if pd.api.types.is_bool_dtype(s):
        return s.map({True: 1.0, False: 0.0}).astype(float)
    return pd.to_numeric(s, errors='coerce')


def price_correlations(df, columns, price_col='price'):
    """
    Spearman rank correlation of each column with price.

    Columns that are absent, constant or have fewer than 3 complete pairs are skipped.

    Returns:
        DataFrame [variable, rho, p_value, n] sorted by |rho| (desc)
    """
    rows = []
    price = pd.to_numeric(df[price_col], errors='coerce')
    for col in columns:
        if col not in df.columns or col == price_col:
            continue
        x = _as_numeric(df[col])
        mask = x.notna() & price.notna()
        if mask.sum() < 3 or x[mask].nunique() < 2 or price[mask].nunique() < 2:
            continue
        rho, p_value = stats.spearmanr(x[mask], price[mask])
        rows.append({'variable': col, 'rho': float(rho), 'p_value': float(p_value), 'n': int(mask.sum())})

    result = pd.DataFrame(rows, columns=['variable', 'rho', 'p_value', 'n'])
    order = result['rho'].abs().sort_values(ascending=False).index
    return result.loc[order].reset_index(drop=True)
