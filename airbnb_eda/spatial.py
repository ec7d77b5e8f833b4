"""
Spatial module: Listing points, neighbourhood join and aggregation, price map.
"""

import pandas as pd
import geopandas as gpd
import numpy as np
import matplotlib.pyplot as plt
from . import config


def listings_to_geodataframe(df_listings):
    """
    Convert listings DataFrame with lat/lon to GeoDataFrame with Point geometries.

    Args:
        df_listings: DataFrame with 'latitude' and 'longitude' columns

    Returns:
        GeoDataFrame with Point geometries in EPSG:4326 and log info
    """
    log = []

    # Check required columns
    if 'latitude' not in df_listings.columns or 'longitude' not in df_listings.columns:
        raise ValueError("'latitude' and 'longitude' columns required")

    df_valid = df_listings.dropna(subset=['latitude', 'longitude'])
    removed = len(df_listings) - len(df_valid)
    if removed > 0:
        log.append(f"⚠️  Removed {removed} listings with missing coordinates")

    gdf = gpd.GeoDataFrame(
        df_valid.copy(),
        geometry=gpd.points_from_xy(df_valid['longitude'], df_valid['latitude']),
        crs=config.CRS_WEB,
    )

    log.append(f"✓ Created Point geometries for {len(gdf)} listings (CRS: {config.CRS_WEB})")

    return gdf, log


def clean_neighbourhoods(gdf_neighbourhoods):
    """
    Validate and clean neighbourhood geometries.

    Args:
        gdf_neighbourhoods: Neighbourhood GeoDataFrame

    Returns:
        Cleaned GeoDataFrame and log info
    """
    log = []
    gdf_clean = gdf_neighbourhoods.copy()

    # 1. Check CRS
    if gdf_clean.crs is None:
        log.append(f"⚠️  CRS missing; assuming {config.CRS_WEB}")
        gdf_clean = gdf_clean.set_crs(config.CRS_WEB)
    elif gdf_clean.crs != config.CRS_WEB:
        log.append(f"⚠️  CRS {gdf_clean.crs} → converting to {config.CRS_WEB}")
        gdf_clean = gdf_clean.to_crs(config.CRS_WEB)
    else:
        log.append(f"✓ CRS: {gdf_clean.crs}")

    # 2. Drop empty geometries (Inside Airbnb ships a few)
    empty = (gdf_clean.geometry.isna() | gdf_clean.geometry.is_empty).sum()
    if empty > 0:
        gdf_clean = gdf_clean[gdf_clean.geometry.notna() & ~gdf_clean.geometry.is_empty]
        log.append(f"⚠️  Dropped {empty} empty geometries")

    # 3. Validate geometries
    invalid_before = (~gdf_clean.geometry.is_valid).sum()
    if invalid_before > 0:
        log.append(f"⚠️  Found {invalid_before} invalid geometries; repairing...")
        gdf_clean.geometry = gdf_clean.geometry.buffer(0)
        invalid_after = (~gdf_clean.geometry.is_valid).sum()
        log.append(f"   → After repair: {invalid_after} invalid (target: 0)")
        assert invalid_after == 0, "Failed to repair geometries!"
    else:
        log.append(f"✓ All geometries are valid")

    log.append(f"✓ Neighbourhood cleaning complete ({len(gdf_clean)} polygons)")

    return gdf_clean.reset_index(drop=True), log


def spatial_join_listings_neighbourhoods(gdf_listings, gdf_neighbourhoods):
    """
    Assign listings to neighbourhoods via spatial join (point-in-polygon).

    Args:
        gdf_listings: Listings GeoDataFrame (Points, EPSG:4326)
        gdf_neighbourhoods: Neighbourhoods GeoDataFrame (Polygons)

    Returns:
        GeoDataFrame with 'neighbourhood_idx' column added and log info
    """
    log = []

    # Ensure same CRS
    if gdf_listings.crs != gdf_neighbourhoods.crs:
        log.append(f"⚠️  CRS mismatch; reprojecting listings to {gdf_neighbourhoods.crs}")
        gdf_listings = gdf_listings.to_crs(gdf_neighbourhoods.crs)

    gdf_neigh_indexed = gdf_neighbourhoods[['geometry']].copy().reset_index(drop=True)
    gdf_neigh_indexed['neighbourhood_idx'] = np.arange(len(gdf_neigh_indexed))

    gdf_joined = gpd.sjoin(
        gdf_listings,
        gdf_neigh_indexed,
        how='left',
        predicate=config.SPATIAL_JOIN_PREDICATE,
    )

    # If nothing matched, try with 'intersects'
    if gdf_joined['neighbourhood_idx'].notna().sum() == 0:
        log.append(f"⚠️  No matches with '{config.SPATIAL_JOIN_PREDICATE}'; trying 'intersects'...")
        gdf_joined = gpd.sjoin(
            gdf_listings,
            gdf_neigh_indexed,
            how='left',
            predicate='intersects',
        )

    # Points on a shared border match twice
    gdf_joined = gdf_joined[~gdf_joined.index.duplicated(keep='first')]
    gdf_joined = gdf_joined.drop(columns=['index_right'], errors='ignore')

    total = len(gdf_joined)
    matched = gdf_joined['neighbourhood_idx'].notna().sum()
    coverage = (matched / total * 100) if total > 0 else 0

    log.append(f"✓ Spatial join complete:")
    log.append(f"  - Total listings: {total:,}")
    log.append(f"  - Matched to neighbourhood: {matched:,} ({coverage:.1f}%)")

    if coverage < config.MIN_SPATIAL_JOIN_COVERAGE * 100:
        log.append(f"⚠️  Coverage {coverage:.1f}% below threshold {config.MIN_SPATIAL_JOIN_COVERAGE*100:.1f}%")

    return gdf_joined, log


def neighbourhood_price_summary(gdf_joined, gdf_neighbourhoods, name_col='neighbourhood', price_col='price'):
    """
    Aggregate listing prices to neighbourhood polygons.

    Args:
        gdf_joined: Output of spatial_join_listings_neighbourhoods
        gdf_neighbourhoods: Neighbourhood polygons (same order as used in the join)
        name_col: Neighbourhood name column; must be unique per polygon
        price_col: Price column

    Returns:
        Neighbourhood GeoDataFrame with n_listings, price_median, price_mean,
        one row per name_col
    """
    if name_col not in gdf_neighbourhoods.columns:
        raise ValueError(f"'{name_col}' column not found in neighbourhoods")
    duplicated = gdf_neighbourhoods[name_col].duplicated().sum()
    if duplicated > 0:
        raise ValueError(f"{duplicated} duplicate {name_col} values in neighbourhoods")

    matched = gdf_joined[gdf_joined['neighbourhood_idx'].notna()]
    agg = (
        matched.groupby('neighbourhood_idx')[price_col]
        .agg(n_listings='count', price_median='median', price_mean='mean')
        .reset_index()
    )
    agg['neighbourhood_idx'] = agg['neighbourhood_idx'].astype('int64')

    gdf_enriched = gdf_neighbourhoods.copy().reset_index(drop=True)
    gdf_enriched['neighbourhood_idx'] = np.arange(len(gdf_enriched))
    gdf_enriched = gdf_enriched.merge(agg, on='neighbourhood_idx', how='left')

    # Neighbourhoods without listings
    gdf_enriched['n_listings'] = gdf_enriched['n_listings'].fillna(0).astype('int64')

    return gdf_enriched


def price_map(gdf_points, gdf_neighbourhoods=None, price_col='price', quantiles=4):
    """
    Map of listings coloured by price quantile, over neighbourhood boundaries if given.

    Returns:
        matplotlib Figure
    """
    points = gdf_points.dropna(subset=[price_col])
    if points.empty:
        raise ValueError("No listings with price to map")

    quantiles = min(quantiles, len(points))
    labels = [f'Q{i + 1}' for i in range(quantiles)]
    points = points.assign(price_quantile=pd.qcut(
        points[price_col].rank(method='first'), q=quantiles, labels=labels
    ))

    fig, ax = plt.subplots(figsize=(12, 12))
    if gdf_neighbourhoods is not None:
        gdf_neighbourhoods.to_crs(points.crs).boundary.plot(ax=ax, color='grey', linewidth=0.5)

    points.plot(
        ax=ax,
        column='price_quantile',
        categorical=True,
        cmap='RdYlBu_r',
        markersize=4,
        alpha=0.6,
        legend=True,
        legend_kwds={'title': 'Price quantile'},
    )

    ax.set_xlabel('Longitude', fontsize=11)
    ax.set_ylabel('Latitude', fontsize=11)
    ax.set_title('Listings by Price Quantile', fontsize=12, fontweight='bold')
    ax.grid(alpha=0.3)
    fig.tight_layout()
    return fig
