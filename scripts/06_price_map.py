#!/usr/bin/env python
"""
06_price_map.py
- Listings as points coloured by price quantile
- If data/original/neighbourhoods.geojson exists: join listings to polygons,
  aggregate median price per neighbourhood, draw boundaries
Outputs: reports/figures/price_map.png, data/processed/neighbourhoods_price.geojson
"""

from pathlib import Path
import sys

REPO_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(REPO_ROOT))

from airbnb_eda import config, io, spatial, qc


def main():
    config.setup_logging()
    config.ensure_output_dirs()

    print("\n" + "=" * 80)
    print("SPATIAL VISUALIZATION: Listings by Price")
    print("=" * 80)

    print("\n[1/3] Loading data...")
    df = io.load_parquet(config.OUTPUT_FILES['listings_clean'])
    gdf_points, log = spatial.listings_to_geodataframe(df)
    for line in log:
        print(f"  {line}")

    gdf_neigh = None
    neigh_path = config.INPUT_FILES['neighbourhoods']
    if neigh_path.exists():
        gdf_neigh, log = spatial.clean_neighbourhoods(io.load_geojson(neigh_path))
        for line in log:
            print(f"  {line}")
    else:
        print(f"  ⚠️  {neigh_path.name} not found; mapping points only")

    if gdf_neigh is not None:
        print("\n[2/3] Neighbourhood aggregation...")
        gdf_joined, log = spatial.spatial_join_listings_neighbourhoods(gdf_points, gdf_neigh)
        for line in log:
            print(f"  {line}")

        qc.print_qc_report([
            ("Neighbourhood geometries", qc.check_geometry_validity, {'gdf': gdf_neigh}),
            ("Neighbourhood CRS", qc.check_crs, {'gdf': gdf_neigh}),
            ("Spatial join coverage", qc.check_spatial_join_coverage, {'gdf_joined': gdf_joined}),
        ])

        gdf_price = spatial.neighbourhood_price_summary(gdf_joined, gdf_neigh, name_col='neighbourhood')
        path = io.save_geojson(gdf_price, config.OUTPUT_FILES['neighbourhoods_price'])
        print(f"  ✓ Saved: {path}")

        cols = [c for c in ['neighbourhood', 'neighbourhood_group'] if c in gdf_price.columns]
        top = gdf_price.sort_values('price_median', ascending=False)[cols + ['n_listings', 'price_median']]
        print("\nMost expensive neighbourhoods (median):")
        print(top.head(10).to_string(index=False))
    else:
        print("\n[2/3] Neighbourhood aggregation skipped")

    print("\n[3/3] Rendering map...")
    path = io.save_figure(spatial.price_map(gdf_points, gdf_neigh), "price_map")
    print(f"  ✓ Saved: {path}")

    print("\n" + "=" * 80)
    print("✓ MAP COMPLETE")
    print("=" * 80)


if __name__ == "__main__":
    main()
