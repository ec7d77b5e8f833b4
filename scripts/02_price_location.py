#!/usr/bin/env python
"""
02_price_location.py
- Price distribution (raw + log scale)
- Price by neighbourhood, neighbourhood group and room type
- Price vs distance to the city centre
Outputs: reports/figures/*.png, outputs/tables/price_by_*.csv
"""

from pathlib import Path
import sys

REPO_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(REPO_ROOT))

from airbnb_eda import config, io, analysis, plots


def main():
    config.setup_logging()
    config.ensure_output_dirs()
    plots.set_plot_style()

    print("=" * 80)
    print("PRICE vs LOCATION")
    print("=" * 80)

    df = io.load_parquet(config.OUTPUT_FILES['listings_clean'])
    print(f"\n[DATA] {len(df):,} cleaned listings")
    print(f"\nPrice per night:")
    print(f"  Min:    {df['price'].min():,.2f}")
    print(f"  Median: {df['price'].median():,.2f}")
    print(f"  Max:    {df['price'].max():,.2f}")

    # Distribution
    path = io.save_figure(plots.price_histogram(df), "price_histogram")
    print(f"\n✓ Saved: {path}")
    path = io.save_figure(plots.price_histogram(df, log_scale=True), "price_histogram_log")
    print(f"✓ Saved: {path}")

    # Neighbourhoods
    if 'neighbourhood_cleansed' in df.columns:
        summary = analysis.price_summary(df, 'neighbourhood_cleansed', min_count=10)
        path = io.save_csv(summary, config.OUTPUT_FILES['price_by_neighbourhood'])
        print(f"✓ Saved: {path}")
        print("\nMost expensive neighbourhoods (median):")
        print(summary.head(10).to_string(index=False))

        fig = plots.price_boxplot(df, 'neighbourhood_cleansed', top_n=config.TOP_NEIGHBOURHOODS)
        path = io.save_figure(fig, "price_by_neighbourhood")
        print(f"✓ Saved: {path}")

    if 'neighbourhood_group_cleansed' in df.columns and df['neighbourhood_group_cleansed'].notna().any():
        path = io.save_figure(plots.price_boxplot(df, 'neighbourhood_group_cleansed'), "price_by_neighbourhood_group")
        print(f"✓ Saved: {path}")

    # Room type
    if 'room_type' in df.columns:
        summary = analysis.price_summary(df, 'room_type')
        path = io.save_csv(summary, config.OUTPUT_FILES['price_by_room_type'])
        print(f"\n✓ Saved: {path}")
        print(summary.to_string(index=False))
        path = io.save_figure(plots.price_boxplot(df, 'room_type'), "price_by_room_type")
        print(f"✓ Saved: {path}")

    # Distance to centre
    if 'dist_centre_km' in df.columns:
        fig = plots.price_scatter(
            df, 'dist_centre_km',
            hue='room_type' if 'room_type' in df.columns else None,
            sample=config.SCATTER_SAMPLE_SIZE,
            log_price=True,
        )
        path = io.save_figure(fig, "price_vs_distance_centre")
        print(f"\n✓ Saved: {path}")

    print("\n" + "=" * 80)
    print("✓ LOCATION ANALYSIS COMPLETE")
    print("=" * 80)


if __name__ == "__main__":
    main()
