#!/usr/bin/env python
"""
04_price_amenities.py
- Amenity frequency across listings
- Median price with vs without the most common amenities
- Price by amenity category (partial-string matched)
Outputs: reports/figures/*.png, outputs/tables/amenity_*.csv, price_by_amenity*.csv
"""

from pathlib import Path
import sys

REPO_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(REPO_ROOT))

from airbnb_eda import config, io, amenities, plots


def main():
    config.setup_logging()
    config.ensure_output_dirs()
    plots.set_plot_style()

    print("=" * 80)
    print("PRICE vs AMENITIES")
    print("=" * 80)

    df = io.load_parquet(config.OUTPUT_FILES['listings_clean'])
    long_path = config.OUTPUT_FILES['listing_amenities']
    if long_path.exists():
        df_amenities = io.load_parquet(long_path)
    else:
        df_amenities = amenities.explode_amenities(df)
    print(f"\n[DATA] {len(df):,} listings, {len(df_amenities):,} (listing, amenity) rows, "
          f"{df_amenities['amenity'].nunique():,} distinct amenities")

    # Frequency
    freq = amenities.amenity_frequency(df_amenities, df['listing_id'].nunique())
    path = io.save_csv(freq, config.OUTPUT_FILES['amenity_frequency'])
    print(f"\n✓ Saved: {path}")
    print(freq.head(config.TOP_AMENITIES).to_string(index=False))
    path = io.save_figure(plots.amenity_frequency_bar(freq), "amenity_frequency")
    print(f"✓ Saved: {path}")

    # With vs without
    premium = amenities.price_by_amenity(df, df_amenities)
    path = io.save_csv(premium, config.OUTPUT_FILES['price_by_amenity'])
    print(f"\n✓ Saved: {path}")
    print(premium.to_string(index=False))
    if not premium.empty:
        path = io.save_figure(plots.amenity_price_bar(premium), "price_by_amenity")
        print(f"✓ Saved: {path}")

    # Categories
    if not any(c.startswith('has_') for c in df.columns):
        df = amenities.add_amenity_features(df)
    categories = amenities.category_price_summary(df)
    path = io.save_csv(categories, config.OUTPUT_FILES['price_by_amenity_category'])
    print(f"\n✓ Saved: {path}")

    for category in config.AMENITY_CATEGORIES:
        col = f'has_{category}'
        if df[col].nunique() < 2:
            continue
        labelled = df.assign(**{col: df[col].map({True: 'With', False: 'Without'})})
        fig = plots.price_boxplot(labelled, col, order=['With', 'Without'], horizontal=False)
        path = io.save_figure(fig, f"price_by_{col}")
        print(f"✓ Saved: {path}")

    path = io.save_figure(plots.price_scatter(df, 'amenities_count', sample=config.SCATTER_SAMPLE_SIZE,
                                              log_price=True), "price_vs_amenities_count")
    print(f"✓ Saved: {path}")

    print("\n" + "=" * 80)
    print("✓ AMENITIES ANALYSIS COMPLETE")
    print("=" * 80)


if __name__ == "__main__":
    main()
