#!/usr/bin/env python
"""
05_price_host.py
- Price by superhost status, response time and host portfolio size
- Price vs host tenure
- Spearman correlation of listing/host attributes with price
Outputs: reports/figures/*.png, outputs/tables/price_by_host.csv, price_correlations.csv
"""

from pathlib import Path
import sys

import pandas as pd

REPO_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(REPO_ROOT))

from airbnb_eda import config, io, analysis, plots

HOST_GROUPS = ['host_status', 'host_response_time', 'host_portfolio', 'host_identity_verified']

CORRELATION_COLUMNS = [
    'accommodates', 'bedrooms', 'beds', 'bathrooms', 'amenities_count',
    'availability_365', 'minimum_nights', 'number_of_reviews', 'reviews_per_month',
    'review_scores_rating', 'review_scores_location', 'dist_centre_km',
    'host_is_superhost', 'host_response_rate', 'host_acceptance_rate',
    'host_listings_count', 'host_tenure_years', 'host_identity_verified',
]


def main():
    config.setup_logging()
    config.ensure_output_dirs()
    plots.set_plot_style()

    print("=" * 80)
    print("PRICE vs HOST ATTRIBUTES")
    print("=" * 80)

    df = io.load_parquet(config.OUTPUT_FILES['listings_clean'])
    if 'host_status' not in df.columns:
        df = analysis.add_host_features(df)

    tables = []
    for col in HOST_GROUPS:
        if col not in df.columns or df[col].notna().sum() == 0:
            continue
        data = df
        if pd.api.types.is_bool_dtype(df[col]):
            data = df.assign(**{col: df[col].map({True: 'Yes', False: 'No'}).astype(object)})
        summary = analysis.price_summary(data, col).rename(columns={col: 'group'})
        summary.insert(0, 'attribute', col)
        tables.append(summary)

        path = io.save_figure(plots.price_boxplot(data, col, horizontal=False), f"price_by_{col}")
        print(f"✓ Saved: {path}")

    if tables:
        host_table = pd.concat(tables, ignore_index=True)
        host_table['group'] = host_table['group'].astype(str)
        path = io.save_csv(host_table, config.OUTPUT_FILES['price_by_host'])
        print(f"\n✓ Saved: {path}")
        print(host_table.to_string(index=False))

    if 'host_tenure_years' in df.columns:
        fig = plots.price_scatter(df, 'host_tenure_years', sample=config.SCATTER_SAMPLE_SIZE, log_price=True)
        path = io.save_figure(fig, "price_vs_host_tenure")
        print(f"\n✓ Saved: {path}")

    corr = analysis.price_correlations(df, CORRELATION_COLUMNS)
    path = io.save_csv(corr, config.OUTPUT_FILES['price_correlations'])
    print(f"\n✓ Saved: {path}")
    print(corr.to_string(index=False))
    if not corr.empty:
        path = io.save_figure(plots.correlation_bar(corr), "price_correlations")
        print(f"✓ Saved: {path}")

    print("\n" + "=" * 80)
    print("✓ HOST ANALYSIS COMPLETE")
    print("=" * 80)


if __name__ == "__main__":
    main()
