#!/usr/bin/env python
"""
03_price_availability.py
- Price by availability over the next 365 days (binned)
- Price vs availability_365 and minimum nights
Outputs: reports/figures/*.png, outputs/tables/price_by_availability.csv
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
    print("PRICE vs AVAILABILITY")
    print("=" * 80)

    df = io.load_parquet(config.OUTPUT_FILES['listings_clean'])
    if 'availability_365' not in df.columns:
        print("⚠️  availability_365 not in cleaned listings; nothing to do")
        return

    if 'availability_bin' not in df.columns:
        df = analysis.add_availability_bins(df)

    summary = analysis.price_summary(df, 'availability_bin')
    path = io.save_csv(summary, config.OUTPUT_FILES['price_by_availability'])
    print(f"\n✓ Saved: {path}")
    print(summary.to_string(index=False))

    path = io.save_figure(plots.price_boxplot(df, 'availability_bin'), "price_by_availability")
    print(f"✓ Saved: {path}")

    fig = plots.price_scatter(df, 'availability_365', sample=config.SCATTER_SAMPLE_SIZE, log_price=True)
    path = io.save_figure(fig, "price_vs_availability_365")
    print(f"✓ Saved: {path}")

    if 'minimum_nights' in df.columns:
        short = df[df['minimum_nights'] <= 30]
        fig = plots.price_scatter(short, 'minimum_nights', sample=config.SCATTER_SAMPLE_SIZE, log_price=True)
        path = io.save_figure(fig, "price_vs_minimum_nights")
        print(f"✓ Saved: {path}")

    corr = analysis.price_correlations(
        df, ['availability_30', 'availability_60', 'availability_90', 'availability_365', 'minimum_nights']
    )
    print("\nSpearman correlation with price:")
    print(corr.to_string(index=False))

    print("\n" + "=" * 80)
    print("✓ AVAILABILITY ANALYSIS COMPLETE")
    print("=" * 80)


if __name__ == "__main__":
    main()
