"""
Plots module: Boxplots, histograms, scatterplots and bar charts of price against listing attributes.

Every function returns a matplotlib Figure; save it with io.save_figure().
"""

import pandas as pd
import numpy as np
import matplotlib.pyplot as plt
import seaborn as sns
from . import config


def set_plot_style():
    """Apply the project seaborn theme."""
    sns.set_style(config.PLOT_STYLE)
    sns.set_palette(config.PLOT_PALETTE)
    plt.rcParams['figure.figsize'] = (12, 6)
    plt.rcParams['font.size'] = 10


def _require(df, columns):
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ValueError(f"Columns not found: {missing}")
    data = df.dropna(subset=columns)
    if data.empty:
        raise ValueError(f"No rows with {columns} to plot")
    return data


def _style_axes(ax, xlabel, ylabel, title):
    ax.set_xlabel(xlabel, fontsize=11)
    ax.set_ylabel(ylabel, fontsize=11)
    ax.set_title(title, fontsize=12, fontweight='bold')
    ax.grid(alpha=0.3)


def _group_order(data, by, price_col):
    """Ordered categoricals keep their order; anything else sorts by median price."""
    dtype = data[by].dtype
    if isinstance(dtype, pd.CategoricalDtype) and dtype.ordered:
        present = set(data[by].dropna().unique())
        return [c for c in dtype.categories if c in present]
    medians = data.groupby(by, observed=True)[price_col].median().sort_values(ascending=False)
    return medians.index.tolist()


def price_histogram(df, price_col='price', log_scale=False, bins=50):
    """Distribution of nightly price, with the median marked."""
    data = _require(df, [price_col])
    fig, ax = plt.subplots(figsize=(12, 6))

    sns.histplot(data[price_col], bins=bins, log_scale=log_scale, edgecolor='black', alpha=0.7, ax=ax)
    median = data[price_col].median()
    ax.axvline(median, color='r', linestyle='--', linewidth=2, label=f'Median: {median:,.0f}')
    ax.legend()

    scale = ' (log scale)' if log_scale else ''
    _style_axes(ax, f'Price per night{scale}', 'Listings', f'Distribution of Listing Prices{scale}')
    fig.tight_layout()
    return fig


def price_boxplot(df, by, price_col='price', order=None, top_n=None, showfliers=False, horizontal=None):
    """
    Price distribution per group.

    Args:
        df: Listings DataFrame
        by: Grouping column (neighbourhood, room type, availability bin, ...)
        order: Explicit group order; default is ordered categories or median price (desc)
        top_n: Keep only the n largest groups
        showfliers: Draw outlier points
        horizontal: Draw groups on the y axis; default when there are more than 6 groups
    """
    data = _require(df, [by, price_col])
    if top_n is not None:
        keep = data[by].value_counts().head(top_n).index
        data = data[data[by].isin(keep)]

    order = _group_order(data, by, price_col) if order is None else order
    horizontal = len(order) > 6 if horizontal is None else horizontal

    height = max(6, 0.4 * len(order)) if horizontal else 6
    fig, ax = plt.subplots(figsize=(12, height))
    if horizontal:
        sns.boxplot(data=data, x=price_col, y=by, order=order, showfliers=showfliers, color='C0', ax=ax)
        _style_axes(ax, 'Price per night', by.replace('_', ' ').title(), f'Price by {by.replace("_", " ")}')
    else:
        sns.boxplot(data=data, x=by, y=price_col, order=order, showfliers=showfliers, color='C0', ax=ax)
        _style_axes(ax, by.replace('_', ' ').title(), 'Price per night', f'Price by {by.replace("_", " ")}')
        if max(len(str(o)) for o in order) > 12:
            ax.tick_params(axis='x', labelrotation=30)

    fig.tight_layout()
    return fig


def price_scatter(df, x, price_col='price', hue=None, sample=None, log_price=False):
    """Price against a numeric attribute; optionally a reproducible random sample."""
    columns = [x, price_col] + ([hue] if hue else [])
    data = _require(df, columns)
    if sample is not None and len(data) > sample:
        data = data.sample(n=sample, random_state=config.RANDOM_SEED)

    fig, ax = plt.subplots(figsize=(12, 6))
    sns.scatterplot(data=data, x=x, y=price_col, hue=hue, alpha=0.4, s=20, linewidth=0, ax=ax)
    if log_price:
        ax.set_yscale('log')

    _style_axes(ax, x.replace('_', ' ').title(), 'Price per night', f'Price vs {x.replace("_", " ")}')
    fig.tight_layout()
    return fig


def amenity_frequency_bar(freq_df, top_n=None):
    """Share of listings offering each of the most common amenities."""
    top_n = config.TOP_AMENITIES if top_n is None else top_n
    data = freq_df.head(top_n).iloc[::-1]
    if data.empty:
        raise ValueError("No amenities to plot")

    fig, ax = plt.subplots(figsize=(12, max(6, 0.35 * len(data))))
    ax.barh(data['amenity'], data['share'] * 100, color='C0', edgecolor='black', alpha=0.8)
    _style_axes(ax, '% of listings', '', f'Top {len(data)} Amenities')
    fig.tight_layout()
    return fig


def amenity_price_bar(price_by_amenity_df):
    """Median price difference between listings with and without each amenity."""
    data = price_by_amenity_df.dropna(subset=['median_diff']).iloc[::-1]
    if data.empty:
        raise ValueError("No amenity price differences to plot")

    colors = np.where(data['median_diff'] >= 0, 'tab:green', 'tab:red')
    fig, ax = plt.subplots(figsize=(12, max(6, 0.35 * len(data))))
    ax.barh(data['amenity'], data['median_diff'], color=colors, edgecolor='black', alpha=0.8)
    ax.axvline(0, color='black', linewidth=1)
    _style_axes(ax, 'Median price with − without amenity', '', 'Price Premium by Amenity')
    fig.tight_layout()
    return fig


def correlation_bar(corr_df):
    """Spearman correlation of each attribute with price."""
    data = corr_df.iloc[::-1]
    if data.empty:
        raise ValueError("No correlations to plot")

    colors = np.where(data['rho'] >= 0, 'tab:blue', 'tab:orange')
    fig, ax = plt.subplots(figsize=(10, max(5, 0.4 * len(data))))
    ax.barh(data['variable'], data['rho'], color=colors, edgecolor='black', alpha=0.8)
    ax.axvline(0, color='black', linewidth=1)
    ax.set_xlim(-1, 1)
    _style_axes(ax, 'Spearman rho', '', 'Correlation with Price')
    fig.tight_layout()
    return fig
