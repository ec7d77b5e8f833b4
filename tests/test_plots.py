import matplotlib.pyplot as plt
import pytest
from matplotlib.figure import Figure

from airbnb_eda import amenities, analysis, plots


@pytest.fixture(autouse=True)
def close_figures():
    plots.set_plot_style()
    yield
    plt.close("all")


@pytest.fixture
def featured(listings):
    df = analysis.add_availability_bins(listings)
    df = analysis.add_distance_to_centre(df)
    return amenities.add_amenity_features(df)


@pytest.mark.parametrize("log_scale", [False, True])
def test_price_histogram(featured, log_scale):
    fig = plots.price_histogram(featured, log_scale=log_scale, bins=5)
    assert isinstance(fig, Figure)
    assert "Distribution" in fig.axes[0].get_title()


def test_price_boxplot_orders_by_median(featured):
    fig = plots.price_boxplot(featured, "room_type", horizontal=False)
    fig.canvas.draw()
    labels = [t.get_text() for t in fig.axes[0].get_xticklabels()]
    assert labels == ["Entire home/apt", "Private room"]


def test_price_boxplot_keeps_category_order(featured):
    fig = plots.price_boxplot(featured, "availability_bin", horizontal=True)
    fig.canvas.draw()
    labels = [t.get_text() for t in fig.axes[0].get_yticklabels()]
    assert labels == ["0 days", "1-90", "91-180", "181-270"]


def test_price_boxplot_top_n(featured):
    fig = plots.price_boxplot(featured, "neighbourhood_cleansed", top_n=1, horizontal=False)
    fig.canvas.draw()
    assert len(fig.axes[0].get_xticklabels()) == 1


def test_price_scatter_with_sample_and_hue(featured):
    fig = plots.price_scatter(featured, "dist_centre_km", hue="room_type", sample=3, log_price=True)
    assert isinstance(fig, Figure)
    assert fig.axes[0].get_yscale() == "log"


def test_plot_missing_column_raises(featured):
    with pytest.raises(ValueError):
        plots.price_boxplot(featured, "not_a_column")
    with pytest.raises(ValueError):
        plots.price_histogram(featured.iloc[0:0])


def test_amenity_bars(featured):
    long_df = amenities.explode_amenities(featured)
    freq = amenities.amenity_frequency(long_df, len(featured))
    premium = amenities.price_by_amenity(featured, long_df, min_listings=1)

    assert isinstance(plots.amenity_frequency_bar(freq, top_n=3), Figure)
    assert isinstance(plots.amenity_price_bar(premium), Figure)


def test_correlation_bar(featured):
    corr = analysis.price_correlations(featured, ["accommodates", "bedrooms", "dist_centre_km"])
    fig = plots.correlation_bar(corr)
    assert fig.axes[0].get_xlim() == (-1.0, 1.0)


def test_correlation_bar_empty_raises(featured):
    corr = analysis.price_correlations(featured, ["missing"])
    with pytest.raises(ValueError):
        plots.correlation_bar(corr)
