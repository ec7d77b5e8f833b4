import geopandas as gpd
import matplotlib.pyplot as plt
import pandas as pd
import pytest
from shapely.geometry import Point

from airbnb_eda import config, io


def test_load_csv_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        io.load_csv(tmp_path / "nope.csv")


def test_load_listings_keeps_present_columns(listings_csv):
    df = io.load_listings(listings_csv, columns=["id", "price", "not_in_export"])

    assert list(df.columns) == ["id", "price"]
    assert len(df) == 6


def test_load_listings_defaults_to_configured_path(monkeypatch, listings_csv):
    monkeypatch.setitem(config.INPUT_FILES, "listings", listings_csv)
    assert len(io.load_listings()) == 6


def test_save_csv_creates_parent_dirs(tmp_path):
    path = io.save_csv(pd.DataFrame({"a": [1, 2]}), tmp_path / "nested" / "table.csv")

    assert path.exists()
    assert pd.read_csv(path)["a"].tolist() == [1, 2]


def test_save_figure_writes_png_and_closes(tmp_path):
    fig, ax = plt.subplots()
    ax.plot([0, 1], [0, 1])

    path = io.save_figure(fig, tmp_path / "line", dpi=50)

    assert path.suffix == ".png"
    assert path.exists()
    assert not plt.fignum_exists(fig.number)
    assert io.file_size_mb(path) > 0


def test_save_figure_bare_name_goes_to_figures_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "FIGURES_DIR", tmp_path / "figures")
    fig, _ = plt.subplots()

    path = io.save_figure(fig, "empty.png", dpi=50)

    assert path == tmp_path / "figures" / "empty.png"
    assert path.exists()


def test_load_geojson_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        io.load_geojson(tmp_path / "neighbourhoods.geojson")


def test_parquet_round_trip(tmp_path, listings):
    path = io.save_parquet(listings, tmp_path / "processed" / "listings.parquet")
    back = io.load_parquet(path)

    assert back["listing_id"].tolist() == listings["listing_id"].tolist()
    assert back["price"].tolist() == listings["price"].tolist()


def test_load_parquet_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        io.load_parquet(tmp_path / "listings.parquet")


def test_save_geojson_reprojects_to_web_crs(tmp_path):
    gdf = gpd.GeoDataFrame({"name": ["a"]}, geometry=[Point(-3.70, 40.41)], crs=config.CRS_WEB)
    path = io.save_geojson(gdf.to_crs("EPSG:3857"), tmp_path / "points.geojson")

    back = io.load_geojson(path)
    assert back.crs == config.CRS_WEB
    assert back.geometry.iloc[0].x == pytest.approx(-3.70)
