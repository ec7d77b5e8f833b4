import pandas as pd
import pytest

from airbnb_eda import amenities


@pytest.mark.parametrize("value, expected", [
    ('["Wifi", "Kitchen", "Wifi"]', ["Wifi", "Kitchen"]),
    ('{TV,"Air conditioning",Heating}', ["TV", "Air conditioning", "Heating"]),
    ('["Fast wifi \\u2013 300 Mbps"]', ["Fast wifi – 300 Mbps"]),
    ('{TV,"Fast wifi \\u2013 300 Mbps"}', ["TV", "Fast wifi – 300 Mbps"]),
    (["Wifi", " Kitchen ", ""], ["Wifi", "Kitchen"]),
    ('["Wifi", "Kitchen"', ["Wifi", "Kitchen"]),
    ("[]", []),
    ("", []),
    (None, []),
    (float("nan"), []),
])
def test_parse_amenities(value, expected):
    assert amenities.parse_amenities(value) == expected


@pytest.mark.parametrize("amenity, category", [
    ("Fast wifi – 300 Mbps", "internet"),
    ("Hair dryer", "bathroom"),
    ("Dryer", "laundry"),
    ("Free parking on premises", "parking"),
    ("Air conditioning", "climate"),
    ("Pool", "outdoor"),
    ("HDTV with Netflix", "entertainment"),
    ("Dedicated workspace", "work"),
    ("Something unusual", "other"),
])
def test_match_amenity_category(amenity, category):
    assert amenities.match_amenity_category(amenity) == category


def test_match_amenity_category_custom_mapping():
    categories = {"views": ["view"], "water": ["beach", "lake"]}
    assert amenities.match_amenity_category("Lake access", categories) == "water"
    assert amenities.match_amenity_category("City skyline view", categories) == "views"
    assert amenities.match_amenity_category("Wifi", categories) == "other"


def test_explode_amenities(listings):
    long_df = amenities.explode_amenities(listings)

    assert list(long_df.columns) == ["listing_id", "amenity", "category"]
    assert len(long_df) == 9
    assert long_df.groupby("listing_id").size().to_dict() == {101: 3, 102: 2, 103: 4}
    # listing 104 has an empty list
    assert 104 not in set(long_df["listing_id"])
    assert set(long_df.loc[long_df["listing_id"] == 103, "category"]) == {
        "internet", "kitchen", "outdoor", "parking"
    }


def test_explode_amenities_row_count_matches_counts(listings):
    featured = amenities.add_amenity_features(listings)
    long_df = amenities.explode_amenities(featured)
    assert len(long_df) == featured["amenities_count"].sum()


def test_explode_amenities_requires_columns():
    with pytest.raises(ValueError):
        amenities.explode_amenities(pd.DataFrame({"listing_id": [1]}))


def test_add_amenity_features(listings):
    df = amenities.add_amenity_features(listings)

    assert df["amenities_count"].tolist() == [3, 2, 4, 0]
    assert df["has_internet"].tolist() == [True, True, True, False]
    assert df["has_outdoor"].tolist() == [False, False, True, False]
    assert df["has_bathroom"].tolist() == [False, True, False, False]
    assert "has_pets" in df.columns


def test_amenity_frequency(listings):
    long_df = amenities.explode_amenities(listings)
    freq = amenities.amenity_frequency(long_df, n_listings=len(listings))

    top = freq.iloc[0]
    assert top["amenity"] == "Wifi"
    assert top["n_listings"] == 3
    assert top["share"] == pytest.approx(0.75)
    assert freq.iloc[1]["amenity"] == "Kitchen"
    assert freq["n_listings"].is_monotonic_decreasing


def test_price_by_amenity(listings):
    long_df = amenities.explode_amenities(listings)
    result = amenities.price_by_amenity(listings, long_df, top_n=5, min_listings=2)

    # only Wifi (3) and Kitchen (2) reach two listings
    assert set(result["amenity"]) == {"Wifi", "Kitchen"}

    kitchen = result.set_index("amenity").loc["Kitchen"]
    assert kitchen["n_with"] == 2
    assert kitchen["n_without"] == 2
    assert kitchen["median_with"] == pytest.approx(685.0)
    assert kitchen["median_without"] == pytest.approx(37.5)
    assert kitchen["median_diff"] == pytest.approx(647.5)

    wifi = result.set_index("amenity").loc["Wifi"]
    assert wifi["median_diff"] == pytest.approx(90.0)
    assert result.iloc[0]["amenity"] == "Kitchen"


def test_category_price_summary(listings):
    df = amenities.add_amenity_features(listings)
    summary = amenities.category_price_summary(df)

    internet = summary[summary["category"] == "internet"].set_index("has_amenity")
    assert internet.loc[True, "count"] == 3
    assert internet.loc[True, "median"] == pytest.approx(120.0)
    assert internet.loc[False, "count"] == 1
