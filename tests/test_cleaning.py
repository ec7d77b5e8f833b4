import numpy as np
import pandas as pd
import pytest

from airbnb_eda import cleaning


def test_parse_price_series_handles_currency_and_separators():
    s = pd.Series(["$1,234.50", "€100,50", "", None, "$157.00", "1,234", "£2.500,00", "abc", 99])
    result = cleaning.parse_price_series(s)

    expected = [1234.5, 100.5, np.nan, np.nan, 157.0, 1234.0, 2500.0, np.nan, 99.0]
    np.testing.assert_allclose(result.to_numpy(), expected)
    assert result.dtype == float


def test_parse_price_series_nbsp_and_spaces():
    result = cleaning.parse_price_series(pd.Series(["1\xa0234,00 €", " $ 80.00 "]))
    assert result.tolist() == [1234.0, 80.0]


def test_parse_bathrooms_text():
    s = pd.Series(["1 bath", "1.5 shared baths", "Half-bath", "Private half-bath",
                   "2 private baths", "0 baths", None])
    result = cleaning.parse_bathrooms_text(s)

    np.testing.assert_allclose(result["bathrooms"].to_numpy(), [1.0, 1.5, 0.5, 0.5, 2.0, 0.0, np.nan])
    assert result["bathroom_type"].tolist()[:6] == [
        "standard", "shared", "standard", "private", "private", "standard"
    ]
    assert pd.isna(result["bathroom_type"].iloc[6])
    assert result.index.equals(s.index)


def test_parse_bathrooms_text_all_missing():
    result = cleaning.parse_bathrooms_text(pd.Series([None, np.nan]))
    assert result["bathrooms"].isna().all()
    assert result["bathroom_type"].isna().all()


def test_parse_percentage_series():
    result = cleaning.parse_percentage_series(pd.Series(["95%", "N/A", None, "100%"]))
    np.testing.assert_allclose(result.to_numpy(), [0.95, np.nan, np.nan, 1.0])


def test_parse_boolean_series():
    result = cleaning.parse_boolean_series(pd.Series(["t", "f", None, "TRUE"]))
    assert result.dtype == "boolean"
    assert bool(result.iloc[0]) is True
    assert bool(result.iloc[1]) is False
    assert pd.isna(result.iloc[2])
    assert bool(result.iloc[3]) is True


def test_normalize_columns():
    df = pd.DataFrame(columns=["Listing ID", " Price "])
    assert cleaning.normalize_columns(df).columns.tolist() == ["listing_id", "price"]


def test_clean_listings_parses_and_filters(raw_listings):
    df, log = cleaning.clean_listings(raw_listings)

    assert df["listing_id"].tolist() == [101, 102, 103, 104]
    assert df["listing_id"].dtype == "int64"
    assert df["price"].dtype == float
    assert df["price"].notna().all()
    assert df["price"].tolist() == [120.0, 45.0, 1250.0, 30.0]

    assert df["bathrooms"].tolist() == [1.0, 1.5, 2.0, 0.5]
    assert df["bathroom_type"].tolist() == ["standard", "shared", "standard", "standard"]
    assert df["host_response_rate"].iloc[0] == pytest.approx(1.0)
    assert pd.isna(df["host_response_rate"].iloc[2])
    assert df["host_is_superhost"].dtype == "boolean"
    assert pd.api.types.is_datetime64_any_dtype(df["host_since"])

    assert any("without a price" in line for line in log)
    assert any("price outliers" in line for line in log)


def test_clean_listings_keeps_numeric_bathrooms(raw_listings):
    raw = raw_listings.copy()
    raw["bathrooms"] = [3.0, np.nan, np.nan, np.nan, np.nan, np.nan]

    df, _ = cleaning.clean_listings(raw)

    assert df["bathrooms"].tolist() == [3.0, 1.5, 2.0, 0.5]


def test_clean_listings_room_type_keeps_missing_as_nan(raw_listings):
    raw = raw_listings.copy()
    raw.loc[0, "room_type"] = "  Entire home/apt "
    raw.loc[1, "room_type"] = np.nan

    df, _ = cleaning.clean_listings(raw)

    assert df["room_type"].iloc[0] == "Entire home/apt"
    assert pd.isna(df["room_type"].iloc[1])
    assert "nan" not in set(df["room_type"].dropna())
    assert df["room_type"].nunique() == 2


def test_clean_listings_drops_duplicate_ids(raw_listings):
    raw = pd.concat([raw_listings, raw_listings.iloc[[0]]], ignore_index=True)
    changed = raw_listings.iloc[[1]].copy()
    changed["price"] = "$999.00"
    raw = pd.concat([raw, changed], ignore_index=True)

    df, log = cleaning.clean_listings(raw)

    assert df["listing_id"].is_unique
    assert df.loc[df["listing_id"] == 102, "price"].item() == 45.0
    assert any("duplicate listing rows" in line for line in log)
    assert any("duplicate listing_ids" in line for line in log)


def test_clean_listings_no_valid_price_raises():
    raw = pd.DataFrame({"id": [1, 2], "price": ["free", ""]})
    with pytest.raises(ValueError, match="PRICE PARSING FAILED"):
        cleaning.clean_listings(raw)


def test_clean_listings_missing_columns_raise():
    with pytest.raises(ValueError, match="price"):
        cleaning.clean_listings(pd.DataFrame({"id": [1]}))
    with pytest.raises(ValueError, match="id"):
        cleaning.clean_listings(pd.DataFrame({"price": ["$10"]}))
