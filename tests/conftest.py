import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

from airbnb_eda import cleaning


@pytest.fixture
def raw_listings():
    """A few rows shaped like the Inside Airbnb listings export."""
    return pd.DataFrame({
        "id": [101, 102, 103, 104, 105, 106],
        "neighbourhood_cleansed": ["Centro", "Centro", "Retiro", "Retiro", "Latina", "Latina"],
        "latitude": [40.4168, 40.4180, 40.4110, 40.4120, 40.4000, np.nan],
        "longitude": [-3.7038, -3.7050, -3.6830, -3.6840, -3.7200, -3.7210],
        "room_type": ["Entire home/apt", "Private room", "Entire home/apt",
                      "Private room", "Shared room", "Entire home/apt"],
        "accommodates": [4, 2, 6, 1, 1, 3],
        "bathrooms": [np.nan] * 6,
        "bathrooms_text": ["1 bath", "1.5 shared baths", "2 baths", "Half-bath",
                           "Shared half-bath", None],
        "bedrooms": [2, 1, 3, 1, 1, 1],
        "amenities": [
            '["Wifi", "Kitchen", "Air conditioning"]',
            '["Wifi", "Hair dryer"]',
            '["Wifi", "Kitchen", "Pool", "Free parking on premises"]',
            '[]',
            '["TV"]',
            None,
        ],
        "price": ["$120.00", "$45.00", "$1,250.00", "$30.00", "", "$5.00"],
        "availability_365": [0, 45, 120, 200, 365, 300],
        "minimum_nights": [1, 2, 3, 1, 30, 2],
        "number_of_reviews": [10, 5, 50, 0, 3, 1],
        "host_since": ["2015-06-01", "2019-01-15", "2012-03-10", "2022-08-20",
                       "2020-02-02", "2018-05-05"],
        "host_response_rate": ["100%", "90%", "N/A", "75%", None, "100%"],
        "host_is_superhost": ["t", "f", "t", "f", None, "f"],
        "host_listings_count": [1, 3, 25, 1, 8, 2],
        "host_identity_verified": ["t", "t", "f", "t", "t", "f"],
    })


@pytest.fixture
def listings(raw_listings):
    """Cleaned listings: ids 101-104 survive (105 has no price, 106 is below the floor)."""
    df, _ = cleaning.clean_listings(raw_listings)
    return df


@pytest.fixture
def listings_csv(tmp_path, raw_listings):
    path = tmp_path / "listings.csv"
    raw_listings.to_csv(path, index=False)
    return path
