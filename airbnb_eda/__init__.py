"""
Airbnb Listings EDA
Package for cleaning an Inside Airbnb listings export and plotting price against
location, availability, amenities and host attributes.
"""

__version__ = "1.0.0"

# Lazy imports to keep startup light
# Import as needed in code

__all__ = ["config", "io", "cleaning", "amenities", "analysis", "plots", "spatial", "qc"]
