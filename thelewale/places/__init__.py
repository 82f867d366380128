"""
Place lookup backed by OpenStreetMap Nominatim.

Responsibilities:
- Suggest place names while the user types.
- Geocode a free-text place into a coordinate for location search.
"""
