"""
Weather lookup for the suggestion banner.

Responsibilities:
- Fetch current temperature and humidity for a coordinate.
- Turn the reading into a short street-food suggestion.
"""
