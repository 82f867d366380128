"""
Vendor search pipeline.

Responsibilities:
- Keep only approved vendors in public results.
- Fuzzy-match a free-text dish/cuisine query against vendor fields.
- Filter vendors by great-circle distance from a user coordinate.
- Assemble ranked results ready for API serialisation.
"""
