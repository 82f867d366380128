"""
Points, badges and rating aggregation.

Responsibilities:
- Define how many points each contribution earns.
- Map a points balance to a badge tier.
- Average review ratings, keeping "no rating" distinct from zero.
"""
