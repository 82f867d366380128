"""
Vendor and review storage.

Responsibilities:
- Hold vendor listings and their moderation status.
- Hold the append-only review sequence for each vendor.
- Push review updates to live subscribers.
- Combine entity writes with the submitter's points award.
"""
