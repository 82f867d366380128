from __future__ import annotations

from ..vendors.models import Vendor, VendorStatus


def filter_approved(vendors: list[Vendor]) -> list[Vendor]:
    """Drop pending and rejected vendors, preserving order."""
    return [v for v in vendors if v.status == VendorStatus.approved]
