from __future__ import annotations

from pydantic import BaseModel, Field

from ..vendors.models import VendorStatus


class SignUpRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=6)


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)


class UserProfile(BaseModel):
    id: str
    name: str
    email: str
    points: int = 0
    vendors_added: int = 0
    reviews_given: int = 0
    role: str = "user"


class BadgeOut(BaseModel):
    name: str
    min_points: int
    color: str


class OwnVendor(BaseModel):
    id: str
    name: str
    status: VendorStatus


class ProfileResponse(BaseModel):
    profile: UserProfile
    badge: BadgeOut
    vendors: list[OwnVendor]
