from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class VendorStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class Coordinate(BaseModel):
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)


class Dish(BaseModel):
    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0.0)


class Vendor(BaseModel):
    id: str
    name: str
    description: str = ""
    cuisine: str = ""
    dishes: list[Dish] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)
    payment_methods: str = ""
    working_hours: str = ""
    location: Coordinate | None = None
    status: VendorStatus = VendorStatus.pending
    added_by: str | None = None
    created_at: datetime


class VendorCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=2000)
    cuisine: str = Field(..., min_length=1, description='e.g. "Indian", "Chinese", "Other"')
    dishes: list[Dish] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list, description="Image URLs")
    payment_methods: str = Field(..., min_length=1, description="e.g. Cash, Card, UPI")
    working_hours: str = Field(..., min_length=1, description="e.g. 10:00 AM - 8:00 PM")
    location: Coordinate | None = None


class Review(BaseModel):
    id: str
    vendor_id: str
    content: str
    rating: int = Field(..., ge=1, le=5)
    author: str
    created_at: datetime


class ReviewCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=2000)
    rating: int = Field(..., ge=1, le=5)


class VendorOut(BaseModel):
    vendor: Vendor
    average_rating: float | None
    review_count: int
    distance_km: float | None = None
    distance_label: str


class RankedVendor(BaseModel):
    vendor: Vendor
    score: float | None = None
    average_rating: float | None
    review_count: int
    distance_km: float | None = None
    distance_label: str


class SearchMode(str, Enum):
    dish = "dish"
    place = "place"
    all = "all"


class SearchResponse(BaseModel):
    mode: SearchMode
    query: str
    user_location: Coordinate | None
    results: list[RankedVendor]
    total_candidates: int


class ReviewList(BaseModel):
    reviews: list[Review]
    average_rating: float | None
    review_count: int
