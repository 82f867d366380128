from __future__ import annotations

import os
import queue

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import StreamingResponse
from starlette.middleware.sessions import SessionMiddleware

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events
from .auth.dependencies import get_current_user, is_owner_or_admin, require_admin, require_user
from .auth.models import (
    BadgeOut,
    LoginRequest,
    OwnVendor,
    ProfileResponse,
    SignUpRequest,
)
from .auth.users import (
    EmailAlreadyRegistered,
    UserNotFound,
    authenticate,
    create_user,
    get_profile,
)
from .places.client import PlaceLookupError, suggest_places
from .rewards.badges import badge_for_points, badge_table
from .rewards.ratings import average_rating, rating_summary
from .search.distance import distance_label, distance_to
from .search.pipeline import list_public_vendors, run_search
from .vendors.models import (
    Coordinate,
    RankedVendor,
    Review,
    ReviewCreate,
    ReviewList,
    SearchResponse,
    Vendor,
    VendorCreate,
    VendorOut,
    VendorStatus,
)
from .vendors.store import (
    VendorNotFound,
    get_vendor,
    list_reviews,
    list_vendors_by_status,
    list_vendors_by_submitter,
    set_vendor_status,
    subscribe_reviews,
)
from .vendors.submissions import submit_review, submit_vendor
from .weather.client import WeatherLookupError, current_weather, suggest_food


app = FastAPI(title="Thelewale API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "thelewale-secret-change-in-production"),
)


def _user_location(lat: float | None, lng: float | None) -> Coordinate | None:
    if lat is None or lng is None:
        return None
    return Coordinate(latitude=lat, longitude=lng)


def _visible_vendor(vendor_id: str, user: dict | None) -> Vendor:
    """Approved vendors are public; others only for admins and their submitter."""
    try:
        vendor = get_vendor(vendor_id)
    except VendorNotFound:
        raise HTTPException(status_code=404, detail="Vendor not found") from None
    if vendor.status == VendorStatus.approved:
        return vendor
    if is_owner_or_admin(user, vendor.added_by):
        return vendor
    raise HTTPException(status_code=404, detail="Vendor not found")


def _review_list(vendor_id: str, reviews: list[Review] | None = None) -> ReviewList:
    if reviews is None:
        reviews = list_reviews(vendor_id)
    return ReviewList(
        reviews=reviews,
        average_rating=average_rating(r.rating for r in reviews),
        review_count=len(reviews),
    )


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/results", response_model=SearchResponse)
def results(
    dish: str | None = None,
    place: str | None = None,
    nearby: bool = False,
    lat: float | None = Query(None, ge=-90.0, le=90.0),
    lng: float | None = Query(None, ge=-180.0, le=180.0),
) -> SearchResponse:
    return run_search(dish=dish, place=place, nearby=nearby, lat=lat, lng=lng)


@app.get("/vendors", response_model=list[RankedVendor])
def vendors(
    lat: float | None = Query(None, ge=-90.0, le=90.0),
    lng: float | None = Query(None, ge=-180.0, le=180.0),
) -> list[RankedVendor]:
    return list_public_vendors(_user_location(lat, lng))


@app.get("/vendors/{vendor_id}", response_model=VendorOut)
def vendor_details(
    vendor_id: str,
    lat: float | None = Query(None, ge=-90.0, le=90.0),
    lng: float | None = Query(None, ge=-180.0, le=180.0),
    user: dict | None = Depends(get_current_user),
) -> VendorOut:
    vendor = _visible_vendor(vendor_id, user)
    avg, count = rating_summary(vendor.id)
    distance_km = distance_to(_user_location(lat, lng), vendor)
    return VendorOut(
        vendor=vendor,
        average_rating=avg,
        review_count=count,
        distance_km=distance_km,
        distance_label=distance_label(distance_km),
    )


@app.get("/vendors/{vendor_id}/reviews", response_model=ReviewList)
def vendor_reviews(
    vendor_id: str,
    user: dict | None = Depends(get_current_user),
) -> ReviewList:
    vendor = _visible_vendor(vendor_id, user)
    return _review_list(vendor.id)


@app.get("/vendors/{vendor_id}/reviews/events")
def vendor_review_events(
    vendor_id: str,
    max_events: int | None = Query(None, ge=1),
    idle_timeout: float = Query(30.0, gt=0.0, le=300.0),
    user: dict | None = Depends(get_current_user),
) -> StreamingResponse:
    """
    Server-Sent Events stream of the vendor's reviews.

    The first event is the current snapshot; each later event follows an
    insert. The stream ends after ``max_events`` events or ``idle_timeout``
    seconds without an update, and the subscription is released.
    """
    vendor = _visible_vendor(vendor_id, user)
    updates: queue.Queue[list[Review]] = queue.Queue()
    subscription = subscribe_reviews(vendor.id, updates.put)

    def _stream():
        try:
            payload = _review_list(vendor.id)
            yield f"data: {payload.model_dump_json()}\n\n"
            sent = 1
            while max_events is None or sent < max_events:
                try:
                    reviews = updates.get(timeout=idle_timeout)
                except queue.Empty:
                    break
                yield f"data: {_review_list(vendor.id, reviews).model_dump_json()}\n\n"
                sent += 1
        finally:
            subscription.close()

    return StreamingResponse(_stream(), media_type="text/event-stream")


@app.get("/weather")
def weather(
    lat: float = Query(..., ge=-90.0, le=90.0),
    lng: float = Query(..., ge=-180.0, le=180.0),
) -> dict:
    try:
        reading = current_weather(lat, lng)
    except WeatherLookupError:
        raise HTTPException(status_code=502, detail="Weather service unavailable") from None
    return {
        "temperature_c": reading.temperature_c,
        "humidity_pct": reading.humidity_pct,
        "suggestion": suggest_food(reading),
    }


@app.get("/places/suggest")
def places_suggest(q: str = "") -> dict:
    try:
        suggestions = suggest_places(q)
    except PlaceLookupError:
        suggestions = []
    return {"suggestions": suggestions}


@app.get("/badges")
def badges() -> dict:
    return badge_table()


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/signup")
def signup(body: SignUpRequest, request: Request) -> dict:
    try:
        user = create_user(body.name, body.email, body.password)
    except EmailAlreadyRegistered:
        raise HTTPException(status_code=400, detail="Email already registered") from None
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/auth/login")
def login(body: LoginRequest, request: Request) -> dict:
    user = authenticate(body.email, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/auth/logout")
def logout(request: Request) -> dict:
    request.session.clear()
    return {"status": "logged_out"}


@app.get("/auth/me")
def auth_me(user: dict = Depends(require_user)) -> dict:
    return user


# ── User endpoints ───────────────────────────────────────────────────────


@app.get("/profile", response_model=ProfileResponse)
def profile(user: dict = Depends(require_user)) -> ProfileResponse:
    try:
        user_profile = get_profile(user["id"])
    except UserNotFound:
        raise HTTPException(status_code=401, detail="Sign in to continue") from None
    badge = badge_for_points(user_profile.points)
    own = [
        OwnVendor(id=v.id, name=v.name, status=v.status)
        for v in list_vendors_by_submitter(user_profile.id)
    ]
    return ProfileResponse(
        profile=user_profile,
        badge=BadgeOut(name=badge.name, min_points=badge.min_points, color=badge.color),
        vendors=own,
    )


@app.post("/vendors", response_model=Vendor, status_code=201)
def add_vendor(body: VendorCreate, user: dict = Depends(require_user)) -> Vendor:
    try:
        return submit_vendor(body, user)
    except UserNotFound:
        raise HTTPException(status_code=401, detail="Sign in to continue") from None


@app.post("/vendors/{vendor_id}/reviews", response_model=Review, status_code=201)
def add_review(
    vendor_id: str,
    body: ReviewCreate,
    user: dict = Depends(require_user),
) -> Review:
    try:
        return submit_review(vendor_id, body, user)
    except VendorNotFound:
        raise HTTPException(status_code=404, detail="Vendor not found") from None
    except UserNotFound:
        raise HTTPException(status_code=401, detail="Sign in to continue") from None


# ── Admin endpoints ──────────────────────────────────────────────────────


@app.get("/admin/vendors/pending", response_model=list[Vendor])
def pending_vendors(user: dict = Depends(require_admin)) -> list[Vendor]:
    return list_vendors_by_status(VendorStatus.pending)


def _transition(vendor_id: str, status: VendorStatus) -> Vendor:
    try:
        return set_vendor_status(vendor_id, status)
    except VendorNotFound:
        raise HTTPException(status_code=404, detail="Vendor not found") from None
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from None


@app.post("/admin/vendors/{vendor_id}/approve", response_model=Vendor)
def approve_vendor(vendor_id: str, user: dict = Depends(require_admin)) -> Vendor:
    return _transition(vendor_id, VendorStatus.approved)


@app.post("/admin/vendors/{vendor_id}/reject", response_model=Vendor)
def reject_vendor(vendor_id: str, user: dict = Depends(require_admin)) -> Vendor:
    return _transition(vendor_id, VendorStatus.rejected)


@app.get("/analytics")
def analytics(user: dict = Depends(require_admin)) -> dict:
    return compute_analytics(get_events("search"))
