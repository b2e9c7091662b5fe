# handyman/api/routes/admin.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import desc, extract, func, or_
from sqlalchemy.orm import Session

from handyman.core.security import admin_guard
from handyman.crud.crud_user import users
from handyman.db.base import get_db
from handyman.db.models.user import User
from handyman.schemas.admin import (
    ActiveToggleResponse,
    ActivityItem,
    DashboardStats,
    GrowthPoint,
    ProviderDecisionResponse,
    UserPage,
)
from handyman.schemas.provider import ProviderProfile
from handyman.schemas.user import AdminUserCreate, AdminUserCreateResponse, Role, UserResponse
from handyman.utils.query import like_pattern, paginate, total_pages
from handyman.utils.time import month_label, months_ago, time_ago, utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(admin_guard)])

GROWTH_PERIODS = {"3months": 3, "6months": 6, "12months": 12, "1year": 12}
DEFAULT_GROWTH_MONTHS = 6


# -------------------------
# 1. Dashboard counters
# -------------------------
@router.get("/dashboard/stats", response_model=DashboardStats)
def dashboard_stats(db: Session = Depends(get_db)):
    total_users = db.query(func.count(User.id)).scalar() or 0
    total_providers = db.query(func.count(User.id)).filter(User.role == "provider").scalar() or 0
    total_clients = db.query(func.count(User.id)).filter(User.role == "user").scalar() or 0
    verified_providers = (
        db.query(func.count(User.id))
        .filter(User.role == "provider", User.is_verified.is_(True))
        .scalar()
        or 0
    )
    return DashboardStats(
        total_users=int(total_users),
        total_providers=int(total_providers),
        total_clients=int(total_clients),
        verified_providers=int(verified_providers),
        pending_providers=int(total_providers - verified_providers),
    )


# -------------------------
# 2. Monthly user growth
# -------------------------
@router.get("/users/growth", response_model=List[GrowthPoint])
def user_growth(
    period: str = Query("6months", description="3months | 6months | 12months | 1year"),
    db: Session = Depends(get_db),
):
    months = GROWTH_PERIODS.get(period, DEFAULT_GROWTH_MONTHS)
    start = months_ago(utcnow(), months)

    year_col = extract("year", User.created_at)
    month_col = extract("month", User.created_at)
    rows = (
        db.query(year_col, month_col, User.role, func.count(User.id))
        .filter(User.created_at >= start, User.role.in_(("user", "provider")))
        .group_by(year_col, month_col, User.role)
        .order_by(year_col, month_col)
        .all()
    )

    # rows arrive chronologically, so insertion order is the series order
    series = {}
    for year, month, role, count in rows:
        label = month_label(int(year), int(month))
        point = series.setdefault(label, GrowthPoint(month=label))
        if role == "provider":
            point.providers = int(count)
        else:
            point.clients = int(count)
    return list(series.values())


# -------------------------
# 3. Recent sign-ups feed
# -------------------------
@router.get("/users/recent-activity", response_model=List[ActivityItem])
def recent_activity(limit: int = Query(10, ge=1, le=100), db: Session = Depends(get_db)):
    recent = db.query(User).order_by(desc(User.created_at), desc(User.id)).limit(limit).all()
    now = utcnow()
    return [
        ActivityItem(
            user=u.name,
            action="registered as a service provider" if u.role == "provider" else "joined as a client",
            type="provider" if u.role == "provider" else "client",
            time=time_ago(u.created_at, now),
        )
        for u in recent
    ]


# -------------------------
# 4. User directory
# -------------------------
@router.get("/users", response_model=UserPage)
def list_users(
    role: Optional[Role] = Query(None, description="user/provider/admin"),
    search: Optional[str] = Query(None, description="Case-insensitive match on name or email"),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
):
    q = db.query(User)
    if role:
        q = q.filter(User.role == role)
    if search and search.strip():
        pattern = like_pattern(search)
        q = q.filter(or_(User.name.ilike(pattern, escape="\\"), User.email.ilike(pattern, escape="\\")))

    rows, total = paginate(q.order_by(desc(User.created_at), desc(User.id)), page, limit)
    return UserPage(
        items=rows,
        total=total,
        page=page,
        limit=limit,
        total_pages=total_pages(total, limit),
    )


@router.post("/users", response_model=AdminUserCreateResponse, status_code=status.HTTP_201_CREATED)
def create_user(payload: AdminUserCreate, db: Session = Depends(get_db)):
    if users.get_by_email(db, payload.email):
        raise HTTPException(status_code=400, detail="User with this email already exists")

    # admin-created providers start with an empty, pending profile
    profile = ProviderProfile() if payload.role == "provider" else None
    new_user = users.create(
        db,
        name=payload.name.strip(),
        email=payload.email,
        password=payload.password,
        role=payload.role,
        phone=payload.phone,
        provider_profile=profile,
    )
    return AdminUserCreateResponse(message="User created successfully", user=UserResponse.model_validate(new_user))


# --------------------------------------------------
# 5. Activate / Deactivate a user (soft)
# --------------------------------------------------
@router.put("/users/{user_id}/activate", response_model=ActiveToggleResponse)
def set_user_active(user_id: int, active: bool, db: Session = Depends(get_db)):
    u = users.get(db, user_id)
    if not u:
        raise HTTPException(status_code=404, detail="User not found")
    users.set_active(db, u, active)
    return ActiveToggleResponse(user_id=u.id, is_active=u.is_active)


# --------------------------------------------------
# 6. Approve / Reject provider application
# --------------------------------------------------
@router.put("/providers/{provider_id}/approve", response_model=ProviderDecisionResponse)
def approve_provider(provider_id: int, approve: bool, db: Session = Depends(get_db)):
    provider = users.get(db, provider_id)
    if not provider or provider.role != "provider":
        raise HTTPException(status_code=404, detail="Provider not found")

    users.decide_provider(db, provider, "approve" if approve else "reject")
    return ProviderDecisionResponse(
        provider_id=provider.id,
        status=provider.provider_profile["status"],
        is_verified=provider.is_verified,
    )
