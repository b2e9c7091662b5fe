# handyman/api/routes/services.py

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import desc, func, or_
from sqlalchemy.orm import Session

from handyman.core.security import admin_guard
from handyman.db.base import get_db
from handyman.db.models.service import Service
from handyman.schemas.service import (
    CategoryCount,
    ServiceCreate,
    ServiceMutationResponse,
    ServicePage,
    ServiceResponse,
    ServiceStats,
    ServiceUpdate,
)
from handyman.utils.query import like_pattern, paginate, total_pages

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/services", tags=["services"], dependencies=[Depends(admin_guard)])

DUPLICATE_SERVICE = "Service with this name already exists in this category"


def get_service_or_404(db: Session, service_id: int) -> Service:
    service = db.get(Service, service_id)
    if not service:
        raise HTTPException(404, "Service not found")
    return service


def find_duplicate(db: Session, name: str, category: str, exclude_id: Optional[int] = None) -> Optional[Service]:
    q = db.query(Service).filter(Service.name == name, Service.category == category)
    if exclude_id is not None:
        q = q.filter(Service.id != exclude_id)
    return q.first()


# Catalog listing with filters

@router.get("", response_model=ServicePage)
def list_services(
    category: Optional[str] = Query(None),
    active: Optional[bool] = Query(None),
    search: Optional[str] = Query(None, description="Case-insensitive match on name, description or category"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=200),
    db: Session = Depends(get_db),
):
    q = db.query(Service)
    if category:
        q = q.filter(Service.category == category)
    if active is not None:
        q = q.filter(Service.is_active == active)
    if search and search.strip():
        pattern = like_pattern(search)
        q = q.filter(
            or_(
                Service.name.ilike(pattern, escape="\\"),
                Service.description.ilike(pattern, escape="\\"),
                Service.category.ilike(pattern, escape="\\"),
            )
        )

    rows, total = paginate(q.order_by(desc(Service.created_at), desc(Service.id)), page, limit)
    return ServicePage(
        items=[ServiceResponse.model_validate(s) for s in rows],
        total=total,
        page=page,
        limit=limit,
        total_pages=total_pages(total, limit),
    )


# Catalog counters; declared before /{service_id}

@router.get("/stats/overview", response_model=ServiceStats)
def service_stats(db: Session = Depends(get_db)):
    total_services = db.query(func.count(Service.id)).scalar() or 0
    active_services = db.query(func.count(Service.id)).filter(Service.is_active.is_(True)).scalar() or 0
    inactive_services = db.query(func.count(Service.id)).filter(Service.is_active.is_(False)).scalar() or 0

    count_col = func.count(Service.id).label("count")
    by_category = (
        db.query(Service.category, count_col)
        .group_by(Service.category)
        .order_by(desc("count"), Service.category)
        .all()
    )
    return ServiceStats(
        total_services=int(total_services),
        active_services=int(active_services),
        inactive_services=int(inactive_services),
        services_by_category=[CategoryCount(category=c, count=int(n)) for c, n in by_category],
    )


@router.get("/{service_id}", response_model=ServiceResponse)
def get_service(service_id: int, db: Session = Depends(get_db)):
    return ServiceResponse.model_validate(get_service_or_404(db, service_id))


# Admin creates service

@router.post("", response_model=ServiceMutationResponse, status_code=status.HTTP_201_CREATED)
def create_service(payload: ServiceCreate, db: Session = Depends(get_db)):
    values = payload.column_values()
    if find_duplicate(db, values["name"], values["category"]):
        raise HTTPException(status_code=400, detail=DUPLICATE_SERVICE)

    new_service = Service(**values)
    db.add(new_service)
    db.commit()
    db.refresh(new_service)
    logger.info("Created service %s (%s)", new_service.id, new_service.name)

    return ServiceMutationResponse(
        message="Service created successfully",
        service=ServiceResponse.model_validate(new_service),
    )


# Admin updates service

@router.put("/{service_id}", response_model=ServiceMutationResponse)
def update_service(service_id: int, payload: ServiceUpdate, db: Session = Depends(get_db)):
    service = get_service_or_404(db, service_id)
    values = payload.column_values()

    name = values.get("name", service.name)
    category = values.get("category", service.category)
    if find_duplicate(db, name, category, exclude_id=service.id):
        raise HTTPException(status_code=400, detail=DUPLICATE_SERVICE)

    # Update fields one-by-one
    for field, value in values.items():
        setattr(service, field, value)

    db.commit()
    db.refresh(service)
    return ServiceMutationResponse(
        message="Service updated successfully",
        service=ServiceResponse.model_validate(service),
    )


# Admin deletes service (hard delete)

@router.delete("/{service_id}", response_model=ServiceMutationResponse, response_model_exclude_none=True)
def delete_service(service_id: int, db: Session = Depends(get_db)):
    service = get_service_or_404(db, service_id)
    db.delete(service)
    db.commit()
    logger.info("Deleted service %s", service_id)
    return ServiceMutationResponse(message="Service deleted successfully")
