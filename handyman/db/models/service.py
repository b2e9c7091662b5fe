# handyman/db/models/service.py

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, Integer, String, UniqueConstraint

from handyman.db.base import Base
from handyman.utils.time import utcnow

PRICING_MODELS = ("hourly", "fixed", "per_service", "quote_based")


class Service(Base):
    __tablename__ = "services"
    __table_args__ = (
        UniqueConstraint("name", "category", name="uq_services_name_category"),
    )

    id = Column(Integer, primary_key=True, index=True)

    # Basic details
    name = Column(String, nullable=False)
    category = Column(String, nullable=False, index=True)
    description = Column(String, nullable=False)
    icon = Column(String, nullable=False, default="settings")
    color = Column(String, nullable=False, default="#000000")

    # Pricing
    price_min = Column(Float, nullable=False, default=0)
    price_max = Column(Float, nullable=False, default=0)
    pricing_model = Column(String, nullable=False, default="hourly")

    # Coverage
    regions = Column(JSON, nullable=False, default=list)
    is_nationwide = Column(Boolean, nullable=False, default=False)

    tags = Column(JSON, nullable=False, default=list)

    # Duration (in minutes)
    duration_min = Column(Integer, nullable=True)
    duration_max = Column(Integer, nullable=True)

    # Status
    is_active = Column(Boolean, nullable=False, default=True)

    # Denormalized counters, maintained outside this service
    providers_count = Column(Integer, nullable=False, default=0)
    average_rating = Column(Float, nullable=False, default=0)
    total_bookings = Column(Integer, nullable=False, default=0)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
