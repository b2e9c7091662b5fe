# handyman/schemas/service.py

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator
from pydantic.alias_generators import to_camel

PricingModel = Literal["hourly", "fixed", "per_service", "quote_based"]


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


class PriceRange(CamelModel):
    min: float = Field(0, ge=0)
    max: float = Field(0, ge=0)


class ServiceAvailability(CamelModel):
    regions: List[str] = Field(default_factory=list)
    is_nationwide: bool = False


class DurationRange(CamelModel):
    min: Optional[int] = Field(None, ge=0)
    max: Optional[int] = Field(None, ge=0)


NESTED_COLUMNS = {
    "price_range": {"min": "price_min", "max": "price_max"},
    "availability": {"regions": "regions", "is_nationwide": "is_nationwide"},
    "estimated_duration": {"min": "duration_min", "max": "duration_max"},
}


def _columns(data: dict) -> dict:
    """Flatten the nested API shape into ``services`` column values."""
    columns = dict(data)
    for field, mapping in NESTED_COLUMNS.items():
        nested = columns.pop(field, None)
        if nested is None:
            continue
        # partial updates only carry the keys that were sent
        for key, column in mapping.items():
            if key in nested:
                columns[column] = nested[key]
    return columns


# Admin creates service
class ServiceCreate(CamelModel):
    name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    description: str = Field(min_length=1)
    icon: str = "settings"
    color: str = "#000000"
    price_range: PriceRange = Field(default_factory=PriceRange)
    pricing_model: PricingModel = "hourly"
    availability: ServiceAvailability = Field(default_factory=ServiceAvailability)
    is_active: bool = True
    tags: List[str] = Field(default_factory=list)
    estimated_duration: DurationRange = Field(default_factory=DurationRange)

    def column_values(self) -> dict:
        data = self.model_dump()
        data["name"] = data["name"].strip()
        data["category"] = data["category"].strip()
        return _columns(data)


# Admin updates service
class ServiceUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    icon: Optional[str] = None
    color: Optional[str] = None
    price_range: Optional[PriceRange] = None
    pricing_model: Optional[PricingModel] = None
    availability: Optional[ServiceAvailability] = None
    is_active: Optional[bool] = None
    tags: Optional[List[str]] = None
    estimated_duration: Optional[DurationRange] = None
    providers_count: Optional[int] = Field(None, ge=0)
    average_rating: Optional[float] = Field(None, ge=0, le=5)
    total_bookings: Optional[int] = Field(None, ge=0)

    def column_values(self) -> dict:
        # explicit nulls on required columns are ignored
        data = {k: v for k, v in self.model_dump(exclude_unset=True).items() if v is not None}
        return _columns(data)


# What API returns
class ServiceResponse(CamelModel):
    id: int
    name: str
    category: str
    description: str
    icon: str
    color: str
    price_range: PriceRange
    pricing_model: PricingModel
    availability: ServiceAvailability
    is_active: bool
    tags: List[str]
    estimated_duration: DurationRange
    providers_count: int
    average_rating: float
    total_bookings: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def _from_row(cls, data):
        if isinstance(data, dict):
            return data
        return {
            "id": data.id,
            "name": data.name,
            "category": data.category,
            "description": data.description,
            "icon": data.icon,
            "color": data.color,
            "price_range": {"min": data.price_min, "max": data.price_max},
            "pricing_model": data.pricing_model,
            "availability": {"regions": data.regions or [], "is_nationwide": data.is_nationwide},
            "is_active": data.is_active,
            "tags": data.tags or [],
            "estimated_duration": {"min": data.duration_min, "max": data.duration_max},
            "providers_count": data.providers_count,
            "average_rating": data.average_rating,
            "total_bookings": data.total_bookings,
            "created_at": data.created_at,
            "updated_at": data.updated_at,
        }


class ServicePage(CamelModel):
    items: List[ServiceResponse]
    total: int
    page: int
    limit: int
    total_pages: int


class ServiceMutationResponse(BaseModel):
    success: bool = True
    message: str
    service: Optional[ServiceResponse] = None


class CategoryCount(BaseModel):
    category: str
    count: int


class ServiceStats(CamelModel):
    total_services: int
    active_services: int
    inactive_services: int
    services_by_category: List[CategoryCount]
