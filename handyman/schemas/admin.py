# handyman/schemas/admin.py
from typing import List, Literal

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from handyman.schemas.user import AdminUserItem


class DashboardStats(BaseModel):
    total_users: int
    total_providers: int
    total_clients: int
    verified_providers: int
    pending_providers: int

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class GrowthPoint(BaseModel):
    month: str
    clients: int = 0
    providers: int = 0


class ActivityItem(BaseModel):
    user: str
    action: str
    type: Literal["client", "provider"]
    time: str


class UserPage(BaseModel):
    items: List[AdminUserItem]
    total: int
    page: int
    limit: int
    total_pages: int

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ActiveToggleResponse(BaseModel):
    ok: bool = True
    user_id: int
    is_active: bool

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ProviderDecisionResponse(BaseModel):
    ok: bool = True
    provider_id: int
    status: str
    is_verified: bool

    class Config:
        alias_generator = to_camel
        populate_by_name = True
