# handyman/schemas/provider.py
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

ProviderStatus = Literal["active", "inactive", "suspended", "pending"]
ProviderType = Literal["individual", "company"]
PaymentMethod = Literal["Bank", "Mobile Money", "Both"]


class Certification(BaseModel):
    name: Optional[str] = None
    url: Optional[str] = None
    public_id: Optional[str] = Field(None, alias="publicId")
    description: Optional[str] = None

    class Config:
        populate_by_name = True


class WorkingHours(BaseModel):
    start: Optional[str] = None
    end: Optional[str] = None


class Availability(BaseModel):
    working_days: List[str] = Field(default_factory=list, alias="workingDays")
    hours: Optional[WorkingHours] = None
    express_jobs: bool = Field(False, alias="expressJobs")

    class Config:
        populate_by_name = True


class ServiceArea(BaseModel):
    city: Optional[str] = None
    neighborhood: Optional[str] = None


class ProviderMetrics(BaseModel):
    total_transactions: int = Field(0, alias="totalTransactions")
    last_30_days_transactions: int = Field(0, alias="last30DaysTransactions")
    success_rate: float = Field(0, alias="successRate")
    average_rating: float = Field(0, alias="averageRating")
    total_reviews: int = Field(0, alias="totalReviews")
    completion_rate: float = Field(0, alias="completionRate")
    response_time: float = Field(0, alias="responseTime")

    class Config:
        populate_by_name = True


class ProviderDetails(BaseModel):
    """Fields a provider supplies when applying; shared by the stored profile."""

    # Basic information
    business_name: Optional[str] = Field(None, alias="businessName")
    phone_number: Optional[str] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    region: Optional[str] = None
    profile_photo_url: Optional[str] = Field(None, alias="profilePhotoUrl")
    bio: Optional[str] = None
    provider_type: ProviderType = Field("individual", alias="providerType")
    employee_count: Optional[int] = Field(None, alias="employeeCount")
    service_area: Optional[ServiceArea] = Field(None, alias="serviceArea")

    # Professional details
    categories: List[str] = Field(default_factory=list)
    services: List[str] = Field(default_factory=list)
    experience_years: Optional[float] = None
    tools_available: List[str] = Field(default_factory=list)
    certifications: List[Certification] = Field(default_factory=list)
    hourly_rate: Optional[float] = Field(None, alias="hourlyRate")
    availability: Availability = Field(default_factory=Availability)

    # Payment & bank info
    bank_name: Optional[str] = None
    account_number: Optional[str] = None
    mobile_money: Optional[str] = None
    payment_method: PaymentMethod = "Mobile Money"

    class Config:
        populate_by_name = True

    @field_validator("categories", "services", "tools_available", "certifications", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value

    @field_validator("availability", mode="before")
    @classmethod
    def _default_availability(cls, value):
        return Availability() if value is None else value

    @field_validator("certifications", mode="before")
    @classmethod
    def _certification_names(cls, value):
        # the admin schema stored certifications as plain names
        if isinstance(value, list):
            return [{"name": item} if isinstance(item, str) else item for item in value]
        return value


class ProviderApplication(ProviderDetails):
    """Payload of the become-provider request."""


class ProviderProfile(ProviderDetails):
    """The provider sub-structure stored on a user with role ``provider``."""

    rating: float = 0
    total_jobs_done: int = 0
    status: ProviderStatus = "pending"
    is_verified: bool = False
    metrics: ProviderMetrics = Field(default_factory=ProviderMetrics)

    @field_validator("metrics", mode="before")
    @classmethod
    def _default_metrics(cls, value):
        return ProviderMetrics() if value is None else value

    def to_document(self) -> dict:
        """Serialize with wire names, as stored in ``users.provider_profile``."""
        return self.model_dump(by_alias=True, mode="json")


