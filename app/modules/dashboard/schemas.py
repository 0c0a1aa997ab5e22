from pydantic import BaseModel, Field
from typing import Optional, List, Union
from datetime import datetime
from enum import Enum


class VerificationStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Tab(str, Enum):
    OVERVIEW = "overview"
    USERS = "users"
    VERIFICATIONS = "verifications"


def _contains(value: Optional[str], term: str) -> bool:
    return bool(value) and term in value.lower()


class UserProfile(BaseModel):
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    is_verified: bool = False
    verification_doc_url: Optional[str] = None
    verification_status: Optional[str] = None
    verified_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match on email or full name"""
        term = term.lower()
        return _contains(self.email, term) or _contains(self.full_name, term)


class CarListing(BaseModel):
    id: str
    user_id: str
    brand: Optional[str] = None
    model: Optional[str] = None
    year: Optional[int] = None
    price: Optional[float] = None
    mileage: Optional[int] = None
    fuel_type: Optional[str] = None
    transmission: Optional[str] = None
    engine_capacity: Optional[int] = None
    condition: Optional[str] = None
    body_type: Optional[str] = None
    assembly: Optional[str] = None
    color: Optional[str] = None
    location: Optional[str] = None
    registered_in: Optional[str] = None
    owner_name: Optional[str] = None
    owner_phone: Optional[str] = None
    owner_email: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    description: Optional[str] = None
    features: Optional[List[str]] = None
    is_sold: bool = False
    views: Optional[int] = None
    is_featured: bool = False
    is_verified: bool = False
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CarListingWithUser(CarListing):
    user: Optional[UserProfile] = None


class VerificationRequest(BaseModel):
    id: str
    user_id: str
    document_type: Optional[str] = None
    front_image_url: Optional[str] = None
    back_image_url: Optional[str] = None
    status: VerificationStatus = VerificationStatus.PENDING
    admin_note: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @property
    def is_pending(self) -> bool:
        return self.status == VerificationStatus.PENDING


class VerificationRequestWithUser(VerificationRequest):
    user: Optional[UserProfile] = None

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match on document type or the owner's email"""
        term = term.lower()
        owner_email = self.user.email if self.user else None
        return _contains(self.document_type, term) or _contains(owner_email, term)


# Records shown in a dashboard tab; each variant brings its own matches()
DashboardRecord = Union[UserProfile, VerificationRequestWithUser]


class AdminStats(BaseModel):
    total_users: int = 0
    verified_users: int = 0
    total_cars: int = 0
    verified_cars: int = 0
    featured_cars: int = 0
    sold_cars: int = 0
    pending_verifications: int = 0
    total_views: int = 0
    total_value: float = 0


class DashboardSnapshot(BaseModel):
    users: List[UserProfile]
    cars: List[CarListingWithUser]
    verification_requests: List[VerificationRequestWithUser]
    stats: AdminStats
    loaded_at: datetime


class StatCard(BaseModel):
    key: str
    label: str
    value: str
    detail: Optional[str] = None


class OverviewResponse(BaseModel):
    active_tab: Tab
    stats: AdminStats
    cards: List[StatCard]
    pending_badge: int
    loaded_at: Optional[datetime] = None


class UserRow(BaseModel):
    id: str
    display_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    initial: str
    is_verified: bool
    status_label: str
    car_count: int = 0
    created: str
    actions: List[str]


class VerificationRow(BaseModel):
    id: str
    user_id: str
    owner_name: str
    owner_email: Optional[str] = None
    document_type: Optional[str] = None
    status: VerificationStatus
    status_label: str
    admin_note: Optional[str] = None
    created: str
    actions: List[str]


class RecordPage(BaseModel):
    tab: Tab
    search: str
    page: int
    page_count: int
    page_size: int
    total: int
    items: List[Union[UserRow, VerificationRow]]


class ViewUpdate(BaseModel):
    tab: Optional[Tab] = None
    search: Optional[str] = None
    page: Optional[int] = None


class RefreshResponse(BaseModel):
    message: str
    stats: AdminStats
    loaded_at: datetime
