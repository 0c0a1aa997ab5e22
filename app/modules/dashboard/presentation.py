"""Display formatting for stat cards and table rows."""

from app.modules.dashboard.schemas import (
    AdminStats, StatCard, UserProfile, UserRow,
    VerificationRequestWithUser, VerificationRow
)
from typing import Mapping, Optional, Union
from datetime import datetime

CRORE = 10_000_000
LAKH = 100_000


def format_price(price: float) -> str:
    if price >= CRORE:
        return f"₹{price / CRORE:.2f} Cr"
    if price >= LAKH:
        return f"₹{price / LAKH:.1f} Lakh"
    if float(price).is_integer():
        return f"₹{int(price):,}"
    return f"₹{price:,}"


def format_date(value: Optional[Union[datetime, str]]) -> str:
    """e.g. 5 Jan 2024"""
    if not value:
        return ""
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    return f"{value.day} {value.strftime('%b %Y')}"


def display_name(user: Optional[UserProfile]) -> str:
    if user is None:
        return "Unknown User"
    return user.full_name or "No Name"


def avatar_initial(user: UserProfile) -> str:
    source = user.full_name or user.email or "U"
    return source[0].upper()


def stat_cards(stats: AdminStats):
    return [
        StatCard(key="total_users", label="Total Users", value=str(stats.total_users),
                 detail=f"{stats.verified_users} verified"),
        StatCard(key="total_cars", label="Total Cars", value=str(stats.total_cars),
                 detail=f"{stats.verified_cars} verified"),
        StatCard(key="pending_verifications", label="Pending Verifications",
                 value=str(stats.pending_verifications)),
        StatCard(key="total_value", label="Total Value", value=format_price(stats.total_value)),
    ]


def user_row(user: UserProfile, car_count: int = 0) -> UserRow:
    return UserRow(
        id=user.id,
        display_name=display_name(user),
        email=user.email,
        phone=user.phone,
        initial=avatar_initial(user),
        is_verified=user.is_verified,
        status_label="Verified" if user.is_verified else "Unverified",
        car_count=car_count,
        created=format_date(user.created_at),
        actions=["unverify" if user.is_verified else "verify", "delete"],
    )


def verification_row(request: VerificationRequestWithUser) -> VerificationRow:
    actions = ["approve", "reject"] if request.is_pending else []
    actions.append("view_documents")
    return VerificationRow(
        id=request.id,
        user_id=request.user_id,
        owner_name=display_name(request.user),
        owner_email=request.user.email if request.user else None,
        document_type=request.document_type,
        status=request.status,
        status_label=request.status.value.capitalize(),
        admin_note=request.admin_note,
        created=format_date(request.created_at),
        actions=actions,
    )


def record_row(record, car_counts: Optional[Mapping[str, int]] = None):
    """car_counts maps user id to listing count; users absent from it own no cars"""
    if isinstance(record, VerificationRequestWithUser):
        return verification_row(record)
    return user_row(record, (car_counts or {}).get(record.id, 0))
