from app.database.gateway import DataGateway, GatewayError, PROFILES, CARS, VERIFICATION_REQUESTS
from app.modules.dashboard.schemas import (
    AdminStats, CarListing, CarListingWithUser, DashboardSnapshot,
    UserProfile, VerificationRequest, VerificationRequestWithUser, VerificationStatus
)
from typing import Any, Dict, List, Sequence, Type, TypeVar, TYPE_CHECKING
from fastapi import HTTPException
from pydantic import BaseModel, ValidationError
from datetime import datetime, timezone
import logging

if TYPE_CHECKING:
    from app.modules.dashboard.view_state import ViewState

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def compute_stats(
    users: Sequence[UserProfile],
    cars: Sequence[CarListing],
    requests: Sequence[VerificationRequest]
) -> AdminStats:
    """Aggregate counters shown on the stat cards. No rounding; formatting happens at render time."""
    return AdminStats(
        total_users=len(users),
        verified_users=sum(1 for u in users if u.is_verified),
        total_cars=len(cars),
        verified_cars=sum(1 for c in cars if c.is_verified),
        featured_cars=sum(1 for c in cars if c.is_featured),
        sold_cars=sum(1 for c in cars if c.is_sold),
        pending_verifications=sum(1 for r in requests if r.status == VerificationStatus.PENDING),
        total_views=sum(c.views or 0 for c in cars),
        total_value=sum(c.price or 0 for c in cars),
    )


def attach_users(rows: List[Dict[str, Any]], profiles_by_id: Dict[str, Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Copy each row with its owner's profile under "user" (None when the profile is gone)"""
    joined = []
    for row in rows:
        item = dict(row)
        item["user"] = profiles_by_id.get(row.get("user_id"))
        joined.append(item)
    return joined


class DashboardService:
    def __init__(self, gateway: DataGateway):
        self.gateway = gateway

    def _join_owners(self, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        profiles_by_id = self.gateway.fetch_by_ids(PROFILES, (row.get("user_id") for row in rows))
        return attach_users(rows, profiles_by_id)

    @staticmethod
    def _build(table: str, model: Type[ModelT], rows: List[Dict[str, Any]]) -> List[ModelT]:
        """Rows the store returns in an unexpected shape fail the load like a store error"""
        try:
            return [model(**row) for row in rows]
        except ValidationError as e:
            logger.error(f"Malformed {table} row: {e}")
            raise GatewayError(f"load {table}", str(e)) from e

    def load_all(self) -> DashboardSnapshot:
        """Fetch the three collections and join owners. Any gateway error aborts the whole load."""
        request_rows = self._join_owners(self.gateway.list_rows(VERIFICATION_REQUESTS))
        user_rows = self.gateway.list_rows(PROFILES)
        car_rows = self._join_owners(self.gateway.list_rows(CARS))

        users = self._build(PROFILES, UserProfile, user_rows)
        cars = self._build(CARS, CarListingWithUser, car_rows)
        requests = self._build(VERIFICATION_REQUESTS, VerificationRequestWithUser, request_rows)

        snapshot = DashboardSnapshot(
            users=users,
            cars=cars,
            verification_requests=requests,
            stats=compute_stats(users, cars, requests),
            loaded_at=datetime.now(timezone.utc),
        )
        logger.info(
            f"Loaded admin data: {len(users)} users, {len(cars)} cars, "
            f"{len(requests)} verification requests"
        )
        return snapshot


def refresh_dashboard(gateway: DataGateway, state: "ViewState") -> DashboardSnapshot:
    """Reload everything and swap it into the view state; previous state survives a failed load"""
    try:
        snapshot = DashboardService(gateway).load_all()
    except GatewayError as e:
        logger.error(f"Error loading admin data: {e.message}")
        raise HTTPException(status_code=502, detail=f"Failed to load admin data: {e.message}")
    state.apply(snapshot)
    return snapshot
