"""
In-memory state behind the dashboard: the loaded collections, the active tab,
the search term and the current page. Filtering and paging are derived on read.
"""

from app.modules.dashboard.schemas import (
    AdminStats, CarListingWithUser, DashboardRecord, DashboardSnapshot, Tab,
    UserProfile, VerificationRequestWithUser
)
from typing import List, Optional
from datetime import datetime
import math

DEFAULT_PAGE_SIZE = 10


class ViewState:
    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE):
        self.page_size = page_size
        self.users: List[UserProfile] = []
        self.cars: List[CarListingWithUser] = []
        self.verification_requests: List[VerificationRequestWithUser] = []
        self.stats = AdminStats()
        self.loaded_at: Optional[datetime] = None
        self.active_tab = Tab.OVERVIEW
        self.search_term = ""
        self.current_page = 1

    @property
    def loaded(self) -> bool:
        return self.loaded_at is not None

    def apply(self, snapshot: DashboardSnapshot) -> None:
        """Replace all collections with a fully loaded snapshot"""
        self.users = list(snapshot.users)
        self.cars = list(snapshot.cars)
        self.verification_requests = list(snapshot.verification_requests)
        self.stats = snapshot.stats
        self.loaded_at = snapshot.loaded_at
        # Deletes can shrink the list under the current page
        self.current_page = self._clamp(self.current_page)

    def _base_records(self) -> List[DashboardRecord]:
        if self.active_tab == Tab.VERIFICATIONS:
            return list(self.verification_requests)
        # overview and users both list profiles
        return list(self.users)

    def filtered_records(self) -> List[DashboardRecord]:
        records = self._base_records()
        if not self.search_term:
            return records
        return [record for record in records if record.matches(self.search_term)]

    def page_count(self) -> int:
        return math.ceil(len(self.filtered_records()) / self.page_size)

    def paged_records(self) -> List[DashboardRecord]:
        start = (self.current_page - 1) * self.page_size
        return self.filtered_records()[start:start + self.page_size]

    def _clamp(self, page: int) -> int:
        return max(1, min(page, max(self.page_count(), 1)))

    def set_tab(self, tab: Tab) -> None:
        self.active_tab = Tab(tab)
        self.current_page = 1

    def set_search(self, term: str) -> None:
        self.search_term = term or ""
        self.current_page = 1

    def clear_search(self) -> None:
        self.set_search("")

    def go_to_page(self, page: int) -> int:
        self.current_page = self._clamp(page)
        return self.current_page

    def next_page(self) -> int:
        return self.go_to_page(self.current_page + 1)

    def previous_page(self) -> int:
        return self.go_to_page(self.current_page - 1)

    def find_request(self, request_id: str) -> Optional[VerificationRequestWithUser]:
        return next((r for r in self.verification_requests if r.id == request_id), None)

    def find_user(self, user_id: str) -> Optional[UserProfile]:
        return next((u for u in self.users if u.id == user_id), None)
