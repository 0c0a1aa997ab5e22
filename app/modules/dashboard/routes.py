from collections import Counter
from fastapi import APIRouter, Depends, Query
from app.core.context import AdminContext
from app.core.dependencies import get_gateway, require_admin
from app.database.gateway import DataGateway
from app.modules.dashboard.presentation import record_row, stat_cards
from app.modules.dashboard.schemas import (
    OverviewResponse, RecordPage, RefreshResponse, Tab, ViewUpdate
)
from app.modules.dashboard.service import refresh_dashboard
from app.modules.dashboard.view_state import ViewState
from typing import Optional

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def _page(state: ViewState) -> RecordPage:
    car_counts = Counter(car.user_id for car in state.cars)
    return RecordPage(
        tab=state.active_tab,
        search=state.search_term,
        page=state.current_page,
        page_count=state.page_count(),
        page_size=state.page_size,
        total=len(state.filtered_records()),
        items=[record_row(record, car_counts) for record in state.paged_records()],
    )


@router.get("/overview", response_model=OverviewResponse)
async def get_overview(context: AdminContext = Depends(require_admin)):
    """Stat cards plus the pending badge on the verifications tab"""
    state = context.state
    return OverviewResponse(
        active_tab=state.active_tab,
        stats=state.stats,
        cards=stat_cards(state.stats),
        pending_badge=state.stats.pending_verifications,
        loaded_at=state.loaded_at,
    )


@router.get("/records", response_model=RecordPage)
async def get_records(
    tab: Optional[Tab] = None,
    search: Optional[str] = None,
    page: Optional[int] = Query(default=None, ge=1),
    context: AdminContext = Depends(require_admin)
):
    """Current page of the active tab; query parameters update the view first"""
    state = context.state
    if tab is not None and tab != state.active_tab:
        state.set_tab(tab)
    if search is not None and search != state.search_term:
        state.set_search(search)
    if page is not None:
        state.go_to_page(page)
    return _page(state)


@router.put("/view", response_model=RecordPage)
async def update_view(update: ViewUpdate, context: AdminContext = Depends(require_admin)):
    state = context.state
    if update.tab is not None:
        state.set_tab(update.tab)
    if update.search is not None:
        state.set_search(update.search)
    if update.page is not None:
        state.go_to_page(update.page)
    return _page(state)


@router.delete("/view/search", response_model=RecordPage)
async def clear_search(context: AdminContext = Depends(require_admin)):
    context.state.clear_search()
    return _page(context.state)


@router.post("/view/next", response_model=RecordPage)
async def next_page(context: AdminContext = Depends(require_admin)):
    context.state.next_page()
    return _page(context.state)


@router.post("/view/previous", response_model=RecordPage)
async def previous_page(context: AdminContext = Depends(require_admin)):
    context.state.previous_page()
    return _page(context.state)


@router.post("/refresh", response_model=RefreshResponse)
async def refresh(
    context: AdminContext = Depends(require_admin),
    gateway: DataGateway = Depends(get_gateway)
):
    """Reload all collections from the store"""
    snapshot = refresh_dashboard(gateway, context.state)
    return RefreshResponse(message="Admin data refreshed", stats=snapshot.stats, loaded_at=snapshot.loaded_at)
