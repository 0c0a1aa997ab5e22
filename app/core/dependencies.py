"""
Core dependencies for route protection and access to the admin context
"""

from fastapi import Depends, HTTPException, Request, status
from app.config import settings
from app.core.context import AdminContext, create_admin_context
from app.database.gateway import DataGateway
from app.database.supabase_client import get_supabase
from supabase import Client
import logging

logger = logging.getLogger(__name__)


def get_gateway(supabase: Client = Depends(get_supabase)) -> DataGateway:
    return DataGateway(supabase)


def get_admin_context(request: Request) -> AdminContext:
    """Context created at startup; built lazily if the app was started without lifespan events"""
    context = getattr(request.app.state, "admin_context", None)
    if context is None:
        context = create_admin_context(settings)
        request.app.state.admin_context = context
    return context


def require_admin(context: AdminContext = Depends(get_admin_context)) -> AdminContext:
    """Dependency guarding every dashboard and moderation route"""
    if not context.session.authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated"
        )
    return context
