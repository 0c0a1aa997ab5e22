from fastapi import APIRouter, Depends, HTTPException
from app.core.context import AdminContext
from app.core.dependencies import get_admin_context, get_gateway
from app.database.gateway import DataGateway
from app.modules.auth.schemas import LoginRequest, LoginResponse, SessionResponse
from app.modules.auth.service import AuthService
from app.modules.dashboard.service import refresh_dashboard

router = APIRouter(prefix="/auth", tags=["auth"])


def get_auth_service() -> AuthService:
    return AuthService()


@router.post("/login", response_model=LoginResponse)
async def login(
    login_data: LoginRequest,
    context: AdminContext = Depends(get_admin_context),
    gateway: DataGateway = Depends(get_gateway),
    service: AuthService = Depends(get_auth_service)
):
    """Check the static credentials and load the dashboard data"""
    service.login(login_data, context.session)
    load_error = None
    try:
        refresh_dashboard(gateway, context.state)
    except HTTPException as e:
        # Still logged in; the operator can hit refresh
        load_error = e.detail
    return LoginResponse(authenticated=True, message="Login successful!", load_error=load_error)


@router.post("/logout", response_model=SessionResponse)
async def logout(
    context: AdminContext = Depends(get_admin_context),
    service: AuthService = Depends(get_auth_service)
):
    """Clear the persisted flag and drop loaded data"""
    service.logout(context.session)
    context.reset()
    return SessionResponse(authenticated=False)


@router.get("/session", response_model=SessionResponse)
async def get_session(context: AdminContext = Depends(get_admin_context)):
    return SessionResponse(authenticated=context.session.authenticated)
