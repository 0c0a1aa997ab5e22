from app.config.settings import Settings, settings as default_settings
from app.modules.auth.schemas import LoginRequest
from app.modules.auth.session import AdminSession
from fastapi import HTTPException
from typing import Optional
import logging

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"


class AuthService:
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings

    def check_credentials(self, username: str, password: str) -> bool:
        """Plain comparison against the configured pair; unset credentials never match"""
        if not self.settings.has_admin_credentials:
            return False
        return username == self.settings.admin_email and password == self.settings.admin_password

    def login(self, login_data: LoginRequest, session: AdminSession) -> None:
        """Mark the session authenticated, or raise a generic 401 without saying which field was wrong"""
        if not self.check_credentials(login_data.username, login_data.password):
            logger.warning("Rejected admin login attempt")
            raise HTTPException(status_code=401, detail=INVALID_CREDENTIALS)
        session.mark_authenticated()
        logger.info("Admin logged in")

    def logout(self, session: AdminSession) -> None:
        session.teardown()
        logger.info("Admin logged out")
