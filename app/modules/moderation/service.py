from app.database.gateway import DataGateway, GatewayError, PROFILES, CARS, VERIFICATION_REQUESTS
from app.modules.dashboard.schemas import VerificationStatus
from app.modules.dashboard.service import DashboardService
from app.modules.dashboard.view_state import ViewState
from app.modules.moderation.dialogs import ConfirmationDialog
from app.modules.moderation.saga import Saga, PartialCompletionError
from app.modules.moderation.schemas import DialogType, ModerationResult, VerificationAction
from typing import Optional
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

VERIFICATION_FAILED = "Failed to update verification"
USER_ACTION_FAILED = "Failed to perform action"

_STATUS_FOR_ACTION = {
    VerificationAction.APPROVE: VerificationStatus.APPROVED,
    VerificationAction.REJECT: VerificationStatus.REJECTED,
}


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ModerationService:
    def __init__(self, gateway: DataGateway, state: ViewState):
        self.gateway = gateway
        self.state = state

    def _run(self, saga: Saga, failure_prefix: str):
        """Execute a saga, mapping plain failures to 502 and half-applied ones to 409"""
        try:
            return saga.execute()
        except PartialCompletionError as e:
            raise HTTPException(
                status_code=409,
                detail={
                    "message": f"{failure_prefix}: {e.cause.message}",
                    "completed_steps": e.completed_steps,
                    "failed_step": e.failed_step,
                },
            )
        except GatewayError as e:
            logger.error(f"{saga.action} failed: {e.message}")
            raise HTTPException(status_code=502, detail=f"{failure_prefix}: {e.message}")

    def _reload(self) -> Optional[str]:
        """Refresh the view after a successful action; a failed refresh doesn't undo the action"""
        try:
            self.state.apply(DashboardService(self.gateway).load_all())
        except GatewayError as e:
            logger.error(f"Error reloading admin data: {e.message}")
            return f"Failed to load admin data: {e.message}"
        return None

    def approve_or_reject(
        self,
        request_id: str,
        action: VerificationAction,
        note: Optional[str] = None
    ) -> ModerationResult:
        """Move a pending request to approved/rejected; approving also verifies the owner's profile"""
        action = VerificationAction(action)
        request = self.state.find_request(request_id)
        if request is None:
            raise HTTPException(status_code=404, detail="Verification request not found")
        if not request.is_pending:
            raise HTTPException(
                status_code=409,
                detail=f"Verification request is already {request.status.value}"
            )

        status = _STATUS_FOR_ACTION[action]
        saga = Saga(f"{action.value} verification {request_id}")
        saga.step("update_request", lambda: self.gateway.update_row(VERIFICATION_REQUESTS, request_id, {
            "status": status.value,
            "admin_note": note or None,
            "updated_at": _now(),
        }))
        if action == VerificationAction.APPROVE:
            # user_id comes from the loaded collection, not a re-fetch
            saga.step("verify_profile", lambda: self.gateway.update_row(PROFILES, request.user_id, {
                "is_verified": True,
                "verification_status": VerificationStatus.APPROVED.value,
                "verified_at": _now(),
            }))

        completed = self._run(saga, VERIFICATION_FAILED)
        logger.info(f"Verification request {request_id} {status.value}")
        return ModerationResult(
            message=f"Verification {status.value} successfully",
            completed_steps=completed,
            refresh_error=self._reload(),
        )

    def set_user_verification(self, user_id: str, verified: bool) -> ModerationResult:
        saga = Saga(f"{'verify' if verified else 'unverify'} user {user_id}")
        saga.step("update_profile", lambda: self.gateway.update_row(PROFILES, user_id, {
            "is_verified": verified,
            "verification_status": VerificationStatus.APPROVED.value if verified else None,
            "verified_at": _now() if verified else None,
        }))
        completed = self._run(saga, USER_ACTION_FAILED)
        logger.info(f"User {user_id} {'verified' if verified else 'unverified'}")
        return ModerationResult(
            message=f"User {'verified' if verified else 'unverified'} successfully",
            completed_steps=completed,
            refresh_error=self._reload(),
        )

    def delete_user(self, user_id: str) -> ModerationResult:
        """Cascade: cars, then verification requests, then the profile. Each step needs the previous one."""
        saga = Saga(f"delete user {user_id}")
        saga.step("delete_cars", lambda: self.gateway.delete_where(CARS, "user_id", user_id))
        saga.step("delete_verification_requests",
                  lambda: self.gateway.delete_where(VERIFICATION_REQUESTS, "user_id", user_id))
        saga.step("delete_profile", lambda: self.gateway.delete_where(PROFILES, "id", user_id))
        completed = self._run(saga, USER_ACTION_FAILED)
        logger.info(f"User {user_id} and related data deleted")
        return ModerationResult(
            message="User and all related data deleted successfully",
            completed_steps=completed,
            refresh_error=self._reload(),
        )

    def confirm_dialog(self, dialog: ConfirmationDialog) -> ModerationResult:
        """Run the action the open dialog asks for; the dialog closes whatever the outcome"""
        if not dialog.show or dialog.target_id is None:
            raise HTTPException(status_code=400, detail="No confirmation pending")
        try:
            if dialog.type == DialogType.DELETE_USER:
                return self.delete_user(dialog.target_id)
            return self.approve_or_reject(
                dialog.target_id, VerificationAction.REJECT, dialog.input_value or None
            )
        finally:
            dialog.close()
