from fastapi import APIRouter, Depends, HTTPException
from app.core.context import AdminContext
from app.core.dependencies import get_gateway, require_admin
from app.database.gateway import DataGateway, GatewayError, VERIFICATION_REQUESTS
from app.modules.dashboard.schemas import VerificationRequest
from app.modules.moderation.dialogs import document_images
from app.modules.moderation.schemas import (
    DialogInput, DialogState, DocumentImages, ModerationResult,
    RejectRequest, UserVerificationUpdate, VerificationAction
)
from app.modules.moderation.service import ModerationService
from typing import Optional

router = APIRouter(prefix="/moderation", tags=["moderation"])


def get_moderation_service(
    context: AdminContext = Depends(require_admin),
    gateway: DataGateway = Depends(get_gateway)
) -> ModerationService:
    return ModerationService(gateway, context.state)


@router.post("/verifications/{request_id}/approve", response_model=ModerationResult)
async def approve_verification(
    request_id: str,
    service: ModerationService = Depends(get_moderation_service)
):
    """Approve a pending request and mark its owner verified"""
    return service.approve_or_reject(request_id, VerificationAction.APPROVE)


@router.post("/verifications/{request_id}/reject", response_model=ModerationResult)
async def reject_verification(
    request_id: str,
    body: Optional[RejectRequest] = None,
    service: ModerationService = Depends(get_moderation_service)
):
    """Reject a pending request with an optional reason"""
    return service.approve_or_reject(request_id, VerificationAction.REJECT, body.note if body else None)


@router.get("/verifications/{request_id}/documents", response_model=DocumentImages)
async def get_verification_documents(
    request_id: str,
    context: AdminContext = Depends(require_admin),
    gateway: DataGateway = Depends(get_gateway)
):
    """Front/back document images for the image viewer"""
    request = context.state.find_request(request_id)
    if request is None:
        # Submitted after the last load
        try:
            row = gateway.get_row(VERIFICATION_REQUESTS, request_id)
        except GatewayError as e:
            raise HTTPException(status_code=502, detail=f"Failed to load verification request: {e.message}")
        if row is None:
            raise HTTPException(status_code=404, detail="Verification request not found")
        request = VerificationRequest(**row)
    return document_images(request)


@router.put("/users/{user_id}/verification", response_model=ModerationResult)
async def set_user_verification(
    user_id: str,
    body: UserVerificationUpdate,
    service: ModerationService = Depends(get_moderation_service)
):
    return service.set_user_verification(user_id, body.verified)


@router.delete("/users/{user_id}", response_model=ModerationResult)
async def delete_user(
    user_id: str,
    service: ModerationService = Depends(get_moderation_service)
):
    """Delete a user's cars, verification requests and profile, in that order"""
    return service.delete_user(user_id)


@router.get("/dialog", response_model=DialogState)
async def get_dialog(context: AdminContext = Depends(require_admin)):
    return context.dialog.state()


@router.post("/dialog/delete-user/{user_id}", response_model=DialogState)
async def open_delete_user_dialog(user_id: str, context: AdminContext = Depends(require_admin)):
    user = context.state.find_user(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    context.dialog.open_delete_user(user)
    return context.dialog.state()


@router.post("/dialog/reject-verification/{request_id}", response_model=DialogState)
async def open_reject_dialog(request_id: str, context: AdminContext = Depends(require_admin)):
    request = context.state.find_request(request_id)
    if request is None:
        raise HTTPException(status_code=404, detail="Verification request not found")
    context.dialog.open_reject_verification(request)
    return context.dialog.state()


@router.put("/dialog/input", response_model=DialogState)
async def set_dialog_input(body: DialogInput, context: AdminContext = Depends(require_admin)):
    """Rejection reason typed into the dialog"""
    context.dialog.set_input(body.input_value)
    return context.dialog.state()


@router.post("/dialog/confirm", response_model=ModerationResult)
async def confirm_dialog(
    context: AdminContext = Depends(require_admin),
    service: ModerationService = Depends(get_moderation_service)
):
    return service.confirm_dialog(context.dialog)


@router.delete("/dialog", response_model=DialogState)
async def cancel_dialog(context: AdminContext = Depends(require_admin)):
    context.dialog.close()
    return context.dialog.state()
