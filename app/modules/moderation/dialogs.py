from app.modules.dashboard.schemas import UserProfile, VerificationRequest, VerificationRequestWithUser
from app.modules.moderation.schemas import DialogState, DialogType, DocumentImages
from typing import Optional


class ConfirmationDialog:
    """Single confirm/cancel dialog shared by "delete user" and "reject verification"."""

    def __init__(self):
        self.close()

    def close(self) -> None:
        self.show = False
        self.type: Optional[DialogType] = None
        self.title = ""
        self.message = ""
        self.target_id: Optional[str] = None
        self.input_value = ""

    def _open(self, dialog_type: DialogType, target_id: str, title: str, message: str) -> None:
        self.show = True
        self.type = dialog_type
        self.target_id = target_id
        self.title = title
        self.message = message
        self.input_value = ""

    def open_delete_user(self, user: UserProfile) -> None:
        name = user.full_name or user.email
        self._open(
            DialogType.DELETE_USER,
            user.id,
            "Delete User",
            f"Are you sure you want to delete {name}? "
            "All of their car listings and verification requests will be deleted too.",
        )

    def open_reject_verification(self, request: VerificationRequestWithUser) -> None:
        name = "this user"
        if request.user:
            name = request.user.full_name or request.user.email or name
        self._open(
            DialogType.REJECT_VERIFICATION,
            request.id,
            "Reject Verification",
            f"Are you sure you want to reject verification for {name}?",
        )

    def set_input(self, value: str) -> None:
        self.input_value = value or ""

    def state(self) -> DialogState:
        return DialogState(
            show=self.show,
            type=self.type,
            title=self.title,
            message=self.message,
            target_id=self.target_id,
            input_value=self.input_value,
            accepts_input=self.type == DialogType.REJECT_VERIFICATION,
        )


def document_images(request: VerificationRequest) -> DocumentImages:
    return DocumentImages(
        request_id=request.id,
        document_type=request.document_type,
        front_image_url=request.front_image_url,
        back_image_url=request.back_image_url,
    )
