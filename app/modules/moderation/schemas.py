from pydantic import BaseModel
from typing import Optional, List
from enum import Enum


class VerificationAction(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"


class RejectRequest(BaseModel):
    note: Optional[str] = None


class UserVerificationUpdate(BaseModel):
    verified: bool


class ModerationResult(BaseModel):
    message: str
    completed_steps: List[str]
    refresh_error: Optional[str] = None


class DocumentImages(BaseModel):
    request_id: str
    document_type: Optional[str] = None
    front_image_url: Optional[str] = None
    back_image_url: Optional[str] = None


class DialogType(str, Enum):
    DELETE_USER = "delete_user"
    REJECT_VERIFICATION = "reject_verification"


class DialogState(BaseModel):
    show: bool
    type: Optional[DialogType] = None
    title: str = ""
    message: str = ""
    target_id: Optional[str] = None
    input_value: str = ""
    accepts_input: bool = False


class DialogInput(BaseModel):
    input_value: str = ""
