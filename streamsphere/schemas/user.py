# streamsphere/schemas/user.py
from typing import Annotated, Any, Dict, Optional
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, StringConstraints

from streamsphere.core.errors import ValidationFailed
from streamsphere.models.user import UserRole
from streamsphere.schemas.base import CamelModel

# base64 inflates payloads by roughly 37%
MAX_IMAGE_BYTES = 5 * 1024 * 1024
MAX_IMAGE_FILE_LENGTH = int(MAX_IMAGE_BYTES * 1.37)
IMAGE_DATA_URL_PREFIX = "data:image/"


class UserRead(CamelModel):
    id: str
    name: str
    email: str
    role: UserRole
    image: Optional[str] = None
    email_verified: bool
    created_at: datetime
    updated_at: datetime


class SessionRead(BaseModel):
    user: UserRead


class RoleChangeResponse(BaseModel):
    success: bool = True
    message: str
    user: UserRead


class UserCreate(BaseModel):
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    email: EmailStr
    password: str = Field(min_length=8, description="Plain-text password")
    role: UserRole = UserRole.USER


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class ForgotPasswordRequest(CamelModel):
    email: EmailStr
    redirect_to: Optional[str] = None


class ResetPasswordRequest(CamelModel):
    token: str
    new_password: str = Field(min_length=8)


class StatusResponse(BaseModel):
    status: bool = True


class ProfileUpdate(BaseModel):
    """
    PUT /user/profile. Only the keys present in the body are applied;
    ``image_set`` tells "clear the image" apart from "leave it alone".
    """
    name: Optional[str] = None
    image: Optional[str] = None
    image_set: bool = False

    @classmethod
    def parse(cls, body: Dict[str, Any]) -> "ProfileUpdate":
        if not any(k in body for k in ("name", "image", "imageFile")):
            raise ValidationFailed("No fields to update", "NO_FIELDS")

        update = cls()

        if "name" in body:
            name = body["name"]
            trimmed = name.strip() if isinstance(name, str) else ""
            if not trimmed:
                raise ValidationFailed("Name must be a non-empty string", "INVALID_NAME")
            update.name = trimmed

        # an uploaded file wins over a URL sent in the same request
        if "imageFile" in body:
            image_file = body["imageFile"]
            if image_file is not None:
                if not isinstance(image_file, str) or not image_file.startswith(IMAGE_DATA_URL_PREFIX):
                    raise ValidationFailed(
                        "Invalid image format. Must be a base64 encoded image",
                        "INVALID_IMAGE_FORMAT",
                    )
                if len(image_file) > MAX_IMAGE_FILE_LENGTH:
                    raise ValidationFailed(
                        "Image file is too large. Maximum size is 5MB",
                        "IMAGE_TOO_LARGE",
                    )
            update.image = image_file
            update.image_set = True
        elif "image" in body:
            image = body["image"]
            if image is not None and not isinstance(image, str):
                raise ValidationFailed("Image must be a URL string", "INVALID_IMAGE_URL")
            update.image = image
            update.image_set = True

        return update


class SwitchRoleRequest(BaseModel):
    role: UserRole

    @classmethod
    def parse(cls, body: Dict[str, Any]) -> "SwitchRoleRequest":
        role = body.get("role")
        if not role:
            raise ValidationFailed("Role is required", "ROLE_REQUIRED")
        try:
            return cls(role=UserRole(role))
        except ValueError:
            raise ValidationFailed("Invalid role. Must be 'user' or 'creator'", "INVALID_ROLE")
