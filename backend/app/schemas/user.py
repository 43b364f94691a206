"""
MemoPad Backend — Account Request/Response Schemas
====================================================

What:  Pydantic models for the signup, login, profile and session endpoints.
How:   Field names are snake_case in Python and camelCase on the wire
       (`userId`, `currentPassword`, ...). FastAPI serializes response models
       by alias, so clients only ever see the camelCase names.

Presence checks:
    Required strings carry min_length=1, so a missing or empty field fails
    request validation (HTTP 400) before any handler code runs. Nothing
    beyond presence is validated.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class SignupRequest(_CamelModel):
    name: str = Field(min_length=1, description="Display name")
    email: str = Field(min_length=1, description="Login email, must be unused")
    password: str = Field(min_length=1, description="Plaintext password")


class LoginRequest(_CamelModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class EditProfileRequest(_CamelModel):
    """
    Profile edit. Every `new*` field is optional; an omitted field keeps the
    stored value. `currentPassword` is always required and always verified.
    """
    user_id: int = Field(alias="userId")
    current_password: str = Field(alias="currentPassword", min_length=1)
    new_name: Optional[str] = Field(default=None, alias="newName", min_length=1)
    new_email: Optional[str] = Field(default=None, alias="newEmail", min_length=1)
    new_password: Optional[str] = Field(default=None, alias="newPassword", min_length=1)


class DeleteAccountRequest(_CamelModel):
    user_id: int = Field(alias="userId")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class UserResponse(_CamelModel):
    """Returned by signup, login and editProfile. Never carries the password hash."""
    user_id: int = Field(alias="userId")
    name: str
    email: str


class SessionUserResponse(BaseModel):
    """Returned by getUserData: the identity snapshot held in the session."""
    name: str
    email: str
