from pydantic import BaseModel, ConfigDict, Field, field_validator

from synergysphere.schemas.common import require_text

class RegisterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str
    password: str
    full_name: str = Field(alias="fullName")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return require_text(v, "email").lower()

    @field_validator("password")
    @classmethod
    def check_password(cls, v):
        require_text(v, "password")
        return v

    @field_validator("full_name")
    @classmethod
    def check_full_name(cls, v):
        return require_text(v, "fullName")

class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return require_text(v, "email").lower()

    @field_validator("password")
    @classmethod
    def check_password(cls, v):
        require_text(v, "password")
        return v

class ChangePasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_password: str = Field(alias="currentPassword")
    new_password: str = Field(alias="newPassword")

    @field_validator("current_password")
    @classmethod
    def check_current(cls, v):
        require_text(v, "currentPassword")
        return v

    @field_validator("new_password")
    @classmethod
    def check_new(cls, v):
        require_text(v, "newPassword")
        return v
