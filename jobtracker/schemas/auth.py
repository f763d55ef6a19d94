from pydantic import EmailStr, field_validator, model_validator

from jobtracker.schemas.common import CamelModel, PublicUser

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6


def _check_username(v: str) -> str:
    v = v.strip()
    if len(v) < MIN_USERNAME_LENGTH:
        raise ValueError(f"Username must be at least {MIN_USERNAME_LENGTH} characters long")
    return v


class UserRegister(CamelModel):
    username: str
    email: EmailStr
    password: str

    @field_validator("username")
    @classmethod
    def username_min_length(cls, v: str) -> str:
        return _check_username(v)

    @field_validator("password")
    @classmethod
    def password_min_length(cls, v: str) -> str:
        if len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
        return v


class UserLogin(CamelModel):
    username: str
    password: str

    @model_validator(mode="after")
    def both_present(self):
        if not self.username.strip() or not self.password:
            raise ValueError("Username and password are required")
        return self


class UserResponse(PublicUser):
    pass


class AuthResponse(CamelModel):
    user: UserResponse


class UserProfileUpdate(CamelModel):
    username: str | None = None
    email: EmailStr | None = None
    current_password: str | None = None
    new_password: str | None = None

    @field_validator("username")
    @classmethod
    def username_min_length(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return _check_username(v)

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_means_unchanged(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("new_password")
    @classmethod
    def blank_password_means_unchanged(cls, v: str | None) -> str | None:
        return v or None

    @model_validator(mode="after")
    def password_change_valid(self):
        if self.new_password is not None:
            if not self.current_password:
                raise ValueError("Current password is required to change password")
            if len(self.new_password) < MIN_PASSWORD_LENGTH:
                raise ValueError(f"New password must be at least {MIN_PASSWORD_LENGTH} characters long")
        return self
