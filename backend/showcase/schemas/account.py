"""Account Schemas — signup, login, account edit, password and profile bodies.

Invariants:
    - username: 1-50 chars, stripped, no whitespace or "/" inside (it is a
      path segment)
    - password: 8-72 chars and at most 72 UTF-8 bytes (bcrypt's input limit)
    - Form field names (phoneNumber, profileImage) accepted as camelCase aliases
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_PASSWORD_BYTES = 72


def _clean_username(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("username cannot be empty or whitespace")
    if any(c.isspace() for c in v):
        raise ValueError("username cannot contain whitespace")
    if "/" in v:
        raise ValueError("username cannot contain '/'")
    return v


def _check_password_bytes(v: str) -> str:
    if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password cannot exceed {MAX_PASSWORD_BYTES} bytes")
    return v


class LoginForm(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1, max_length=72)


class SignupForm(BaseModel):
    """Signup body. purpose/experience/profileImage seed the profile when present."""
    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=8, max_length=72)
    phone_number: str = Field(alias="phoneNumber", min_length=3, max_length=30)
    purpose: str | None = Field(None, max_length=2000)
    experience: str | None = Field(None, max_length=5000)
    profile_image: str | None = Field(None, alias="profileImage", max_length=500)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        return _clean_username(v)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        return _check_password_bytes(v)


class AccountUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str | None = Field(None, min_length=1, max_length=50)
    phone_number: str | None = Field(
        None, alias="phoneNumber", min_length=3, max_length=30,
    )

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str | None) -> str | None:
        return None if v is None else _clean_username(v)


class PasswordUpdate(BaseModel):
    password: str = Field(min_length=8, max_length=72)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        return _check_password_bytes(v)


class ProfileForm(BaseModel):
    """Profile create/edit body. skills: comma-delimited text or a list."""
    model_config = ConfigDict(populate_by_name=True)

    bio: str | None = Field(None, max_length=5000)
    purpose: str | None = Field(None, max_length=2000)
    skills: str | list[str] | None = None
    profile_image: str | None = Field(None, alias="profileImage", max_length=500)
