"""Auth API schemas."""

from pydantic import BaseModel, EmailStr, Field, model_validator


class SignInRequest(BaseModel):
    """Request body for POST /auth/sign-in."""

    email: EmailStr = Field(...)
    password: str = Field(..., min_length=1)


class SignUpRequest(BaseModel):
    """Request body for POST /auth/sign-up. The mismatch check is done by the
    login view model so the notice text matches the login screen."""

    email: EmailStr = Field(...)
    password: str = Field(..., min_length=6, description="Password (min 6 characters)")
    password_confirm: str = Field(...)


class FederatedSignInRequest(BaseModel):
    """Credential returned by the Google sign-in popup."""

    id_token: str | None = Field(None, description="Google ID token")
    access_token: str | None = Field(None, description="Google OAuth access token")

    @model_validator(mode="after")
    def one_token_present(self) -> "FederatedSignInRequest":
        if not self.id_token and not self.access_token:
            raise ValueError("id_token or access_token is required")
        return self


class PasswordResetRequest(BaseModel):
    """Email may be empty; the view model answers with a notice in that case."""

    email: str = Field(default="")
