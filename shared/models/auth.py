"""Pydantic models for the sign-in boundary."""

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    """The identity behind a session, as reported by the auth provider."""

    model_config = ConfigDict(extra="ignore")

    id: str
    email: str | None = None
    role: str | None = None


class AuthSession(BaseModel):
    """A signed-in session. access_token is forwarded to the store on every request."""

    model_config = ConfigDict(extra="ignore")

    access_token: str
    token_type: str = "bearer"
    expires_in: int | None = None
    refresh_token: str | None = None
    user: AuthUser


class AuthResult(BaseModel):
    """Outcome of a sign-in attempt. error holds the provider's message verbatim."""

    session: AuthSession | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.session is not None and self.error is None


class LoginRequest(BaseModel):
    email: str
    password: str
