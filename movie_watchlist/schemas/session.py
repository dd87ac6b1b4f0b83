"""Session and identity API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from movie_watchlist.application.dtos.identity import Identity, Session


class IdentityResponse(BaseModel):
    """The signed-in account as shown by the view."""

    uid: str
    email: str | None = None
    display_name: str | None = None
    label: str = Field(..., description="Email, else display name, else uid")
    providers: list[str] = Field(default_factory=list)
    signed_in_at: datetime | None = None

    @classmethod
    def from_identity(cls, identity: Identity) -> "IdentityResponse":
        return cls(
            uid=identity.uid,
            email=identity.email,
            display_name=identity.display_name,
            label=identity.label,
            providers=[p.value for p in identity.providers],
            signed_in_at=identity.signed_in_at,
        )


class SessionResponse(BaseModel):
    """Response for GET /session."""

    loading: bool
    signed_in: bool
    route: str | None = Field(None, description="'login', 'home', or None while loading")
    identity: IdentityResponse | None = None

    @classmethod
    def from_session(cls, session: Session, route: str | None) -> "SessionResponse":
        return cls(
            loading=session.loading,
            signed_in=session.signed_in,
            route=route,
            identity=IdentityResponse.from_identity(session.identity) if session.identity else None,
        )
