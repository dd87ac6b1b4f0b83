"""Account deletion API schemas."""

from pydantic import BaseModel, Field

from movie_watchlist.schemas.notice import NoticeResponse


class AccountDeleteRequest(BaseModel):
    """Answers to the questions the deletion workflow may ask.

    confirmed answers the confirmation dialog. password answers the password
    prompt and federated_id_token the Google challenge; leave them empty to
    cancel that step.
    """

    confirmed: bool = False
    password: str | None = None
    federated_id_token: str | None = None


class AccountDeleteResponse(BaseModel):
    state: str = Field(..., description="Final deletion state")
    transitions: list[str] = Field(default_factory=list)
    notice: NoticeResponse | None = None
