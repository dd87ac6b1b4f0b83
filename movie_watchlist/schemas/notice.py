"""Notice and command result schemas."""

from pydantic import BaseModel

from movie_watchlist.application.dtos.notice import Notice


class NoticeResponse(BaseModel):
    message: str
    level: str
    kind: str | None = None

    @classmethod
    def from_notice(cls, notice: Notice) -> "NoticeResponse":
        return cls(
            message=notice.message,
            level=notice.level.value,
            kind=notice.kind.value if notice.kind else None,
        )


class CommandResponse(BaseModel):
    """Result of a command: ok unless an error notice was produced."""

    ok: bool = True
    notice: NoticeResponse | None = None


class NoticeListResponse(BaseModel):
    items: list[NoticeResponse]
