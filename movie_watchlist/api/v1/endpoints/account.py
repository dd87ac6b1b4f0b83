"""Account endpoint: delete the signed-in account and its saved movies."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from movie_watchlist.api.v1.dependencies import (
    RequestDeletionPrompter,
    get_home,
    require_identity,
)
from movie_watchlist.application.use_cases.home import HomeViewModel
from movie_watchlist.core.exception_handlers import status_for_kind
from movie_watchlist.domain.enums import DeletionState
from movie_watchlist.schemas.account import AccountDeleteRequest, AccountDeleteResponse
from movie_watchlist.schemas.notice import NoticeResponse

router = APIRouter(dependencies=[Depends(require_identity)])


@router.post("/delete", response_model=AccountDeleteResponse)
async def delete_account(body: AccountDeleteRequest, home: HomeViewModel = Depends(get_home)):
    """Run the deletion workflow with the answers in the body.

    200 for SUCCESS and for IDLE (cancelled or asked to sign in again);
    FAILURE is reported with the status of the error kind.
    """
    prompter = RequestDeletionPrompter(
        confirmed=body.confirmed,
        password=body.password,
        federated_id_token=body.federated_id_token,
    )
    outcome = await home.delete_account(prompter)
    response = AccountDeleteResponse(
        state=outcome.state.value,
        transitions=[s.value for s in outcome.transitions],
        notice=NoticeResponse.from_notice(outcome.notice) if outcome.notice else None,
    )
    status = 200
    if outcome.state is DeletionState.FAILURE:
        status = status_for_kind(outcome.notice.kind if outcome.notice else None)
    return JSONResponse(status_code=status, content=response.model_dump(mode="json"))
