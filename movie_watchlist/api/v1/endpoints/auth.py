"""Auth API: the login screen's commands plus sign-out.

Each command goes through the login view model, so failures come back as the
same notices the login screen shows (status by error kind).
"""

from fastapi import APIRouter, Depends

from movie_watchlist.api.v1.dependencies import command_response, get_home, get_login
from movie_watchlist.application.dtos.identity import FederatedCredential
from movie_watchlist.application.use_cases.home import HomeViewModel
from movie_watchlist.application.use_cases.login import LoginMode, LoginViewModel
from movie_watchlist.schemas.auth import (
    FederatedSignInRequest,
    PasswordResetRequest,
    SignInRequest,
    SignUpRequest,
)
from movie_watchlist.schemas.notice import CommandResponse

router = APIRouter()


@router.post("/sign-in", response_model=CommandResponse)
async def sign_in(body: SignInRequest, login: LoginViewModel = Depends(get_login)):
    login.switch_mode(LoginMode.SIGN_IN)
    return command_response(await login.submit(body.email, body.password))


@router.post("/sign-up", response_model=CommandResponse)
async def sign_up(body: SignUpRequest, login: LoginViewModel = Depends(get_login)):
    """Create an account; the new identity is signed in on success."""
    login.switch_mode(LoginMode.SIGN_UP)
    return command_response(
        await login.submit(body.email, body.password, body.password_confirm)
    )


@router.post("/federated", response_model=CommandResponse)
async def sign_in_federated(
    body: FederatedSignInRequest, login: LoginViewModel = Depends(get_login)
):
    credential = FederatedCredential(id_token=body.id_token, access_token=body.access_token)
    return command_response(await login.sign_in_federated(credential))


@router.post("/sign-out", response_model=CommandResponse)
async def sign_out(home: HomeViewModel = Depends(get_home)):
    return command_response(await home.sign_out())


@router.post("/password-reset", response_model=CommandResponse)
async def password_reset(
    body: PasswordResetRequest, login: LoginViewModel = Depends(get_login)
):
    return command_response(await login.reset_password(body.email))
