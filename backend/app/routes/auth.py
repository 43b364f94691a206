"""
MemoPad Backend — Account Route Handlers
==========================================

What:  Signup, login, logout, session inspection, profile edit, account deletion.
How:   Each handler validates its body (pydantic), calls UserService inside
       the request transaction, then reads or writes the caller's session.
Who:   Called by the frontend's auth pages and its session guard.

Session writes per endpoint:
    POST /signup         new session (any previous one is dropped), cookie set
    POST /login          new session (any previous one is dropped), cookie set
    POST /logout         session destroyed, cookie cleared
    POST /editProfile    name/email refreshed if the caller's session is this user's
    POST /deleteAccount  session destroyed, cookie cleared
    GET  /getUserData    read only
    GET  /checkSession   read only

Handlers that change rows commit (commit_session) before touching the
session store, so a failed commit never leaves a session behind.
"""

import logging

from fastapi import APIRouter, Depends, Response
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import commit_session, get_db_session
from app.exceptions import NotFoundError
from app.models.user import User
from app.schemas.common import ErrorResponse
from app.schemas.user import (
    DeleteAccountRequest,
    EditProfileRequest,
    LoginRequest,
    SessionUserResponse,
    SignupRequest,
    UserResponse,
)
from app.services.session_store import SessionStore
from app.services.user_service import user_service
from app.sessions import (
    ClientSession,
    clear_session_cookie,
    get_client_session,
    get_session_store,
    set_session_cookie,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Account"])


async def _start_session(
    store: SessionStore,
    response: Response,
    client: ClientSession,
    user: User,
) -> None:
    """Replace the caller's session with a fresh one for `user`."""
    if client.handle:
        await store.destroy(client.handle)
    handle = await store.create(user.id, user.name, user.email)
    set_session_cookie(response, handle)


def _user_response(user: User) -> UserResponse:
    return UserResponse(user_id=user.id, name=user.name, email=user.email)


@router.post(
    "/signup",
    response_model=UserResponse,
    responses={
        409: {"description": "Email already in use", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create an account and log in",
)
async def signup(
    body: SignupRequest,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
    client: ClientSession = Depends(get_client_session),
    store: SessionStore = Depends(get_session_store),
) -> UserResponse:
    user = await user_service.signup(db, name=body.name, email=body.email, password=body.password)
    await commit_session(db)
    await _start_session(store, response, client, user)
    logger.info("Signup succeeded for user %s", user.id)
    return _user_response(user)


@router.post(
    "/login",
    response_model=UserResponse,
    responses={
        401: {"description": "Wrong password", "model": ErrorResponse},
        404: {"description": "No user with this email", "model": ErrorResponse},
    },
    summary="Log in with email and password",
)
async def login(
    body: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
    client: ClientSession = Depends(get_client_session),
    store: SessionStore = Depends(get_session_store),
) -> UserResponse:
    """
    Verify credentials and start a session.

    A failed login leaves the caller's existing session untouched.
    """
    user = await user_service.authenticate(db, email=body.email, password=body.password)
    await _start_session(store, response, client, user)
    logger.info("Login succeeded for user %s", user.id)
    return _user_response(user)


@router.post("/logout", response_class=PlainTextResponse, summary="End the session")
async def logout(
    client: ClientSession = Depends(get_client_session),
    store: SessionStore = Depends(get_session_store),
) -> PlainTextResponse:
    if client.handle:
        await store.destroy(client.handle)
    response = PlainTextResponse("Logout successful.")
    clear_session_cookie(response)
    logger.info("Logout succeeded")
    return response


@router.get(
    "/getUserData",
    response_model=SessionUserResponse,
    responses={404: {"description": "No session data", "model": ErrorResponse}},
    summary="Name and email held in the session",
)
async def get_user_data(
    client: ClientSession = Depends(get_client_session),
) -> SessionUserResponse:
    """
    Return the identity snapshot from the session.

    This is the session's copy, not a fresh read of the users table.
    """
    if client.data is None or not client.data.name or not client.data.email:
        raise NotFoundError(resource="session", message="Session data not found.")
    return SessionUserResponse(name=client.data.name, email=client.data.email)


@router.get(
    "/checkSession",
    response_class=PlainTextResponse,
    responses={404: {"description": "No session", "model": ErrorResponse}},
    summary="Whether the caller has a live session",
)
async def check_session(
    client: ClientSession = Depends(get_client_session),
) -> PlainTextResponse:
    if not client.is_authenticated:
        raise NotFoundError(resource="session", message="There is no session")
    return PlainTextResponse("ok")


@router.post(
    "/editProfile",
    response_model=UserResponse,
    responses={
        401: {"description": "Wrong current password", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
        409: {"description": "New email already in use", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Change name, email and/or password",
)
async def edit_profile(
    body: EditProfileRequest,
    db: AsyncSession = Depends(get_db_session),
    client: ClientSession = Depends(get_client_session),
    store: SessionStore = Depends(get_session_store),
) -> UserResponse:
    user = await user_service.edit_profile(
        db,
        user_id=body.user_id,
        current_password=body.current_password,
        new_name=body.new_name,
        new_email=body.new_email,
        new_password=body.new_password,
    )
    await commit_session(db)

    if client.handle and client.data is not None and client.data.user_id == user.id:
        await store.update(client.handle, name=user.name, email=user.email)
        logger.info("Session refreshed for user %s", user.id)

    return _user_response(user)


@router.post(
    "/deleteAccount",
    response_class=PlainTextResponse,
    responses={
        404: {"description": "User not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete the account and all its memos",
)
async def delete_account(
    body: DeleteAccountRequest,
    db: AsyncSession = Depends(get_db_session),
    client: ClientSession = Depends(get_client_session),
    store: SessionStore = Depends(get_session_store),
) -> PlainTextResponse:
    await user_service.delete_account(db, user_id=body.user_id)
    await commit_session(db)

    if client.handle:
        await store.destroy(client.handle)
    response = PlainTextResponse("Delete complete")
    clear_session_cookie(response)
    return response
