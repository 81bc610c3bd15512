"""Auth Routes — token issuance.

Invariants:
    - POST /login is the only unauthenticated write endpoint
    - Credentials come from the JSON body, or from ?username=&password= when there is no body
    - Bad credentials → 401 with the same message whichever part was wrong
"""

from fastapi import APIRouter, Body, Depends, Query
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from user_management_api.api.openapi_examples import (
    unauthorized_response, validation_response,
)
from user_management_api.infrastructure.database import get_db
from user_management_api.schemas.auth import LoginRequest, TokenResponse
from user_management_api.services import auth_service

router = APIRouter(tags=["Auth"])


def _credentials_from_query(username: str | None, password: str | None) -> LoginRequest:
    try:
        return LoginRequest(username=username, password=password)
    except ValidationError as e:
        raise RequestValidationError(
            [{**err, "loc": ("query", *err["loc"])} for err in e.errors()],
        )


@router.post(
    "/login",
    response_model=TokenResponse,
    name="Login",
    summary="Authenticate and get JWT token",
    description=(
        "Returns a JWT token for valid username and password. "
        "Send them as a JSON body, or as `username` and `password` query parameters."
    ),
    responses={**validation_response(), **unauthorized_response()},
)
async def login(
    body: LoginRequest | None = Body(None),
    username: str | None = Query(None),
    password: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    credentials = body or _credentials_from_query(username, password)
    issued = await auth_service.login(
        db, username=credentials.username, password=credentials.password,
    )
    return TokenResponse(token=issued.token, expires_in=issued.expires_in)
