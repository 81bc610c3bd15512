"""User Routes — CRUD endpoints on the user store.

Invariants:
    - Every route requires a valid bearer token (router-level dependency)
    - Responses never contain the password or its hash (UserRead)
    - POST returns 201 + Location; PUT and DELETE return 204 with an empty body
    - Not found → 404, duplicate email → 409, rule violation → 400 (via error handlers)
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from user_management_api.api.deps import get_current_principal
from user_management_api.api.openapi_examples import (
    conflict_response, not_found_response, unauthorized_response, validation_response,
)
from user_management_api.infrastructure.database import get_db
from user_management_api.schemas.user import UserCreate, UserRead, UserUpdate
from user_management_api.services.user_service import UserService

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    dependencies=[Depends(get_current_principal)],
    responses=unauthorized_response(),
)

_NOT_FOUND_EXAMPLE = "User with id 42 was not found."
_DUPLICATE_EXAMPLE = "Email is already in use."


@router.get(
    "",
    response_model=list[UserRead],
    name="ListUsers",
    summary="List users",
    description="Returns all users as an array. Returns 200 OK with an empty array when no users exist.",
)
async def list_users(db: AsyncSession = Depends(get_db)):
    return await UserService(db).list_users()


@router.get(
    "/{user_id}",
    response_model=UserRead,
    name="GetUser",
    summary="Get a user",
    description="Returns a single user by id.",
    responses=not_found_response(_NOT_FOUND_EXAMPLE),
)
async def get_user(user_id: int, db: AsyncSession = Depends(get_db)):
    return await UserService(db).get_user(user_id)


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    name="CreateUser",
    summary="Create a user",
    description="Creates a new user. All fields are required.",
    responses={
        **validation_response(),
        **conflict_response(_DUPLICATE_EXAMPLE),
    },
)
async def create_user(
    body: UserCreate, response: Response, db: AsyncSession = Depends(get_db),
):
    user = await UserService(db).create_user(body)
    response.headers["Location"] = f"/users/{user.id}"
    return user


@router.put(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    name="UpdateUser",
    summary="Update a user",
    description="Updates name, email, and/or password. Returns 204 on success.",
    responses={
        **validation_response(),
        **not_found_response(_NOT_FOUND_EXAMPLE),
        **conflict_response(_DUPLICATE_EXAMPLE),
    },
)
async def update_user(
    user_id: int, body: UserUpdate, db: AsyncSession = Depends(get_db),
):
    await UserService(db).update_user(user_id, body)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    name="DeleteUser",
    summary="Delete a user",
    description="Deletes a user by id. Returns 204 on success.",
    responses=not_found_response(_NOT_FOUND_EXAMPLE),
)
async def delete_user(user_id: int, db: AsyncSession = Depends(get_db)):
    await UserService(db).delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
