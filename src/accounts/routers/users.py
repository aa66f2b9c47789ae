from typing import Annotated

from fastapi import APIRouter, Query

from accounts.dependencies import ConfigDep, UserServiceDep
from accounts.models.requests import (
    ChangePasswordRequest,
    CreatedResponse,
    CreateUserRequest,
    IdResponse,
    PageResponse,
    UpdateUserRequest,
    UserResponse,
)
from accounts.shared import Logger

logger = Logger(__name__).get_logger()

router = APIRouter(prefix="/users")


@router.get("", response_model=PageResponse[UserResponse] | list[UserResponse])
def get_users(
    users: UserServiceDep,
    config: ConfigDep,
    page_number: Annotated[int | None, Query(ge=1)] = None,
    page_size: Annotated[int | None, Query(ge=1)] = None,
    sort: str | None = None,
    search: str | None = None,
):
    """
    List users.

    Without page_number, page_size and sort the whole collection comes back
    as a plain array. Otherwise one page is returned, sorted by
    ``sort`` (field:asc|desc) and filtered by ``search`` (column:value).
    """
    if page_number is None and page_size is None and sort is None:
        return users.list_all()

    return users.list_page(
        page_number=page_number or 1,
        page_size=page_size or config.pagination.default_page_size,
        sort=sort or config.pagination.default_sort,
        search=search,
    )


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: str, users: UserServiceDep):
    return users.get(user_id)


@router.post("", response_model=CreatedResponse)
def create_user(data: CreateUserRequest, users: UserServiceDep):
    logger.debug("Registering user %s", data.email)
    users.create(data.name, data.email, data.password, data.password_confirm)
    return CreatedResponse(name=data.name, email=data.email)


@router.put("/{user_id}", response_model=IdResponse)
def update_user(user_id: str, data: UpdateUserRequest, users: UserServiceDep):
    users.update(user_id, data.name, data.email)
    return IdResponse(id=user_id)


@router.delete("/{user_id}", response_model=IdResponse)
def delete_user(user_id: str, users: UserServiceDep):
    users.delete(user_id)
    return IdResponse(id=user_id)


@router.post("/{user_id}/change-password", response_model=IdResponse)
def change_password(
    user_id: str, data: ChangePasswordRequest, users: UserServiceDep
):
    users.change_password(
        user_id, data.password_old, data.password_new, data.password_confirm
    )
    return IdResponse(id=user_id)
