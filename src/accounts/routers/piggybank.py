from typing import Annotated

from fastapi import APIRouter, Query

from accounts.dependencies import ConfigDep, PiggyServiceDep
from accounts.models.requests import (
    ChangePasswordRequest,
    CreatedResponse,
    CreatePiggyRequest,
    IdResponse,
    KtpLookupRequest,
    KtpResponse,
    PageResponse,
    PiggyResponse,
    UpdatePiggyRequest,
)
from accounts.shared import Logger

logger = Logger(__name__).get_logger()

router = APIRouter(prefix="/piggybank")


@router.get("", response_model=PageResponse[PiggyResponse] | list[PiggyResponse])
def get_piggy_accounts(
    piggybank: PiggyServiceDep,
    config: ConfigDep,
    page_number: Annotated[int | None, Query(ge=1)] = None,
    page_size: Annotated[int | None, Query(ge=1)] = None,
    sort: str | None = None,
    search: str | None = None,
):
    if page_number is None and page_size is None and sort is None:
        return piggybank.list_all()

    return piggybank.list_page(
        page_number=page_number or 1,
        page_size=page_size or config.pagination.default_page_size,
        sort=sort or config.pagination.default_sort,
        search=search,
    )


@router.post("/ktp", response_model=KtpResponse)
def get_ktp(data: KtpLookupRequest, piggybank: PiggyServiceDep):
    """Look up the owner name and national ID registered for an email."""
    return piggybank.get_ktp_by_email(data.email)


@router.get("/{account_id}", response_model=PiggyResponse)
def get_piggy_account(account_id: str, piggybank: PiggyServiceDep):
    return piggybank.get(account_id)


@router.post("", response_model=CreatedResponse)
def create_piggy_account(data: CreatePiggyRequest, piggybank: PiggyServiceDep):
    logger.debug("Registering piggybank account %s", data.email)
    piggybank.create(
        data.name,
        data.email,
        data.password,
        data.password_confirm,
        balance=data.balance,
        ktp=data.ktp,
    )
    return CreatedResponse(name=data.name, email=data.email)


@router.put("/{account_id}", response_model=IdResponse)
def update_piggy_account(
    account_id: str, data: UpdatePiggyRequest, piggybank: PiggyServiceDep
):
    piggybank.update(account_id, data.name, data.email, data.ktp, balance=data.balance)
    return IdResponse(id=account_id)


@router.delete("/{account_id}", response_model=IdResponse)
def delete_piggy_account(account_id: str, piggybank: PiggyServiceDep):
    piggybank.delete(account_id)
    return IdResponse(id=account_id)


@router.post("/{account_id}/change-password", response_model=IdResponse)
def change_piggy_password(
    account_id: str, data: ChangePasswordRequest, piggybank: PiggyServiceDep
):
    piggybank.change_password(
        account_id, data.password_old, data.password_new, data.password_confirm
    )
    return IdResponse(id=account_id)
