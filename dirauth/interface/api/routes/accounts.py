"""Account reconciliation routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, status
import logfire

from dirauth.application.usecase.account import (
    AccountResponse,
    LoadAccountRequest,
    LoadAccountUseCase,
    RefreshAccountRequest,
    RefreshAccountUseCase,
)
from dirauth.domain.error import NotFoundError, ValidationError
from dirauth.domain.value import AccountId

router = APIRouter(prefix="/accounts", tags=["accounts"], route_class=DishkaRoute)


@router.post("/{username}/sync", response_model=AccountResponse)
async def sync_account(
    username: str,
    load_account_use_case: FromDishka[LoadAccountUseCase],
) -> AccountResponse:
    """Load the account of a directory user, creating or synchronizing it.

    Args:
        username: Directory username
        load_account_use_case: Load account use case from DI

    Returns:
        The synchronized local account

    Raises:
        HTTPException: 404 if the directory has no such user, 400 for a blank username

    Example:
        POST /accounts/jdoe/sync

        Response:
        {
            "account_id": "123e4567-e89b-12d3-a456-426614174000",
            "username": "jdoe",
            "enabled": true,
            "locked": false,
            ...
        }
    """
    try:
        return await load_account_use_case.execute(LoadAccountRequest(username=username))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/{account_id}/refresh", response_model=AccountResponse)
async def refresh_account(
    account_id: UUID,
    refresh_account_use_case: FromDishka[RefreshAccountUseCase],
) -> AccountResponse:
    """Re-apply current directory attributes to a stored account.

    Args:
        account_id: Local account ID
        refresh_account_use_case: Refresh account use case from DI

    Returns:
        The refreshed account

    Raises:
        HTTPException: 404 if the account or its directory identity is gone
    """
    try:
        return await refresh_account_use_case.execute(
            RefreshAccountRequest(account_id=AccountId(account_id))
        )
    except NotFoundError as e:
        logfire.warn("Account refresh failed", account_id=str(account_id), error=str(e))
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
