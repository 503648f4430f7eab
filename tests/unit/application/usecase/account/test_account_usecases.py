"""Unit tests for account use cases."""

from uuid import uuid4

import pytest

from dirauth.application.usecase.account import (
    AccountResponse,
    LoadAccountRequest,
    LoadAccountUseCase,
    RefreshAccountRequest,
    RefreshAccountUseCase,
)
from dirauth.domain.error import IdentityNotFoundError, NotFoundError
from dirauth.domain.service import DirectoryIdentitySource
from dirauth.domain.value import AccountId
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestLoadAccountUseCase:
    """Tests for LoadAccountUseCase."""

    @pytest.mark.asyncio
    async def test_load_new_directory_user(self, unit_env):
        """Should provision the account and hide the password hash."""
        # Arrange
        use_case = await unit_env.get(LoadAccountUseCase)

        # Act
        response = await use_case.execute(LoadAccountRequest(username="jdoe"))

        # Assert
        assert response.username == "jdoe"
        assert response.enabled is True
        assert response.has_usable_password is False
        assert "password_hash" not in response.model_dump()

    @pytest.mark.asyncio
    async def test_load_unknown_user(self, unit_env):
        """Should propagate IdentityNotFoundError."""
        use_case = await unit_env.get(LoadAccountUseCase)

        with pytest.raises(IdentityNotFoundError):
            await use_case.execute(LoadAccountRequest(username="nobody"))

    @pytest.mark.asyncio
    async def test_lock_reflected_on_next_load(self, unit_env):
        """Should disable the same account after the directory locks it."""
        # Arrange
        use_case = await unit_env.get(LoadAccountUseCase)
        directory = await unit_env.get(DirectoryIdentitySource)
        first = await use_case.execute(LoadAccountRequest(username="jdoe"))

        # Act
        directory.update_entry("jdoe", nsAccountLock="1")
        second = await use_case.execute(LoadAccountRequest(username="jdoe"))

        # Assert
        assert second.account_id == first.account_id
        assert second.enabled is False
        # Lock state is only recorded at creation
        assert second.locked is False

    def test_response_documents_lock_semantics(self):
        """Should describe locked as creation-time state in the API schema."""
        properties = AccountResponse.model_json_schema()["properties"]

        assert "creation" in properties["locked"]["description"]
        assert "log in" in properties["enabled"]["description"]


class TestRefreshAccountUseCase:
    """Tests for RefreshAccountUseCase."""

    @pytest.mark.asyncio
    async def test_refresh_existing_account(self, unit_env):
        """Should re-apply directory values to the stored account."""
        # Arrange
        load = await unit_env.get(LoadAccountUseCase)
        refresh = await unit_env.get(RefreshAccountUseCase)
        directory = await unit_env.get(DirectoryIdentitySource)
        loaded = await load.execute(LoadAccountRequest(username="jdoe"))
        directory.update_entry("jdoe", krbPrincipalExpiration="20300101000000Z")

        # Act
        response = await refresh.execute(
            RefreshAccountRequest(account_id=loaded.account_id)
        )

        # Assert
        assert response.account_id == loaded.account_id
        assert response.expires_at is not None
        assert response.expires_at.year == 2030

    @pytest.mark.asyncio
    async def test_refresh_unknown_account(self, unit_env):
        """Should raise NotFoundError for an unknown account ID."""
        refresh = await unit_env.get(RefreshAccountUseCase)

        with pytest.raises(NotFoundError) as exc_info:
            await refresh.execute(RefreshAccountRequest(account_id=AccountId(uuid4())))

        assert exc_info.value.resource == "Account"
