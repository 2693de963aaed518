"""Unit tests for LoginUseCase."""

import pytest

from forum.application.usecase.auth import LoginRequest, LoginUseCase
from forum.domain.service import JWTService
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestLoginUseCase:
    @pytest.mark.asyncio
    async def test_first_login_registers_and_issues_token(self, unit_env):
        """A token is issued for the account created on first login."""
        # Arrange
        use_case = await unit_env.get(LoginUseCase)
        jwt_service = await unit_env.get(JWTService)

        # Act
        response = await use_case.execute(
            LoginRequest(name="Barbara Liskov", email="barbara@example.com")
        )

        # Assert
        payload = jwt_service.verify_token(response.token)
        assert payload.user_id == response.user_id
        assert payload.email == "barbara@example.com"

    @pytest.mark.asyncio
    async def test_repeat_login_reuses_account(self, unit_env):
        use_case = await unit_env.get(LoginUseCase)
        request = LoginRequest(name="Barbara Liskov", email="barbara@example.com")

        first = await use_case.execute(request)
        second = await use_case.execute(request)

        assert first.user_id == second.user_id
