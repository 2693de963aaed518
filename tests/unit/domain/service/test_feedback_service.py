"""Unit tests for FeedbackService."""

from datetime import datetime, timedelta

import pydantic
import pytest

from forum.domain.error import NotAuthorizedError, ValidationError
from forum.domain.service import FeedbackService
from forum.domain.value import PageRequest
from tests.conftest import make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreateFeedback:
    """Tests for create_feedback."""

    @pytest.mark.asyncio
    async def test_create_feedback_trims_content(self, unit_env):
        feedback_service = await unit_env.get(FeedbackService)
        user = await make_user(unit_env)

        feedback = await feedback_service.create_feedback(
            user, "  Dark mode would be lovely.  "
        )

        assert feedback.content == "Dark mode would be lovely."
        assert feedback.user_id == user.id

    @pytest.mark.asyncio
    async def test_short_feedback_is_rejected(self, unit_env):
        """Feedback needs at least ten characters after trimming."""
        feedback_service = await unit_env.get(FeedbackService)
        user = await make_user(unit_env)

        with pytest.raises(pydantic.ValidationError):
            await feedback_service.create_feedback(user, "   meh    ")


class TestListFeedback:
    """Tests for list_feedback."""

    @pytest.mark.asyncio
    async def test_time_range_filters_feedback(self, unit_env):
        """Only feedback inside the range is returned."""
        # Arrange
        feedback_service = await unit_env.get(FeedbackService)
        user = await make_user(unit_env)
        feedback = await feedback_service.create_feedback(user, "Search is slow")
        now = datetime.now()

        # Act
        inside, inside_total = await feedback_service.list_feedback(
            PageRequest(), start=now - timedelta(hours=1), end=now + timedelta(hours=1)
        )
        outside, outside_total = await feedback_service.list_feedback(
            PageRequest(), start=now + timedelta(hours=1)
        )

        # Assert
        assert [f.id for f in inside] == [feedback.id]
        assert inside_total == 1
        assert (outside, outside_total) == ([], 0)

    @pytest.mark.asyncio
    async def test_inverted_range_raises(self, unit_env):
        """A range that ends before it starts is rejected."""
        feedback_service = await unit_env.get(FeedbackService)
        now = datetime.now()

        with pytest.raises(ValidationError):
            await feedback_service.list_feedback(
                PageRequest(), start=now, end=now - timedelta(days=1)
            )


class TestDeleteFeedback:
    """Tests for delete_feedback."""

    @pytest.mark.asyncio
    async def test_only_author_can_delete(self, unit_env):
        # Arrange
        feedback_service = await unit_env.get(FeedbackService)
        author = await make_user(unit_env)
        other = await make_user(unit_env, name="Otto Other")
        feedback = await feedback_service.create_feedback(author, "Please add RSS")

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await feedback_service.delete_feedback(feedback.id, other.id)

        await feedback_service.delete_feedback(feedback.id, author.id)
        items, total = await feedback_service.list_feedback_by_user(
            author.id, PageRequest()
        )
        assert (items, total) == ([], 0)
