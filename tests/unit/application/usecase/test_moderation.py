"""Unit tests for the post deletion and admin moderation use cases."""

import pytest

from forum.application.usecase.admin import (
    AdminDeletePostUseCase,
    DashboardStatsRequest,
    DashboardStatsUseCase,
    ModeratePostRequest,
    ToggleBanRequest,
    ToggleBanUseCase,
    TogglePinUseCase,
)
from forum.application.usecase.post import DeletePostRequest, DeletePostUseCase
from forum.domain.error import AdminRequiredError, NotAuthorizedError
from forum.domain.repository import CommentRepository, PostRepository, VoteRepository
from forum.domain.service import CommentService, VoteService
from forum.domain.value import UserRole, VotableType
from tests.conftest import make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestDeletePostUseCase:
    """Tests for DeletePostUseCase."""

    @pytest.mark.asyncio
    async def test_delete_cascades_to_comments_and_votes(self, unit_env):
        """Deleting a post removes its comments and every vote on both."""
        # Arrange
        use_case = await unit_env.get(DeletePostUseCase)
        comment_service = await unit_env.get(CommentService)
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        vote_repo = await unit_env.get(VoteRepository)

        author = await make_user(unit_env)
        voter = await make_user(unit_env, name="Vera Voter")
        post = await make_post(unit_env, author)
        comment = await comment_service.create_comment(post.id, voter, "Agreed")
        await vote_service.upvote(VotableType.POST, post.id, voter.id)
        await vote_service.upvote(VotableType.COMMENT, comment.id, author.id)

        # Act
        response = await use_case.execute(
            DeletePostRequest(post_id=str(post.id), user_id=str(author.id))
        )

        # Assert
        assert response.success
        assert response.comments_deleted == 1
        assert await post_repo.find_by_id(post.id) is None
        assert await comment_repo.find_by_id(comment.id) is None
        assert await vote_repo.count_by_user(voter.id) == 0
        assert await vote_repo.count_by_user(author.id) == 0

    @pytest.mark.asyncio
    async def test_non_author_cannot_delete(self, unit_env):
        use_case = await unit_env.get(DeletePostUseCase)
        author = await make_user(unit_env)
        other = await make_user(unit_env, name="Otto Other")
        post = await make_post(unit_env, author)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                DeletePostRequest(post_id=str(post.id), user_id=str(other.id))
            )

    @pytest.mark.asyncio
    async def test_admin_can_delete_any_post(self, unit_env):
        use_case = await unit_env.get(DeletePostUseCase)
        author = await make_user(unit_env)
        admin = await make_user(unit_env, name="Root Admin", role=UserRole.ADMIN)
        post = await make_post(unit_env, author)

        response = await use_case.execute(
            DeletePostRequest(post_id=str(post.id), user_id=str(admin.id))
        )

        assert response.success


class TestAdminUseCases:
    """Tests for the admin-only use cases."""

    @pytest.mark.asyncio
    async def test_non_admin_is_rejected(self, unit_env):
        """Every admin use case checks the requester's role first."""
        # Arrange
        pin = await unit_env.get(TogglePinUseCase)
        ban = await unit_env.get(ToggleBanUseCase)
        user = await make_user(unit_env)
        target = await make_user(unit_env, name="Bob Builder")
        post = await make_post(unit_env, user)

        # Act & Assert
        with pytest.raises(AdminRequiredError):
            await pin.execute(
                ModeratePostRequest(post_id=str(post.id), user_id=str(user.id))
            )
        with pytest.raises(AdminRequiredError):
            await ban.execute(
                ToggleBanRequest(target_user_id=str(target.id), user_id=str(user.id))
            )

    @pytest.mark.asyncio
    async def test_admin_pins_and_deletes_post(self, unit_env):
        # Arrange
        pin = await unit_env.get(TogglePinUseCase)
        remove = await unit_env.get(AdminDeletePostUseCase)
        admin = await make_user(unit_env, name="Root Admin", role=UserRole.ADMIN)
        author = await make_user(unit_env)
        post = await make_post(unit_env, author)
        request = ModeratePostRequest(post_id=str(post.id), user_id=str(admin.id))

        # Act
        pinned = await pin.execute(request)
        deleted = await remove.execute(request)

        # Assert
        assert pinned.is_pinned
        assert deleted.success
        assert deleted.comments_deleted == 0

    @pytest.mark.asyncio
    async def test_dashboard_stats(self, unit_env):
        # Arrange
        use_case = await unit_env.get(DashboardStatsUseCase)
        ban = await unit_env.get(ToggleBanUseCase)
        admin = await make_user(unit_env, name="Root Admin", role=UserRole.ADMIN)
        author = await make_user(unit_env)
        await make_post(unit_env, author)
        await ban.execute(
            ToggleBanRequest(target_user_id=str(author.id), user_id=str(admin.id))
        )

        # Act
        stats = await use_case.execute(DashboardStatsRequest(user_id=str(admin.id)))

        # Assert
        assert stats.total_users == 2
        assert stats.banned_users == 1
        assert stats.admin_users == 1
        assert stats.active_users == 1
        assert stats.total_posts == 1
        assert stats.search_index_ready is False
