"""Unit tests for the use cases through which users contribute content."""

import pytest

from forum.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
)
from forum.application.usecase.feedback import (
    CreateFeedbackRequest,
    CreateFeedbackUseCase,
)
from forum.application.usecase.post import (
    CreatePostRequest,
    CreatePostUseCase,
    GetPostRequest,
    GetPostUseCase,
    SearchPostsRequest,
    SearchPostsUseCase,
)
from forum.application.usecase.vote import (
    CastVoteRequest,
    CastVoteUseCase,
    VoteDirection,
)
from forum.domain.error import UserBannedError
from forum.domain.repository import VoteRepository
from forum.domain.service import UserService
from forum.domain.value import VotableType
from tests.conftest import make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestBannedUsers:
    """Banned users can read but not contribute."""

    @pytest.mark.asyncio
    async def test_banned_user_cannot_post_comment_vote_or_give_feedback(
        self, unit_env
    ):
        # Arrange
        user_service = await unit_env.get(UserService)
        create_post = await unit_env.get(CreatePostUseCase)
        create_comment = await unit_env.get(CreateCommentUseCase)
        cast_vote = await unit_env.get(CastVoteUseCase)
        create_feedback = await unit_env.get(CreateFeedbackUseCase)
        author = await make_user(unit_env)
        troll = await make_user(unit_env, name="Terry Troll")
        post = await make_post(unit_env, author)
        await user_service.toggle_ban(troll.id)

        # Act & Assert
        with pytest.raises(UserBannedError):
            await create_post.execute(
                CreatePostRequest(
                    author_id=str(troll.id),
                    title="Spam spam spam",
                    content="Buy my thing right now",
                )
            )
        with pytest.raises(UserBannedError):
            await create_comment.execute(
                CreateCommentRequest(
                    post_id=str(post.id), author_id=str(troll.id), content="Nope"
                )
            )
        with pytest.raises(UserBannedError):
            await cast_vote.execute(
                CastVoteRequest(
                    votable_type=VotableType.POST,
                    votable_id=str(post.id),
                    user_id=str(troll.id),
                    direction=VoteDirection.DOWN,
                )
            )
        with pytest.raises(UserBannedError):
            await create_feedback.execute(
                CreateFeedbackRequest(
                    user_id=str(troll.id), content="This forum is terrible"
                )
            )


class TestCreatePostUseCase:
    """Tests for CreatePostUseCase."""

    @pytest.mark.asyncio
    async def test_create_post_returns_view(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CreatePostUseCase)
        author = await make_user(unit_env)

        # Act
        view = await use_case.execute(
            CreatePostRequest(
                author_id=str(author.id),
                title="Hello forum",
                content="First post, be gentle.",
                tags=["Intro"],
            )
        )

        # Assert
        assert view.author_id == str(author.id)
        assert view.tags == ["intro"]
        assert view.comment_count == 0

    def test_short_title_is_rejected(self):
        """Request validation enforces the title bounds."""
        with pytest.raises(ValueError):
            CreatePostRequest(
                author_id="00000000-0000-0000-0000-000000000000",
                title="Hi",
                content="Long enough content",
            )


class TestSearchPostsUseCase:
    """Tests for SearchPostsUseCase."""

    def test_padded_one_letter_query_is_rejected(self):
        """The length check applies after surrounding spaces are trimmed."""
        with pytest.raises(ValueError):
            SearchPostsRequest(query=" a")

    @pytest.mark.asyncio
    async def test_query_is_trimmed_before_searching(self, unit_env):
        # Arrange
        use_case = await unit_env.get(SearchPostsUseCase)
        author = await make_user(unit_env)
        post = await make_post(unit_env, author, title="Cache stampedes explained")

        # Act
        page = await use_case.execute(SearchPostsRequest(query="  stampede  "))

        # Assert
        assert [p.post_id for p in page.posts] == [str(post.id)]
        assert page.pagination.total == 1


class TestGetPostUseCase:
    """Tests for GetPostUseCase."""

    @pytest.mark.asyncio
    async def test_get_post_counts_view_and_reports_own_vote(self, unit_env):
        # Arrange
        get_post = await unit_env.get(GetPostUseCase)
        cast_vote = await unit_env.get(CastVoteUseCase)
        author = await make_user(unit_env)
        post = await make_post(unit_env, author)
        await cast_vote.execute(
            CastVoteRequest(
                votable_type=VotableType.POST,
                votable_id=str(post.id),
                user_id=str(author.id),
                direction=VoteDirection.UP,
            )
        )

        # Act
        response = await get_post.execute(
            GetPostRequest(post_id=str(post.id), user_id=str(author.id))
        )
        anonymous = await get_post.execute(GetPostRequest(post_id=str(post.id)))

        # Assert
        assert response.user_vote == 1
        assert response.post.view_count == 1
        assert response.post.upvotes == 1
        assert anonymous.user_vote == 0
        assert anonymous.post.view_count == 2


class TestCastVoteUseCase:
    """Tests for CastVoteUseCase."""

    @pytest.mark.asyncio
    async def test_directions_map_to_actions(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        author = await make_user(unit_env)
        post = await make_post(unit_env, author)

        def request(direction: VoteDirection) -> CastVoteRequest:
            return CastVoteRequest(
                votable_type=VotableType.POST,
                votable_id=str(post.id),
                user_id=str(author.id),
                direction=direction,
            )

        # Act
        actions = [
            (await use_case.execute(request(direction))).action
            for direction in (
                VoteDirection.UP,
                VoteDirection.DOWN,
                VoteDirection.REMOVE,
                VoteDirection.REMOVE,
            )
        ]

        # Assert
        assert actions == [
            "upvoted",
            "changed_to_downvote",
            "removed_vote",
            "no_change",
        ]


class TestDeleteCommentUseCase:
    """Tests for DeleteCommentUseCase."""

    @pytest.mark.asyncio
    async def test_hard_delete_removes_votes(self, unit_env):
        """Votes go with a comment that is removed outright."""
        # Arrange
        create_comment = await unit_env.get(CreateCommentUseCase)
        delete_comment = await unit_env.get(DeleteCommentUseCase)
        cast_vote = await unit_env.get(CastVoteUseCase)
        vote_repo = await unit_env.get(VoteRepository)
        author = await make_user(unit_env)
        post = await make_post(unit_env, author)
        comment = await create_comment.execute(
            CreateCommentRequest(
                post_id=str(post.id), author_id=str(author.id), content="Hmm"
            )
        )
        await cast_vote.execute(
            CastVoteRequest(
                votable_type=VotableType.COMMENT,
                votable_id=comment.comment_id,
                user_id=str(author.id),
                direction=VoteDirection.UP,
            )
        )

        # Act
        response = await delete_comment.execute(
            DeleteCommentRequest(comment_id=comment.comment_id, user_id=str(author.id))
        )

        # Assert
        assert response.hard_deleted
        assert await vote_repo.count_by_user(author.id) == 0
