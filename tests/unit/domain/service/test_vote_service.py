"""Unit tests for VoteService."""

from uuid import uuid4

import pytest

from forum.domain.error import ContentDeletedException, NotFoundError
from forum.domain.repository import VoteRepository
from forum.domain.service import CommentService, VoteService
from forum.domain.service.vote_service import counter_deltas
from forum.domain.value import (
    PageRequest,
    VotableType,
    VoteAction,
    VoteValue,
    make_vote_id,
)
from tests.conftest import make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCounterDeltas:
    """Tests for the counter arithmetic of vote transitions."""

    @pytest.mark.parametrize(
        ("previous", "new", "expected"),
        [
            (VoteValue.NEUTRAL, VoteValue.UP, (1, 0)),
            (VoteValue.UP, VoteValue.NEUTRAL, (-1, 0)),
            (VoteValue.UP, VoteValue.DOWN, (-1, 1)),
            (VoteValue.DOWN, VoteValue.UP, (1, -1)),
            (VoteValue.DOWN, VoteValue.NEUTRAL, (0, -1)),
        ],
    )
    def test_deltas(self, previous, new, expected):
        assert counter_deltas(previous, new) == expected


class TestUpvoteAndDownvote:
    """Tests for the vote state machine on posts."""

    @pytest.mark.asyncio
    async def test_first_upvote_counts(self, unit_env):
        """A first upvote should create the vote and bump the counter."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        author = await make_user(unit_env)
        voter = await make_user(unit_env, name="Vera Voter")
        post = await make_post(unit_env, author)

        # Act
        outcome = await vote_service.upvote(VotableType.POST, post.id, voter.id)

        # Assert
        assert outcome.action == VoteAction.UPVOTED
        assert (outcome.previous_vote, outcome.new_vote) == (0, 1)
        assert (outcome.upvotes, outcome.downvotes) == (1, 0)
        assert await vote_service.get_user_vote(
            VotableType.POST, post.id, voter.id
        ) == 1

    @pytest.mark.asyncio
    async def test_repeat_upvote_withdraws_it(self, unit_env):
        """Upvoting twice should keep a neutral row that listings hide."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        author = await make_user(unit_env)
        voter = await make_user(unit_env, name="Vera Voter")
        post = await make_post(unit_env, author)
        await vote_service.upvote(VotableType.POST, post.id, voter.id)
        first = await vote_repo.find_by_id(make_vote_id(post.id, voter.id))

        # Act
        outcome = await vote_service.upvote(VotableType.POST, post.id, voter.id)

        # Assert
        assert outcome.action == VoteAction.REMOVED_UPVOTE
        assert (outcome.upvotes, outcome.downvotes) == (0, 0)
        kept = await vote_repo.find_by_id(make_vote_id(post.id, voter.id))
        assert kept is not None
        assert kept.value == VoteValue.NEUTRAL
        assert kept.created_at == first.created_at
        assert await vote_service.get_user_vote(
            VotableType.POST, post.id, voter.id
        ) == 0
        votes, total = await vote_service.list_votes_by_target(
            VotableType.POST, post.id, PageRequest()
        )
        assert (votes, total) == ([], 0)

    @pytest.mark.asyncio
    async def test_downvote_after_upvote_switches(self, unit_env):
        """Switching direction moves one count between the counters."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        author = await make_user(unit_env)
        voter = await make_user(unit_env, name="Vera Voter")
        post = await make_post(unit_env, author)
        await vote_service.upvote(VotableType.POST, post.id, voter.id)

        # Act
        outcome = await vote_service.downvote(VotableType.POST, post.id, voter.id)

        # Assert
        assert outcome.action == VoteAction.CHANGED_TO_DOWNVOTE
        assert (outcome.previous_vote, outcome.new_vote) == (1, -1)
        assert (outcome.upvotes, outcome.downvotes) == (0, 1)

    @pytest.mark.asyncio
    async def test_vote_on_missing_post_raises(self, unit_env):
        """Votes need an existing target."""
        vote_service = await unit_env.get(VoteService)
        voter = await make_user(unit_env)

        with pytest.raises(NotFoundError):
            await vote_service.upvote(VotableType.POST, uuid4(), voter.id)


class TestRemoveVote:
    """Tests for remove_vote."""

    @pytest.mark.asyncio
    async def test_remove_existing_vote(self, unit_env):
        """Removing a downvote restores the counter."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        author = await make_user(unit_env)
        voter = await make_user(unit_env, name="Vera Voter")
        post = await make_post(unit_env, author)
        await vote_service.downvote(VotableType.POST, post.id, voter.id)

        # Act
        outcome = await vote_service.remove_vote(VotableType.POST, post.id, voter.id)

        # Assert
        assert outcome.action == VoteAction.REMOVED_VOTE
        assert outcome.previous_vote == -1
        assert outcome.downvotes == 0

    @pytest.mark.asyncio
    async def test_remove_without_vote_is_no_change(self, unit_env):
        """Removing a vote that was never cast changes nothing."""
        vote_service = await unit_env.get(VoteService)
        author = await make_user(unit_env)
        post = await make_post(unit_env, author)

        outcome = await vote_service.remove_vote(VotableType.POST, post.id, author.id)

        assert outcome.action == VoteAction.NO_CHANGE
        assert (outcome.upvotes, outcome.downvotes) == (0, 0)


class TestCommentVotes:
    """Tests for votes on comments."""

    @pytest.mark.asyncio
    async def test_upvote_comment_updates_comment_counter(self, unit_env):
        """Comment votes land on the comment, not the post."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        comment_service = await unit_env.get(CommentService)
        author = await make_user(unit_env)
        post = await make_post(unit_env, author)
        comment = await comment_service.create_comment(post.id, author, "Nice")

        # Act
        await vote_service.upvote(VotableType.COMMENT, comment.id, author.id)

        # Assert
        assert (await comment_service.get_by_id(comment.id)).upvotes == 1
        votes, total = await vote_service.list_votes_by_target(
            VotableType.COMMENT, comment.id, PageRequest()
        )
        assert total == 1
        assert votes[0].value == VoteValue.UP

    @pytest.mark.asyncio
    async def test_vote_on_deleted_comment_raises(self, unit_env):
        """Soft-deleted comments cannot be voted on."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        comment_service = await unit_env.get(CommentService)
        author = await make_user(unit_env)
        post = await make_post(unit_env, author)
        parent = await comment_service.create_comment(post.id, author, "Parent")
        await comment_service.create_comment(
            post.id, author, "Reply", parent_id=parent.id
        )
        await comment_service.delete_comment(parent.id, author.id)

        # Act & Assert
        with pytest.raises(ContentDeletedException):
            await vote_service.upvote(VotableType.COMMENT, parent.id, author.id)


class TestCascade:
    """Tests for delete_votes_for."""

    @pytest.mark.asyncio
    async def test_delete_votes_for_targets(self, unit_env):
        """Every vote on the targets is removed and counted."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        author = await make_user(unit_env)
        voter = await make_user(unit_env, name="Vera Voter")
        post = await make_post(unit_env, author)
        await vote_service.upvote(VotableType.POST, post.id, author.id)
        await vote_service.downvote(VotableType.POST, post.id, voter.id)

        # Act
        removed = await vote_service.delete_votes_for(VotableType.POST, [post.id])

        # Assert
        assert removed == 2
        votes, total = await vote_service.list_votes_by_user(voter.id, PageRequest())
        assert (votes, total) == ([], 0)
