"""Unit tests for CommentService."""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from forum.domain.error import (
    ContentDeletedException,
    InvalidEditOperationError,
    NotAuthorizedError,
    NotFoundError,
    PostLockedError,
    ValidationError,
)
from forum.domain.model import Comment
from forum.domain.model.comment import DELETED_CONTENT
from forum.domain.repository import CommentRepository, UserRepository
from forum.domain.service import CommentService, PostService
from forum.domain.value import CommentId, PageRequest
from tests.conftest import make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreateComment:
    """Tests for create_comment."""

    @pytest.mark.asyncio
    async def test_create_comment_links_post_and_author(self, unit_env):
        """A new comment should appear in both denormalized id lists."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_service = await unit_env.get(PostService)
        user_repo = await unit_env.get(UserRepository)
        author = await make_user(unit_env)
        post = await make_post(unit_env, author)

        # Act
        comment = await comment_service.create_comment(
            post.id, author, "  Great write-up!  "
        )

        # Assert
        assert comment.content == "Great write-up!"
        assert (await post_service.get_by_id(post.id)).comment_ids == [comment.id]
        assert (await user_repo.find_by_id(author.id)).comment_ids == [comment.id]

    @pytest.mark.asyncio
    async def test_comment_on_locked_post_raises(self, unit_env):
        """Locked posts accept no new comments."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_service = await unit_env.get(PostService)
        author = await make_user(unit_env)
        post = await make_post(unit_env, author)
        await post_service.toggle_lock(post.id)

        # Act & Assert
        with pytest.raises(PostLockedError):
            await comment_service.create_comment(post.id, author, "Too late")

    @pytest.mark.asyncio
    async def test_reply_to_comment_on_other_post_raises(self, unit_env):
        """A reply must stay on its parent's post."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        author = await make_user(unit_env)
        post = await make_post(unit_env, author, title="First thread")
        other = await make_post(unit_env, author, title="Second thread")
        parent = await comment_service.create_comment(post.id, author, "Parent")

        # Act & Assert
        with pytest.raises(ValidationError):
            await comment_service.create_comment(
                other.id, author, "Misplaced", parent_id=parent.id
            )

    @pytest.mark.asyncio
    async def test_blank_comment_raises(self, unit_env):
        """Whitespace-only content is rejected."""
        comment_service = await unit_env.get(CommentService)
        author = await make_user(unit_env)
        post = await make_post(unit_env, author)

        with pytest.raises(ValidationError):
            await comment_service.create_comment(post.id, author, "   ")


class TestUpdateComment:
    """Tests for update_comment."""

    @pytest.mark.asyncio
    async def test_update_marks_comment_edited(self, unit_env):
        """Edits replace the text and flag the comment."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        author = await make_user(unit_env)
        post = await make_post(unit_env, author)
        comment = await comment_service.create_comment(post.id, author, "Frist")

        # Act
        updated = await comment_service.update_comment(comment.id, author.id, "First")

        # Assert
        assert updated.content == "First"
        assert updated.is_edited
        assert (await comment_service.get_by_id(comment.id)).content == "First"

    @pytest.mark.asyncio
    async def test_update_by_other_user_raises(self, unit_env):
        """Only the author may edit a comment."""
        comment_service = await unit_env.get(CommentService)
        author = await make_user(unit_env)
        intruder = await make_user(unit_env, name="Mallory Intruder")
        post = await make_post(unit_env, author)
        comment = await comment_service.create_comment(post.id, author, "Mine")

        with pytest.raises(NotAuthorizedError):
            await comment_service.update_comment(comment.id, intruder.id, "Yours")

    @pytest.mark.asyncio
    async def test_update_with_overlong_content_raises(self, unit_env):
        """Edits longer than a comment may be are rejected."""
        comment_service = await unit_env.get(CommentService)
        author = await make_user(unit_env)
        post = await make_post(unit_env, author)
        comment = await comment_service.create_comment(post.id, author, "Short")

        with pytest.raises(InvalidEditOperationError):
            await comment_service.update_comment(comment.id, author.id, "x" * 1001)


class TestDeleteComment:
    """Tests for delete_comment."""

    @pytest.mark.asyncio
    async def test_comment_without_replies_is_removed(self, unit_env):
        """A leaf comment is deleted outright and unlinked."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post_service = await unit_env.get(PostService)
        author = await make_user(unit_env)
        post = await make_post(unit_env, author)
        comment = await comment_service.create_comment(post.id, author, "Bye")

        # Act
        deletion = await comment_service.delete_comment(comment.id, author.id)

        # Assert
        assert deletion.hard_deleted
        assert await comment_repo.find_by_id(comment.id) is None
        assert (await post_service.get_by_id(post.id)).comment_ids == []

    @pytest.mark.asyncio
    async def test_comment_with_replies_is_blanked(self, unit_env):
        """A comment with live replies keeps its row but loses its text."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_service = await unit_env.get(PostService)
        user_repo = await unit_env.get(UserRepository)
        author = await make_user(unit_env)
        post = await make_post(unit_env, author)
        parent = await comment_service.create_comment(post.id, author, "Parent")
        reply = await comment_service.create_comment(
            post.id, author, "Reply", parent_id=parent.id
        )

        # Act
        deletion = await comment_service.delete_comment(parent.id, author.id)

        # Assert
        assert not deletion.hard_deleted
        assert deletion.comment.content == DELETED_CONTENT
        assert deletion.comment.is_deleted
        replies, total = await comment_service.list_replies(parent.id, PageRequest())
        assert [r.id for r in replies] == [reply.id]
        assert total == 1
        assert (await post_service.get_by_id(post.id)).comment_ids == [reply.id]
        assert (await user_repo.find_by_id(author.id)).comment_ids == [reply.id]
        assert await comment_service.count_comments(post.id) == 1

    @pytest.mark.asyncio
    async def test_comment_above_deleted_reply_keeps_its_row(self, unit_env):
        """A deleted reply with its own live reply still anchors the thread."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post_service = await unit_env.get(PostService)
        user_repo = await unit_env.get(UserRepository)
        author = await make_user(unit_env)
        post = await make_post(unit_env, author)
        top = await comment_service.create_comment(post.id, author, "Top")
        middle = await comment_service.create_comment(
            post.id, author, "Middle", parent_id=top.id
        )
        leaf = await comment_service.create_comment(
            post.id, author, "Leaf", parent_id=middle.id
        )
        await comment_service.delete_comment(middle.id, author.id)

        # Act
        deletion = await comment_service.delete_comment(top.id, author.id)

        # Assert
        assert not deletion.hard_deleted
        assert (await comment_repo.find_by_id(top.id)).is_deleted
        assert (await comment_repo.find_by_id(middle.id)).is_deleted
        assert not (await comment_service.get_by_id(leaf.id)).is_deleted
        assert (await post_service.get_by_id(post.id)).comment_ids == [leaf.id]
        assert (await user_repo.find_by_id(author.id)).comment_ids == [leaf.id]
        assert await comment_service.count_comments(post.id) == 1
        answer = await comment_service.create_comment(
            post.id, author, "Still open", parent_id=leaf.id
        )
        assert answer.parent_id == leaf.id

    @pytest.mark.asyncio
    async def test_deleted_comment_with_reply_rows_cannot_be_removed(self, unit_env):
        """A blanked comment stays as long as any reply row points at it."""
        # Arrange
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
            await comment_service.delete_comment(parent.id, author.id)

    @pytest.mark.asyncio
    async def test_reply_to_deleted_comment_raises(self, unit_env):
        """Soft-deleted comments cannot receive new replies."""
        # Arrange
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
            await comment_service.create_comment(
                post.id, author, "Another reply", parent_id=parent.id
            )

    @pytest.mark.asyncio
    async def test_delete_by_other_user_raises(self, unit_env):
        """Only the author may delete a comment."""
        comment_service = await unit_env.get(CommentService)
        author = await make_user(unit_env)
        intruder = await make_user(unit_env, name="Mallory Intruder")
        post = await make_post(unit_env, author)
        comment = await comment_service.create_comment(post.id, author, "Mine")

        with pytest.raises(NotAuthorizedError):
            await comment_service.delete_comment(comment.id, intruder.id)


class TestListAndCount:
    """Tests for listing and counting comments."""

    @pytest.mark.asyncio
    async def test_list_comments_by_post_newest_first(self, unit_env):
        """Post comments come back newest first with the total."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        author = await make_user(unit_env)
        post = await make_post(unit_env, author)
        older = await comment_service.create_comment(post.id, author, "Older")
        newer = await comment_service.create_comment(post.id, author, "Newer")

        # Act
        comments, total = await comment_service.list_comments_by_post(
            post.id, PageRequest()
        )

        # Assert
        assert [c.id for c in comments] == [newer.id, older.id]
        assert total == 2
        assert await comment_service.count_comments(post.id) == 2

    @pytest.mark.asyncio
    async def test_delete_comments_by_post_returns_ids(self, unit_env):
        """Bulk deletion reports the removed ids for the vote cascade."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        user_repo = await unit_env.get(UserRepository)
        author = await make_user(unit_env)
        post = await make_post(unit_env, author)
        first = await comment_service.create_comment(post.id, author, "One")
        second = await comment_service.create_comment(post.id, author, "Two")

        # Act
        removed = await comment_service.delete_comments_by_post(post.id)

        # Assert
        assert set(removed) == {first.id, second.id}
        assert (await user_repo.find_by_id(author.id)).comment_ids == []

    @pytest.mark.asyncio
    async def test_count_replies_of_missing_comment_raises(self, unit_env):
        """Counting replies needs an existing parent."""
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.count_replies(CommentId(uuid4()))

    @pytest.mark.asyncio
    async def test_list_replies_oldest_first(self, unit_env):
        """Replies read top to bottom in the order they were written."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        author = await make_user(unit_env)
        post = await make_post(unit_env, author)
        parent = await comment_service.create_comment(post.id, author, "Parent")
        first = await comment_service.create_comment(
            post.id, author, "First reply", parent_id=parent.id
        )
        second = await comment_service.create_comment(
            post.id, author, "Second reply", parent_id=parent.id
        )

        # Act
        replies, total = await comment_service.list_replies(parent.id, PageRequest())

        # Assert
        assert [r.id for r in replies] == [first.id, second.id]
        assert total == 2

    @pytest.mark.asyncio
    async def test_fallback_listing_counts_top_level_only(self, unit_env):
        """Without a denormalized list, pages and totals cover top-level comments."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author = await make_user(unit_env)
        post = await make_post(unit_env, author)
        now = datetime.now()
        top = Comment(
            id=CommentId(uuid4()),
            post_id=post.id,
            author_id=author.id,
            content="Top level",
            created_at=now,
            updated_at=now,
        )
        reply = Comment(
            id=CommentId(uuid4()),
            post_id=post.id,
            author_id=author.id,
            content="Nested",
            parent_id=top.id,
            created_at=now + timedelta(seconds=1),
            updated_at=now + timedelta(seconds=1),
        )
        await comment_repo.save(top)
        await comment_repo.save(reply)

        # Act
        comments, total = await comment_service.list_comments_by_post(
            post.id, PageRequest()
        )

        # Assert
        assert [c.id for c in comments] == [top.id]
        assert total == 1
