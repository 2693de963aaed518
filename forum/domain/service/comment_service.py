"""Comment domain service."""

from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from uuid import uuid4

import logfire

from forum.domain.cache import CommentCache
from forum.domain.error import (
    ContentDeletedException,
    InvalidEditOperationError,
    NotAuthorizedError,
    NotFoundError,
    PostLockedError,
    ValidationError,
)
from forum.domain.model import Comment, User
from forum.domain.model.comment import MAX_COMMENT_LENGTH
from forum.domain.repository import CommentRepository
from forum.domain.value import CommentId, PageRequest, PostId, UserId

from .base import Service
from .post_service import PostService
from .user_service import UserService


@dataclass
class CommentDeletion:
    """What ``delete_comment`` did to a comment."""

    comment: Comment
    hard_deleted: bool


class CommentService(Service):
    """Domain service for comment operations.

    A comment's id is mirrored in its post's ``comment_ids`` and its author's
    ``comment_ids``; both lists track live comments only.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        comment_cache: CommentCache,
        post_service: PostService,
        user_service: UserService,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            comment_cache: Cache of comment entities
            post_service: Post domain service
            user_service: User domain service
        """
        self.comment_repository = comment_repository
        self.comment_cache = comment_cache
        self.post_service = post_service
        self.user_service = user_service

    async def create_comment(
        self,
        post_id: PostId,
        author: User,
        content: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment on a post or reply to another comment.

        Args:
            post_id: Post ID
            author: Author of the comment
            content: Comment text (trimmed)
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            NotFoundError: If the post or the parent comment doesn't exist
            PostLockedError: If the post is locked
            ContentDeletedException: If the parent comment is deleted
            ValidationError: If the content is blank or the parent belongs
                to another post
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            author_id=str(author.id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            post = await self.post_service.get_by_id(post_id)
            if post.is_locked:
                logfire.warn("Comment on locked post", post_id=str(post_id))
                raise PostLockedError(str(post_id))

            if parent_id:
                parent = await self.get_by_id(parent_id)
                if parent.post_id != post_id:
                    logfire.error(
                        "Parent comment does not belong to post",
                        parent_id=str(parent_id),
                        parent_post_id=str(parent.post_id),
                        target_post_id=str(post_id),
                    )
                    raise ValidationError("Parent comment does not belong to this post")
                if parent.is_deleted:
                    raise ContentDeletedException("comment", str(parent_id))

            text = content.strip()
            if not text:
                raise ValidationError("Comment content cannot be empty")

            now = datetime.now()
            comment = Comment(
                id=CommentId(uuid4()),
                post_id=post_id,
                author_id=author.id,
                content=text,
                parent_id=parent_id,
                created_at=now,
                updated_at=now,
            )
            saved = await self.comment_repository.save(comment)

            await self.comment_cache.set(saved)
            await self.post_service.add_comment(post_id, saved.id)
            await self.user_service.add_comment(author.id, saved.id)

            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                is_reply=parent_id is not None,
            )
            return saved

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID through the cache.

        Args:
            comment_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            comment = await self.comment_cache.fetch(
                comment_id, lambda: self.comment_repository.find_by_id(comment_id)
            )
            if not comment:
                logfire.warn("Comment not found", comment_id=str(comment_id))
            return comment

    async def get_by_id(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID.

        Raises:
            NotFoundError: If comment not found
        """
        comment = await self.get_comment_by_id(comment_id)
        if not comment:
            raise NotFoundError("Comment", str(comment_id))
        return comment

    async def list_comments_by_post(
        self, post_id: PostId, page: PageRequest
    ) -> tuple[list[Comment], int]:
        """List live comments on a post, newest first.

        Raises:
            NotFoundError: If post not found
        """
        with logfire.span(
            "comment_service.list_comments_by_post",
            post_id=str(post_id),
            page=page.page,
        ):
            post = await self.post_service.get_by_id(post_id)
            if post.comment_ids:
                newest_first = list(reversed(post.comment_ids))
                comments = await self.comment_cache.fetch_many(
                    page.slice(newest_first), self.comment_repository.find_by_ids
                )
                live = [comment for comment in comments if not comment.is_deleted]
                return live, len(newest_first)

            comments = await self.comment_repository.find_top_level_by_post(
                post_id, limit=page.limit, offset=page.offset
            )
            await self.comment_cache.set_many(comments)
            total = await self.comment_repository.count_top_level_by_post(post_id)
            return comments, total

    async def list_replies(
        self, comment_id: CommentId, page: PageRequest
    ) -> tuple[list[Comment], int]:
        """List live direct replies to a comment, oldest first.

        Raises:
            NotFoundError: If the parent comment doesn't exist
        """
        with logfire.span(
            "comment_service.list_replies", comment_id=str(comment_id), page=page.page
        ):
            await self.get_by_id(comment_id)
            replies = await self.comment_repository.find_replies(
                comment_id, limit=page.limit, offset=page.offset
            )
            await self.comment_cache.set_many(replies)
            total = await self.comment_repository.count_replies(comment_id)
            return replies, total

    async def list_comments_by_user(
        self, user_id: UserId, page: PageRequest
    ) -> tuple[list[Comment], int]:
        """List a user's live comments, newest first.

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span(
            "comment_service.list_comments_by_user",
            user_id=str(user_id),
            page=page.page,
        ):
            user = await self.user_service.get_by_id(user_id)
            if user.comment_ids:
                newest_first = list(reversed(user.comment_ids))
                comments = await self.comment_cache.fetch_many(
                    page.slice(newest_first), self.comment_repository.find_by_ids
                )
                live = [comment for comment in comments if not comment.is_deleted]
                return live, len(newest_first)

            comments = await self.comment_repository.find_by_author(
                user_id, limit=page.limit, offset=page.offset
            )
            await self.comment_cache.set_many(comments)
            return comments, await self.comment_repository.count_by_author(user_id)

    async def update_comment(
        self, comment_id: CommentId, editor_id: UserId, content: str
    ) -> Comment:
        """Edit a comment's text and mark it edited.

        Raises:
            NotFoundError: If comment not found
            NotAuthorizedError: If the editor isn't the author
            ContentDeletedException: If the comment is deleted
            InvalidEditOperationError: If the new content is blank or too long
        """
        with logfire.span(
            "comment_service.update_comment",
            comment_id=str(comment_id),
            editor_id=str(editor_id),
        ):
            comment = await self.get_by_id(comment_id)
            if comment.author_id != editor_id:
                raise NotAuthorizedError("comment", str(comment_id), str(editor_id))
            if comment.is_deleted:
                raise ContentDeletedException("comment", str(comment_id))

            text = content.strip()
            if not text:
                raise InvalidEditOperationError("Comment content cannot be empty")
            if len(text) > MAX_COMMENT_LENGTH:
                raise InvalidEditOperationError(
                    f"Comment content cannot exceed {MAX_COMMENT_LENGTH} characters"
                )

            updated = await self.comment_repository.update_content(comment_id, text)
            await self.comment_cache.invalidate(comment_id)
            if not updated:
                raise ContentDeletedException("comment", str(comment_id))

            logfire.info(
                "Comment updated", comment_id=str(comment_id), length=len(text)
            )
            return updated

    async def soft_delete_comment(self, comment: Comment) -> Comment:
        """Blank a comment but keep its row so replies stay attached."""
        with logfire.span(
            "comment_service.soft_delete_comment", comment_id=str(comment.id)
        ):
            updated = await self.comment_repository.soft_delete(comment.id)
            await self._detach(comment)
            if not updated:
                raise NotFoundError("Comment", str(comment.id))
            logfire.info("Comment soft-deleted", comment_id=str(comment.id))
            return updated

    async def hard_delete_comment(self, comment: Comment) -> bool:
        """Delete a comment row. Votes on it are removed by the caller.

        Returns:
            True if the row existed
        """
        with logfire.span(
            "comment_service.hard_delete_comment", comment_id=str(comment.id)
        ):
            deleted = await self.comment_repository.delete(comment.id)
            await self._detach(comment)
            logfire.info("Comment deleted", comment_id=str(comment.id), existed=deleted)
            return deleted

    async def delete_comment(
        self, comment_id: CommentId, requester_id: UserId
    ) -> CommentDeletion:
        """Delete a comment on behalf of its author.

        A comment that still has reply rows, live or soft-deleted, is
        soft-deleted so the thread survives; any other comment is removed
        outright.

        Raises:
            NotFoundError: If comment not found
            NotAuthorizedError: If the requester isn't the author
            ContentDeletedException: If the comment is already soft-deleted
                and still has replies
        """
        with logfire.span(
            "comment_service.delete_comment",
            comment_id=str(comment_id),
            requester_id=str(requester_id),
        ):
            comment = await self.get_by_id(comment_id)
            if comment.author_id != requester_id:
                raise NotAuthorizedError("comment", str(comment_id), str(requester_id))

            if await self.comment_repository.count_all_replies(comment_id) > 0:
                if comment.is_deleted:
                    raise ContentDeletedException("comment", str(comment_id))
                deleted = await self.soft_delete_comment(comment)
                return CommentDeletion(comment=deleted, hard_deleted=False)

            await self.hard_delete_comment(comment)
            return CommentDeletion(comment=comment, hard_deleted=True)

    async def count_comments(self, post_id: PostId) -> int:
        """Count the live comments on a post.

        Raises:
            NotFoundError: If post not found
        """
        post = await self.post_service.get_by_id(post_id)
        if post.comment_ids:
            return len(post.comment_ids)
        return await self.comment_repository.count_live_by_post(post_id)

    async def count_replies(self, comment_id: CommentId) -> int:
        """Count live direct replies to a comment.

        Raises:
            NotFoundError: If comment not found
        """
        await self.get_by_id(comment_id)
        return await self.comment_repository.count_replies(comment_id)

    async def delete_comments_by_post(self, post_id: PostId) -> list[CommentId]:
        """Delete every comment on a post and detach them from their authors.

        Returns:
            IDs of the deleted comments, for cascading their votes
        """
        with logfire.span(
            "comment_service.delete_comments_by_post", post_id=str(post_id)
        ):
            comments = await self.comment_repository.find_by_post(post_id)
            by_author: dict[UserId, list[CommentId]] = defaultdict(list)
            for comment in comments:
                by_author[comment.author_id].append(comment.id)

            removed = await self.comment_repository.delete_by_post(post_id)
            comment_ids = [comment.id for comment in comments]
            await self.comment_cache.invalidate(*comment_ids)
            await self.post_service.clear_comments(post_id)
            for author_id, ids in by_author.items():
                await self.user_service.remove_comments(author_id, ids)

            logfire.info(
                "Comments deleted for post",
                post_id=str(post_id),
                removed=removed,
                authors=len(by_author),
            )
            return comment_ids

    async def apply_vote_delta(
        self, comment_id: CommentId, upvotes_delta: int, downvotes_delta: int
    ) -> Comment:
        """Shift a comment's vote counters.

        Raises:
            NotFoundError: If comment not found
        """
        with logfire.span(
            "comment_service.apply_vote_delta",
            comment_id=str(comment_id),
            upvotes_delta=upvotes_delta,
            downvotes_delta=downvotes_delta,
        ):
            updated = await self.comment_repository.adjust_votes(
                comment_id, upvotes_delta, downvotes_delta
            )
            if not updated:
                raise NotFoundError("Comment", str(comment_id))
            await self.comment_cache.invalidate(comment_id)
            return updated

    async def _detach(self, comment: Comment) -> None:
        """Drop a comment from the cache and both denormalized id lists."""
        await self.comment_cache.invalidate(comment.id)
        await self.post_service.remove_comment(comment.post_id, comment.id)
        await self.user_service.remove_comments(comment.author_id, [comment.id])
