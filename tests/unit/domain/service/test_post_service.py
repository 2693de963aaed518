"""Unit tests for PostService."""

from uuid import uuid4

import pytest

from forum.domain.cache import FeedCache, FeedQuery, PostCache
from forum.domain.error import NotFoundError, ValidationError
from forum.domain.repository import PostRepository, UserRepository
from forum.domain.search import SearchIndexState
from forum.domain.service import PostService, PrefixSearchService, VoteService
from forum.domain.value import (
    PageRequest,
    PostId,
    PostSortField,
    SortOrder,
    VotableType,
)
from tests.conftest import make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreatePost:
    """Tests for create_post."""

    @pytest.mark.asyncio
    async def test_create_post_updates_every_copy(self, unit_env):
        """Creating a post should persist, cache, link and index it."""
        # Arrange
        post_cache = await unit_env.get(PostCache)
        user_repo = await unit_env.get(UserRepository)
        search_service = await unit_env.get(PrefixSearchService)
        (await unit_env.get(SearchIndexState)).mark_ready()
        author = await make_user(unit_env)

        # Act
        post = await make_post(
            unit_env, author, title="Sharding Postgres", tags=["DB", "db", "Scale"]
        )

        # Assert
        assert post.tags == ["db", "scale"]
        assert await post_cache.get(post.id) == post
        stored_author = await user_repo.find_by_id(author.id)
        assert stored_author.post_ids == [post.id]
        outcome = await search_service.autocomplete("shard")
        assert [p["post_id"] for p in outcome.results.posts] == [str(post.id)]

    @pytest.mark.asyncio
    async def test_create_post_invalidates_feed(self, unit_env):
        """A cached listing page should be dropped when a post is added."""
        # Arrange
        post_service = await unit_env.get(PostService)
        feed_cache = await unit_env.get(FeedCache)
        author = await make_user(unit_env)
        await post_service.list_posts(PageRequest())
        assert await feed_cache.get_page(FeedQuery()) is not None

        # Act
        await make_post(unit_env, author)

        # Assert
        assert await feed_cache.get_page(FeedQuery()) is None


class TestListPosts:
    """Tests for list_posts."""

    @pytest.mark.asyncio
    async def test_list_posts_orders_and_counts(self, unit_env):
        """Posts should come back newest first with the total."""
        # Arrange
        post_service = await unit_env.get(PostService)
        author = await make_user(unit_env)
        first = await make_post(unit_env, author, title="First post here")
        second = await make_post(unit_env, author, title="Second post here")

        # Act
        posts, total = await post_service.list_posts(PageRequest(limit=10))

        # Assert
        assert [p.id for p in posts] == [second.id, first.id]
        assert total == 2

    @pytest.mark.asyncio
    async def test_cached_page_skips_deleted_posts(self, unit_env):
        """A post deleted behind the cache's back is dropped from the page."""
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        post_cache = await unit_env.get(PostCache)
        author = await make_user(unit_env)
        keep = await make_post(unit_env, author, title="Keeper post")
        gone = await make_post(unit_env, author, title="Doomed post")
        await post_service.list_posts(PageRequest())
        await post_repo.delete(gone.id)
        await post_cache.invalidate(gone.id)

        # Act
        posts, _ = await post_service.list_posts(PageRequest())

        # Assert
        assert [p.id for p in posts] == [keep.id]

    @pytest.mark.asyncio
    async def test_list_posts_sorts_by_upvotes(self, unit_env):
        """Sorting by upvotes should put the most voted post first."""
        # Arrange
        post_service = await unit_env.get(PostService)
        author = await make_user(unit_env)
        quiet = await make_post(unit_env, author, title="Quiet post")
        loud = await make_post(unit_env, author, title="Loud post")
        await post_service.apply_vote_delta(quiet.id, 3, 0)
        await post_service.apply_vote_delta(loud.id, 1, 0)

        # Act
        posts, _ = await post_service.list_posts(
            PageRequest(), sort_by=PostSortField.UPVOTES, order=SortOrder.DESC
        )

        # Assert
        assert [p.id for p in posts] == [quiet.id, loud.id]


class TestViewPost:
    """Tests for view_post."""

    @pytest.mark.asyncio
    async def test_view_post_increments_view_count(self, unit_env):
        """Every view should bump the counter."""
        # Arrange
        post_service = await unit_env.get(PostService)
        author = await make_user(unit_env)
        post = await make_post(unit_env, author)

        # Act
        await post_service.view_post(post.id)
        viewed = await post_service.view_post(post.id)

        # Assert
        assert viewed.view_count == 2

    @pytest.mark.asyncio
    async def test_view_missing_post_raises(self, unit_env):
        """Viewing a post that doesn't exist should raise NotFoundError."""
        post_service = await unit_env.get(PostService)

        with pytest.raises(NotFoundError):
            await post_service.view_post(PostId(uuid4()))


class TestUpdatePost:
    """Tests for update_post."""

    @pytest.mark.asyncio
    async def test_update_post_replaces_cached_copy(self, unit_env):
        """The cache should not serve the old title after an edit."""
        # Arrange
        post_service = await unit_env.get(PostService)
        author = await make_user(unit_env)
        post = await make_post(unit_env, author)

        # Act
        await post_service.update_post(post.id, title="A brand new title")

        # Assert
        fetched = await post_service.get_by_id(post.id)
        assert fetched.title == "A brand new title"

    @pytest.mark.asyncio
    async def test_update_without_fields_raises(self, unit_env):
        """An edit with nothing to change is rejected."""
        post_service = await unit_env.get(PostService)
        author = await make_user(unit_env)
        post = await make_post(unit_env, author)

        with pytest.raises(ValidationError):
            await post_service.update_post(post.id)


class TestModeration:
    """Tests for pin and lock toggles."""

    @pytest.mark.asyncio
    async def test_toggle_pin_and_lock_flip_flags(self, unit_env):
        """Toggling twice should restore the original state."""
        # Arrange
        post_service = await unit_env.get(PostService)
        author = await make_user(unit_env)
        post = await make_post(unit_env, author)

        # Act
        pinned = await post_service.toggle_pin(post.id)
        locked = await post_service.toggle_lock(post.id)
        unlocked = await post_service.toggle_lock(post.id)

        # Assert
        assert pinned.is_pinned
        assert locked.is_locked
        assert not unlocked.is_locked


class TestFeedInvalidation:
    """Tests for which post mutations drop cached listing pages."""

    @staticmethod
    async def _warm_feed(env):
        post_service = await env.get(PostService)
        feed_cache = await env.get(FeedCache)
        await post_service.list_posts(PageRequest())
        assert await feed_cache.get_page(FeedQuery()) is not None
        return feed_cache

    @pytest.mark.asyncio
    async def test_vote_invalidates_feed(self, unit_env):
        """Vote counters feed the upvote sort, so votes drop the pages."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        author = await make_user(unit_env)
        voter = await make_user(unit_env, name="Vera Voter")
        post = await make_post(unit_env, author)
        feed_cache = await self._warm_feed(unit_env)

        # Act
        await vote_service.upvote(VotableType.POST, post.id, voter.id)

        # Assert
        assert await feed_cache.get_page(FeedQuery()) is None

    @pytest.mark.asyncio
    async def test_pin_invalidates_feed(self, unit_env):
        # Arrange
        post_service = await unit_env.get(PostService)
        author = await make_user(unit_env)
        post = await make_post(unit_env, author)
        feed_cache = await self._warm_feed(unit_env)

        # Act
        await post_service.toggle_pin(post.id)

        # Assert
        assert await feed_cache.get_page(FeedQuery()) is None

    @pytest.mark.asyncio
    async def test_lock_invalidates_feed(self, unit_env):
        # Arrange
        post_service = await unit_env.get(PostService)
        author = await make_user(unit_env)
        post = await make_post(unit_env, author)
        feed_cache = await self._warm_feed(unit_env)

        # Act
        await post_service.toggle_lock(post.id)

        # Assert
        assert await feed_cache.get_page(FeedQuery()) is None

    @pytest.mark.asyncio
    async def test_content_update_invalidates_feed(self, unit_env):
        # Arrange
        post_service = await unit_env.get(PostService)
        author = await make_user(unit_env)
        post = await make_post(unit_env, author)
        feed_cache = await self._warm_feed(unit_env)

        # Act
        await post_service.update_post(post.id, content="A rewritten body of text.")

        # Assert
        assert await feed_cache.get_page(FeedQuery()) is None

    @pytest.mark.asyncio
    async def test_view_keeps_feed(self, unit_env):
        """View counts alone leave cached pages to expire on their own."""
        # Arrange
        post_service = await unit_env.get(PostService)
        author = await make_user(unit_env)
        post = await make_post(unit_env, author)
        feed_cache = await self._warm_feed(unit_env)

        # Act
        await post_service.view_post(post.id)

        # Assert
        assert await feed_cache.get_page(FeedQuery()) is not None
