"""Unit tests for PrefixSearchService."""

import pytest

from forum.domain.cache import CacheStore
from forum.domain.search import PrefixTree, SearchIndexState
from forum.domain.service import PostService, PrefixSearchService
from forum.domain.value import AutocompleteType
from tests.conftest import make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestAutocomplete:
    """Tests for autocomplete."""

    @pytest.mark.asyncio
    async def test_not_ready_index_asks_for_fallback(self, unit_env):
        """Before the first build the caller is told to fall back."""
        search_service = await unit_env.get(PrefixSearchService)

        outcome = await search_service.autocomplete("redis")

        assert not outcome.success
        assert not outcome.index_ready
        assert outcome.message == "Search index not ready, use fallback search"

    @pytest.mark.asyncio
    async def test_short_query_returns_empty_results(self, unit_env):
        search_service = await unit_env.get(PrefixSearchService)
        (await unit_env.get(SearchIndexState)).mark_ready()

        outcome = await search_service.autocomplete("r")

        assert outcome.success
        assert outcome.message == "Query too short"
        assert outcome.results.total == 0

    @pytest.mark.asyncio
    async def test_groups_posts_users_and_tags(self, unit_env):
        """One query consults all three trees."""
        # Arrange
        search_service = await unit_env.get(PrefixSearchService)
        (await unit_env.get(SearchIndexState)).mark_ready()
        author = await make_user(unit_env, name="Pythia Oracle")
        post = await make_post(
            unit_env, author, title="Python packaging tips", tags=["python"]
        )

        # Act
        outcome = await search_service.autocomplete("pyth")

        # Assert
        results = outcome.results
        assert [p["post_id"] for p in results.posts] == [str(post.id)]
        assert [u["name"] for u in results.users] == ["Pythia Oracle"]
        assert results.tags == ["python"]
        assert results.total == 3

    @pytest.mark.asyncio
    async def test_author_match_adds_their_posts(self, unit_env):
        """Posts by a matching user are included even if their text differs."""
        # Arrange
        search_service = await unit_env.get(PrefixSearchService)
        (await unit_env.get(SearchIndexState)).mark_ready()
        author = await make_user(unit_env, name="Zelda Zimmer")
        post = await make_post(unit_env, author, title="Unrelated topic")

        # Act
        outcome = await search_service.autocomplete("zelda")

        # Assert
        assert outcome.results.posts[0]["post_id"] == str(post.id)
        assert outcome.results.posts[0]["matched_by"] == "author"

    @pytest.mark.asyncio
    async def test_deleted_post_leaves_index(self, unit_env):
        """Deleting a post removes its post and tag entries."""
        # Arrange
        search_service = await unit_env.get(PrefixSearchService)
        post_service = await unit_env.get(PostService)
        (await unit_env.get(SearchIndexState)).mark_ready()
        author = await make_user(unit_env)
        post = await make_post(unit_env, author, title="Ephemeral thoughts")

        # Act
        await post_service.delete_post(post)

        # Assert
        outcome = await search_service.autocomplete(
            "ephemeral", type=AutocompleteType.POST
        )
        assert outcome.results.posts == []
        assert await search_service.get_tag_suggestions("redis") == []


class TestTagSuggestions:
    """Tests for get_tag_suggestions."""

    @pytest.mark.asyncio
    async def test_tags_ranked_by_usage(self, unit_env):
        """Tags used by more posts are suggested first."""
        # Arrange
        search_service = await unit_env.get(PrefixSearchService)
        (await unit_env.get(SearchIndexState)).mark_ready()
        author = await make_user(unit_env)
        await make_post(unit_env, author, title="First post", tags=["rust"])
        await make_post(unit_env, author, title="Second post", tags=["rust"])
        await make_post(unit_env, author, title="Third post", tags=["rustls"])

        # Act
        suggestions = await search_service.get_tag_suggestions("rus")

        # Assert
        assert [(s.tag, s.count) for s in suggestions] == [("rust", 2), ("rustls", 1)]


class TestRebuild:
    """Tests for rebuild_index and initialize_if_needed."""

    @pytest.mark.asyncio
    async def test_rebuild_restores_index_from_database(self, unit_env):
        """A wiped index is rebuilt from posts and users."""
        # Arrange
        search_service = await unit_env.get(PrefixSearchService)
        store = await unit_env.get(CacheStore)
        author = await make_user(unit_env)
        await make_post(unit_env, author, title="Rebuilding indexes")
        await store.delete_pattern("prefixy:*")

        # Act
        result = await search_service.rebuild_index()

        # Assert
        assert result.success
        assert (result.posts_indexed, result.users_indexed) == (1, 1)
        state = await unit_env.get(SearchIndexState)
        assert state.ready
        assert state.last_rebuilt_at is not None
        outcome = await search_service.autocomplete("rebuil")
        assert len(outcome.results.posts) == 1

    @pytest.mark.asyncio
    async def test_concurrent_rebuild_is_refused(self, unit_env):
        """A second rebuild leaves the index alone while one is running."""
        # Arrange
        search_service = await unit_env.get(PrefixSearchService)
        store = await unit_env.get(CacheStore)
        state = await unit_env.get(SearchIndexState)
        author = await make_user(unit_env)
        await make_post(unit_env, author, title="Rebuilding indexes")

        # Act
        async with state.lock:
            result = await search_service.rebuild_index()

        # Assert
        assert not result.success
        assert result.message == "Rebuild already in progress"
        assert not await PrefixTree(store, "posts").is_empty()
        assert state.last_rebuilt_at is None

    @pytest.mark.asyncio
    async def test_populated_index_is_marked_ready(self, unit_env):
        """Startup skips the rebuild when the post tree has entries."""
        # Arrange
        search_service = await unit_env.get(PrefixSearchService)
        store = await unit_env.get(CacheStore)
        await PrefixTree(store, "posts").add("already indexed")

        # Act
        await search_service.initialize_if_needed()

        # Assert
        state = await unit_env.get(SearchIndexState)
        assert state.ready
        assert state.last_rebuilt_at is None

    @pytest.mark.asyncio
    async def test_empty_index_is_built_on_startup(self, unit_env):
        search_service = await unit_env.get(PrefixSearchService)

        await search_service.initialize_if_needed()

        state = await unit_env.get(SearchIndexState)
        assert state.ready
        assert state.last_rebuilt_at is not None

    @pytest.mark.asyncio
    async def test_increment_tag_score(self, unit_env):
        """Boosting a tag updates every prefix entry for it."""
        search_service = await unit_env.get(PrefixSearchService)
        author = await make_user(unit_env)
        await make_post(unit_env, author, tags=["go"])
        await make_post(unit_env, author, title="Another post", tags=["golang"])

        updated = await search_service.increment_tag_score("golang")

        assert updated == len("golang")
