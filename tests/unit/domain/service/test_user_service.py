"""Unit tests for UserService."""

from uuid import uuid4

import pytest

from forum.domain.cache import UserCache
from forum.domain.error import (
    BusinessRuleViolationError,
    NotFoundError,
    UserBannedError,
)
from forum.domain.repository import UserRepository
from forum.domain.search import SearchIndexState
from forum.domain.service import PrefixSearchService, UserService
from forum.domain.value import (
    AutocompleteType,
    CommentId,
    PageRequest,
    UserId,
    UserRole,
)
from tests.conftest import make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestRegister:
    """Tests for register."""

    @pytest.mark.asyncio
    async def test_register_is_idempotent_per_email(self, unit_env):
        """Registering the same email twice returns the first account."""
        # Arrange
        user_service = await unit_env.get(UserService)

        # Act
        first = await user_service.register("Ada Lovelace", "Ada@Example.com")
        second = await user_service.register("Someone Else", "ada@example.com ")

        # Assert
        assert first.email == "ada@example.com"
        assert second.id == first.id
        assert second.name == "Ada Lovelace"

    @pytest.mark.asyncio
    async def test_register_caches_and_indexes(self, unit_env):
        """New users are cached and searchable by name."""
        # Arrange
        user_service = await unit_env.get(UserService)
        user_cache = await unit_env.get(UserCache)
        search_service = await unit_env.get(PrefixSearchService)
        (await unit_env.get(SearchIndexState)).mark_ready()

        # Act
        user = await user_service.register("Linus Torvalds", "linus@example.com")

        # Assert
        assert await user_cache.get(user.id) == user
        outcome = await search_service.autocomplete(
            "torv", type=AutocompleteType.USER
        )
        assert [u["user_id"] for u in outcome.results.users] == [str(user.id)]


class TestGetUser:
    """Tests for lookups."""

    @pytest.mark.asyncio
    async def test_get_missing_user_raises(self, unit_env):
        user_service = await unit_env.get(UserService)

        with pytest.raises(NotFoundError):
            await user_service.get_by_id(UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_get_users_by_ids_skips_unknown(self, unit_env):
        """Unknown IDs are dropped and order is preserved."""
        user_service = await unit_env.get(UserService)
        ada = await make_user(unit_env)
        bob = await make_user(unit_env, name="Bob Builder")

        users = await user_service.get_users_by_ids([bob.id, UserId(uuid4()), ada.id])

        assert [u.id for u in users] == [bob.id, ada.id]


class TestUpdateUser:
    """Tests for update_user."""

    @pytest.mark.asyncio
    async def test_rename_moves_search_entry(self, unit_env):
        """The old name stops matching once the user is renamed."""
        # Arrange
        user_service = await unit_env.get(UserService)
        search_service = await unit_env.get(PrefixSearchService)
        (await unit_env.get(SearchIndexState)).mark_ready()
        user = await make_user(unit_env, name="Margaret Hamilton")

        # Act
        updated = await user_service.update_user(user.id, name="  Maggie Ham  ")

        # Assert
        assert updated.name == "Maggie Ham"
        old = await search_service.autocomplete("margaret", type=AutocompleteType.USER)
        new = await search_service.autocomplete("maggie", type=AutocompleteType.USER)
        assert old.results.users == []
        assert [u["name"] for u in new.results.users] == ["Maggie Ham"]

    @pytest.mark.asyncio
    async def test_profile_edit_keeps_writes_made_after_the_read(
        self, unit_env, monkeypatch
    ):
        """A ban or new comment landing mid-edit survives the profile save."""
        # Arrange
        user_service = await unit_env.get(UserService)
        user_repo = await unit_env.get(UserRepository)
        user = await make_user(unit_env, name="Grace Hopper")
        comment_id = CommentId(uuid4())
        read = user_repo.find_by_id

        async def read_then_interleave(user_id):
            snapshot = await read(user_id)
            await user_repo.set_role(user_id, UserRole.BANNED_USER)
            await user_repo.add_comment_id(user_id, comment_id)
            return snapshot

        monkeypatch.setattr(user_repo, "find_by_id", read_then_interleave)

        # Act
        updated = await user_service.update_user(
            user.id, name="Amazing Grace", avatar_url="https://img.example.com/g.png"
        )

        # Assert
        assert updated.name == "Amazing Grace"
        assert updated.avatar_url == "https://img.example.com/g.png"
        assert updated.role == UserRole.BANNED_USER
        assert updated.comment_ids == [comment_id]

    @pytest.mark.asyncio
    async def test_update_missing_user_raises(self, unit_env):
        user_service = await unit_env.get(UserService)

        with pytest.raises(NotFoundError):
            await user_service.update_user(UserId(uuid4()), name="Nobody Here")


class TestDeleteUser:
    """Tests for delete_user."""

    @pytest.mark.asyncio
    async def test_delete_user_drops_row_cache_and_index(self, unit_env):
        """A deleted user is gone from storage, cache and autocomplete."""
        # Arrange
        user_service = await unit_env.get(UserService)
        user_repo = await unit_env.get(UserRepository)
        user_cache = await unit_env.get(UserCache)
        search_service = await unit_env.get(PrefixSearchService)
        (await unit_env.get(SearchIndexState)).mark_ready()
        user = await make_user(unit_env, name="Dennis Ritchie")
        await user_service.get_by_id(user.id)

        # Act
        deleted = await user_service.delete_user(user.id)

        # Assert
        assert deleted
        assert await user_repo.find_by_id(user.id) is None
        assert await user_cache.get(user.id) is None
        outcome = await search_service.autocomplete(
            "ritchie", type=AutocompleteType.USER
        )
        assert outcome.results.users == []

    @pytest.mark.asyncio
    async def test_delete_user_keeps_namesakes_indexed(self, unit_env):
        """Only the deleted account leaves the index, not others with its name."""
        # Arrange
        user_service = await unit_env.get(UserService)
        search_service = await unit_env.get(PrefixSearchService)
        (await unit_env.get(SearchIndexState)).mark_ready()
        first = await make_user(unit_env, name="Alan Turing", email="a1@example.com")
        second = await make_user(unit_env, name="Alan Turing", email="a2@example.com")

        # Act
        await user_service.delete_user(first.id)

        # Assert
        outcome = await search_service.autocomplete(
            "turing", type=AutocompleteType.USER
        )
        assert [u["user_id"] for u in outcome.results.users] == [str(second.id)]

    @pytest.mark.asyncio
    async def test_delete_missing_user_returns_false(self, unit_env):
        user_service = await unit_env.get(UserService)

        assert not await user_service.delete_user(UserId(uuid4()))


class TestBans:
    """Tests for toggle_ban and get_contributor."""

    @pytest.mark.asyncio
    async def test_banned_user_cannot_contribute(self, unit_env):
        """A banned user is rejected until the ban is lifted."""
        # Arrange
        user_service = await unit_env.get(UserService)
        user = await make_user(unit_env)

        # Act
        banned = await user_service.toggle_ban(user.id)

        # Assert
        assert banned.role == UserRole.BANNED_USER
        with pytest.raises(UserBannedError):
            await user_service.get_contributor(user.id)

        restored = await user_service.toggle_ban(user.id)
        assert restored.role == UserRole.USER
        assert (await user_service.get_contributor(user.id)).id == user.id

    @pytest.mark.asyncio
    async def test_admin_cannot_be_banned(self, unit_env):
        user_service = await unit_env.get(UserService)
        admin = await make_user(unit_env, role=UserRole.ADMIN)

        with pytest.raises(BusinessRuleViolationError):
            await user_service.toggle_ban(admin.id)


class TestStats:
    """Tests for listing and stats."""

    @pytest.mark.asyncio
    async def test_stats_count_roles(self, unit_env):
        """Stats split users into banned, admin and active."""
        # Arrange
        user_service = await unit_env.get(UserService)
        await make_user(unit_env, role=UserRole.ADMIN)
        await make_user(unit_env, name="Bob Builder")
        carol = await make_user(unit_env, name="Carol Danvers")
        await user_service.toggle_ban(carol.id)

        # Act
        stats = await user_service.get_user_stats()
        users, total = await user_service.list_users(PageRequest(limit=2))

        # Assert
        assert (stats.total, stats.banned, stats.admins, stats.active) == (3, 1, 1, 2)
        assert len(users) == 2
        assert total == 3
