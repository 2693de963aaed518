"""End-to-end tests for posts, comments and votes over HTTP."""

from uuid import uuid4

import pytest

from forum.domain.value import UserRole
from tests.conftest import sign_in

NEW_POST = {
    "title": "Write-through or invalidate?",
    "content": "When should a cache be updated in place?",
    "tags": ["Caching"],
}


class TestPostFlow:
    """Create, read, list and delete a post."""

    @pytest.mark.asyncio
    async def test_create_requires_session(self, client):
        response = await client.post("/posts", json=NEW_POST)

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_invalid_session_is_rejected(self, client):
        response = await client.post(
            "/posts", json=NEW_POST, headers={"Cookie": "auth_token=garbage"}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_missing_post_is_404(self, client):
        response = await client.get(f"/posts/{uuid4()}")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_padded_short_search_is_400(self, client):
        response = await client.get("/posts/search", params={"q": " a"})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_create_then_read_and_list(self, client, container):
        # Arrange
        user_id, cookie = await sign_in(container)

        # Act
        created = await client.post("/posts", json=NEW_POST, headers=cookie)
        post_id = created.json()["post_id"]
        fetched = await client.get(f"/posts/{post_id}", headers=cookie)
        listed = await client.get("/posts")
        by_user = await client.get(f"/posts/user/{user_id}")

        # Assert
        assert created.status_code == 201
        assert created.json()["tags"] == ["caching"]
        assert fetched.status_code == 200
        assert fetched.json()["post"]["view_count"] == 1
        assert fetched.json()["user_vote"] == 0
        assert [p["post_id"] for p in listed.json()["posts"]] == [post_id]
        assert listed.json()["pagination"]["total"] == 1
        assert [p["post_id"] for p in by_user.json()["posts"]] == [post_id]

    @pytest.mark.asyncio
    async def test_only_author_can_delete(self, client, container):
        # Arrange
        _, author = await sign_in(container)
        _, other = await sign_in(container, name="Otto Other")
        post_id = (await client.post("/posts", json=NEW_POST, headers=author)).json()[
            "post_id"
        ]

        # Act
        forbidden = await client.delete(f"/posts/{post_id}", headers=other)
        deleted = await client.delete(f"/posts/{post_id}", headers=author)
        gone = await client.get(f"/posts/{post_id}")

        # Assert
        assert forbidden.status_code == 403
        assert deleted.status_code == 200
        assert gone.status_code == 404


class TestCommentsAndVotes:
    """Comment on and vote for a post."""

    @pytest.mark.asyncio
    async def test_comment_and_vote(self, client, container):
        # Arrange
        _, cookie = await sign_in(container)
        post_id = (await client.post("/posts", json=NEW_POST, headers=cookie)).json()[
            "post_id"
        ]

        # Act
        comment = await client.post(
            "/comments",
            json={"post_id": post_id, "content": "Invalidate, mostly."},
            headers=cookie,
        )
        comments = await client.get(f"/comments/post/{post_id}")
        upvote = await client.post(f"/posts/{post_id}/upvote", headers=cookie)
        my_vote = await client.get(f"/posts/{post_id}/vote", headers=cookie)

        # Assert
        assert comment.status_code == 201
        assert [c["content"] for c in comments.json()["comments"]] == [
            "Invalidate, mostly."
        ]
        assert upvote.json()["action"] == "upvoted"
        assert upvote.json()["upvotes"] == 1
        assert my_vote.json()["vote"] == 1

    @pytest.mark.asyncio
    async def test_locked_post_rejects_comments(self, client, container):
        # Arrange
        _, admin = await sign_in(container, name="Root Admin", role=UserRole.ADMIN)
        post_id = (await client.post("/posts", json=NEW_POST, headers=admin)).json()[
            "post_id"
        ]
        await client.patch(f"/admin/posts/{post_id}/lock", headers=admin)

        # Act
        response = await client.post(
            "/comments",
            json={"post_id": post_id, "content": "Anyone?"},
            headers=admin,
        )

        # Assert
        assert response.status_code == 403
