"""End-to-end tests for the posts API."""

import json

import pytest

from quill.domain.service import BlobStore
from quill.domain.value import Role
from tests.e2e.helpers import auth, create_post, promote, register
from tests.harness import create_client_fixture

# E2E test fixture: app over the mocked container
api = create_client_fixture()


class TestCreatePost:
    """POST /posts"""

    @pytest.mark.asyncio
    async def test_publish_hello_world(self, api):
        # Arrange
        client, _ = api
        alice = await register(client, "Alice")

        # Act
        response = await create_post(
            client,
            alice,
            title="Hello World",
            content="<p>Hi</p>",
            markdown="Hi",
            published=True,
        )

        # Assert
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Post published successfully"
        post = body["data"]
        assert post["slug"] == "hello-world"
        assert post["published"] is True
        assert post["views"] == 0
        assert post["isPremium"] is False
        assert post["author"]["name"] == "Alice"
        assert "createdAt" in post

    @pytest.mark.asyncio
    async def test_duplicate_title_is_rejected(self, api):
        client, _ = api
        alice = await register(client, "Alice")
        await create_post(client, alice, title="Hello World", content="One")

        response = await create_post(client, alice, title="hello world!", content="Two")

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "A post with this title already exists",
        }

    @pytest.mark.asyncio
    async def test_blank_content_is_taken_from_markdown(self, api):
        client, _ = api
        alice = await register(client, "Alice")

        response = await create_post(
            client,
            alice,
            title="Blank Body",
            content="   ",
            markdown="Hi",
            published=True,
        )

        assert response.status_code == 201
        post = response.json()["data"]
        assert post["content"] == "Hi"
        assert post["markdown"] == "Hi"

    @pytest.mark.asyncio
    async def test_missing_fields_are_listed(self, api):
        client, _ = api
        alice = await register(client, "Alice")

        response = await create_post(client, alice, published=True)

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["errors"] == ["title", "content", "markdown"]

    @pytest.mark.asyncio
    async def test_requires_authentication(self, api):
        client, _ = api

        response = await client.post("/posts", json={"title": "x", "content": "y"})

        assert response.status_code == 401
        assert response.json()["message"] == "No token, authorization denied"

    @pytest.mark.asyncio
    async def test_multipart_with_json_encoded_categories_and_cover(self, api):
        # Arrange
        client, container = api
        admin = await register(client, "Root")
        await promote(container, admin, role=Role.ADMIN)
        category = (
            await client.post(
                "/categories", json={"name": "Web Development"}, headers=auth(admin)
            )
        ).json()["data"]

        # Act
        response = await client.post(
            "/posts",
            data={
                "title": "Building Forms",
                "markdown": "# Forms",
                "categories": json.dumps([category["id"], "not-an-id"]),
                "isPremium": "true",
                "published": "false",
            },
            files={"coverImage": ("cover.png", b"\x89PNG\r\n\x1a\n", "image/png")},
            headers=auth(admin),
        )

        # Assert
        assert response.status_code == 201, response.text
        body = response.json()
        assert body["message"] == "Post saved as draft successfully"
        post = body["data"]
        assert post["content"] == "# Forms"
        assert post["isPremium"] is True
        assert [c["slug"] for c in post["categories"]] == ["web-development"]
        assert post["coverImageUrl"] == f"/uploads/{post['coverImage']}"

    @pytest.mark.asyncio
    async def test_multipart_repeated_tag_fields(self, api):
        client, container = api
        admin = await register(client, "Root")
        await promote(container, admin, role=Role.ADMIN)
        tag_ids = [
            (
                await client.post("/tags", json={"name": name}, headers=auth(admin))
            ).json()["data"]["id"]
            for name in ("Python", "Rust")
        ]

        response = await client.post(
            "/posts",
            data={"title": "Two Languages", "content": "Body", "tags": tag_ids},
            headers=auth(admin),
        )

        assert response.status_code == 201, response.text
        assert [t["name"] for t in response.json()["data"]["tags"]] == [
            "Python",
            "Rust",
        ]


class TestReadPost:
    """GET /posts/{slug}"""

    @pytest.mark.asyncio
    async def test_views_increment_for_readers(self, api):
        client, _ = api
        alice = await register(client, "Alice")
        await create_post(
            client, alice, title="Popular", content="Body", published=True
        )

        await client.get("/posts/popular")
        response = await client.get("/posts/popular")

        assert response.status_code == 200
        assert response.json()["data"]["views"] == 2

    @pytest.mark.asyncio
    async def test_author_reads_do_not_count(self, api):
        client, _ = api
        alice = await register(client, "Alice")
        await create_post(
            client, alice, title="Popular", content="Body", published=True
        )

        response = await client.get("/posts/popular", headers=auth(alice))

        assert response.json()["data"]["views"] == 0

    @pytest.mark.asyncio
    async def test_draft_is_invisible_to_others(self, api):
        # Arrange
        client, _ = api
        alice = await register(client, "Alice")
        bob = await register(client, "Bob")
        await create_post(client, alice, title="Work In Progress", content="Body")

        # Act
        anonymous = await client.get("/posts/work-in-progress")
        as_bob = await client.get("/posts/work-in-progress", headers=auth(bob))
        as_alice = await client.get("/posts/work-in-progress", headers=auth(alice))
        listing = await client.get("/posts")

        # Assert
        assert anonymous.status_code == 404
        assert anonymous.json()["success"] is False
        assert as_bob.status_code == 404
        assert as_alice.status_code == 200
        assert listing.json()["total"] == 0

    @pytest.mark.asyncio
    async def test_premium_gate(self, api):
        # Arrange
        client, container = api
        alice = await register(client, "Alice")
        bob = await register(client, "Bob")
        carol = await register(client, "Carol")
        await promote(container, carol, is_premium=True)
        await create_post(
            client,
            alice,
            title="Members Only",
            content="Body",
            published=True,
            isPremium=True,
        )

        # Act
        anonymous = await client.get("/posts/members-only")
        as_bob = await client.get("/posts/members-only", headers=auth(bob))
        as_carol = await client.get("/posts/members-only", headers=auth(carol))

        # Assert
        assert anonymous.status_code == 403
        assert as_bob.status_code == 403
        assert as_bob.json() == {
            "success": False,
            "message": "Premium content requires subscription",
        }
        assert as_carol.status_code == 200

    @pytest.mark.asyncio
    async def test_invalid_token_reads_as_anonymous(self, api):
        client, _ = api
        alice = await register(client, "Alice")
        await create_post(client, alice, title="Open", content="Body", published=True)

        response = await client.get(
            "/posts/open", headers={"Authorization": "Bearer garbage"}
        )

        assert response.status_code == 200


class TestListPosts:
    """GET /posts"""

    @pytest.mark.asyncio
    async def test_paging_envelope(self, api):
        client, _ = api
        alice = await register(client, "Alice")
        for i in range(3):
            await create_post(
                client, alice, title=f"Post {i}", content="Body", published=True
            )

        response = await client.get("/posts", params={"page": 2, "limit": 2})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["total"] == 3
        assert body["totalPages"] == 2
        assert body["currentPage"] == 2
        assert [p["title"] for p in body["data"]] == ["Post 0"]

    @pytest.mark.asyncio
    async def test_admin_listing_includes_drafts(self, api):
        client, container = api
        alice = await register(client, "Alice")
        admin = await register(client, "Root")
        await promote(container, admin, role=Role.ADMIN)
        await create_post(client, alice, title="Draft", content="Body")

        response = await client.get("/posts", headers=auth(admin))

        assert response.json()["total"] == 1

    @pytest.mark.asyncio
    async def test_listing_hides_premium_body_from_non_subscribers(self, api):
        client, _ = api
        alice = await register(client, "Alice")
        await create_post(
            client,
            alice,
            title="Paid",
            content="SECRET",
            published=True,
            isPremium=True,
        )

        single = await client.get("/posts/paid")
        listing = await client.get("/posts")

        assert single.status_code == 403
        [item] = listing.json()["data"]
        assert item["title"] == "Paid"
        assert item["content"] == ""
        assert item["markdown"] == ""

    @pytest.mark.asyncio
    async def test_invalid_page_is_rejected(self, api):
        client, _ = api

        response = await client.get("/posts", params={"page": 0})

        assert response.status_code == 400
        assert response.json()["success"] is False


class TestUpdateAndDelete:
    """PUT and DELETE /posts/{id}"""

    @pytest.mark.asyncio
    async def test_author_updates_title(self, api):
        client, _ = api
        alice = await register(client, "Alice")
        post = (
            await create_post(client, alice, title="Old Name", content="Body")
        ).json()["data"]

        response = await client.put(
            f"/posts/{post['id']}",
            json={"title": "New Name", "published": True},
            headers=auth(alice),
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Post updated successfully"
        assert body["data"]["slug"] == "new-name"
        assert (await client.get("/posts/new-name")).status_code == 200

    @pytest.mark.asyncio
    async def test_non_owner_update_or_delete_is_not_found(self, api):
        client, _ = api
        alice = await register(client, "Alice")
        bob = await register(client, "Bob")
        post = (
            await create_post(
                client, alice, title="Mine", content="Body", published=True
            )
        ).json()["data"]

        update = await client.put(
            f"/posts/{post['id']}", json={"title": "Yours"}, headers=auth(bob)
        )
        delete = await client.delete(f"/posts/{post['id']}", headers=auth(bob))

        assert update.status_code == 404
        assert delete.status_code == 404
        assert (await client.get("/posts/mine")).json()["data"]["title"] == "Mine"

    @pytest.mark.asyncio
    async def test_author_deletes_post(self, api):
        client, _ = api
        alice = await register(client, "Alice")
        post = (
            await create_post(
                client, alice, title="Short Lived", content="Body", published=True
            )
        ).json()["data"]

        response = await client.delete(f"/posts/{post['id']}", headers=auth(alice))

        assert response.status_code == 200
        assert response.json()["message"] == "Post deleted successfully"
        assert (await client.get("/posts/short-lived")).status_code == 404

    @pytest.mark.asyncio
    async def test_malformed_id_is_not_found(self, api):
        client, _ = api
        alice = await register(client, "Alice")

        response = await client.delete("/posts/not-a-uuid", headers=auth(alice))

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_removes_cover_once_committed(self, api):
        # Arrange
        client, container = api
        alice = await register(client, "Alice")
        created = await client.post(
            "/posts",
            data={"title": "With Cover", "content": "Body"},
            files={"coverImage": ("cover.png", b"\x89PNG\r\n\x1a\n", "image/png")},
            headers=auth(alice),
        )
        post = created.json()["data"]
        blob_store = await container.get(BlobStore)
        assert post["coverImage"] in blob_store.objects

        # Act
        response = await client.delete(f"/posts/{post['id']}", headers=auth(alice))

        # Assert
        assert response.status_code == 200
        assert post["coverImage"] not in blob_store.objects

    @pytest.mark.asyncio
    async def test_empty_cover_image_clears_cover(self, api):
        client, container = api
        alice = await register(client, "Alice")
        created = await client.post(
            "/posts",
            data={"title": "Uncovered", "content": "Body", "published": "true"},
            files={"coverImage": ("cover.png", b"\x89PNG\r\n\x1a\n", "image/png")},
            headers=auth(alice),
        )
        post = created.json()["data"]

        response = await client.put(
            f"/posts/{post['id']}", json={"coverImage": ""}, headers=auth(alice)
        )

        assert response.status_code == 200
        assert response.json()["data"]["coverImage"] is None
        assert response.json()["data"]["coverImageUrl"] is None
        blob_store = await container.get(BlobStore)
        assert post["coverImage"] not in blob_store.objects
