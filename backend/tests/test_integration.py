"""
Bookshelf Backend - End-to-End Tests
======================================

What:  Full request flows through the real handler, service and repository.
How:   The app is wired to a BookService over a private in-memory SQLite
       database (see conftest.py).
"""

import pytest


class TestBookLifecycle:
    """Create → read → update → delete over HTTP."""

    @pytest.mark.asyncio
    async def test_create_then_get_round_trip(self, integration_client):
        created = await integration_client.post(
            "/books", json={"title": "A", "author": "B", "published_year": 2001}
        )
        assert created.status_code == 201
        book = created.json()
        assert book["id"] > 0

        fetched = await integration_client.get(f"/books/{book['id']}")

        assert fetched.status_code == 200
        assert fetched.json() == book

    @pytest.mark.asyncio
    async def test_list_contains_created_books(self, integration_client):
        await integration_client.post("/books", json={"title": "A", "author": "B"})
        await integration_client.post("/books", json={"title": "C", "author": "D"})

        response = await integration_client.get("/books")

        assert response.status_code == 200
        assert [b["title"] for b in response.json()] == ["A", "C"]

    @pytest.mark.asyncio
    async def test_get_missing_book(self, integration_client):
        response = await integration_client.get("/books/999")

        assert response.status_code == 404
        assert response.json() == {"error": "Book not found"}

    @pytest.mark.asyncio
    async def test_update_then_get(self, integration_client):
        created = (await integration_client.post("/books", json={"title": "Old"})).json()

        updated = await integration_client.put(
            f"/books/{created['id']}", json={"id": 777, "title": "New", "author": "Z"}
        )

        assert updated.status_code == 200
        assert updated.json()["id"] == created["id"]

        fetched = (await integration_client.get(f"/books/{created['id']}")).json()
        assert fetched["title"] == "New"
        assert fetched["author"] == "Z"

        missing = await integration_client.get("/books/777")
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_then_get(self, integration_client):
        created = (await integration_client.post("/books", json={"title": "A"})).json()

        deleted = await integration_client.delete(f"/books/{created['id']}")
        assert deleted.status_code == 204
        assert deleted.content == b""

        fetched = await integration_client.get(f"/books/{created['id']}")
        assert fetched.status_code == 404
