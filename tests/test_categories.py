import pytest

from app.db.models import UserRole


@pytest.mark.asyncio
async def test_admin_creates_category_with_slug_and_sort_order(client, create_user, login, category):
    admin = await create_user(role=UserRole.ADMIN.value)
    headers = await login(admin)

    res = await client.post("/api/v1/categories/", json={"title": "Crested Geckos"}, headers=headers)

    assert res.status_code == 201, res.text
    body = res.json()
    assert body["slug"] == "crested-geckos"
    assert body["sort_order"] == category.sort_order + 1


@pytest.mark.asyncio
async def test_duplicate_slug_is_rejected(client, create_user, login, category):
    admin = await create_user(role=UserRole.ADMIN.value)
    headers = await login(admin)

    res = await client.post("/api/v1/categories/", json={"title": "Snakes"}, headers=headers)

    assert res.status_code == 422
    assert "slug" in res.json()["errors"]


@pytest.mark.asyncio
async def test_consumer_cannot_create_category(client, create_user, login):
    user = await create_user()
    headers = await login(user)

    res = await client.post("/api/v1/categories/", json={"title": "Lizards"}, headers=headers)

    assert res.status_code == 403


@pytest.mark.asyncio
async def test_title_change_regenerates_slug(client, create_user, login, category):
    admin = await create_user(role=UserRole.ADMIN.value)
    headers = await login(admin)

    res = await client.patch(f"/api/v1/categories/{category.id}", json={"title": "Pythons"}, headers=headers)
    assert res.status_code == 200
    assert res.json()["slug"] == "pythons"

    res = await client.patch(
        f"/api/v1/categories/{category.id}",
        json={"title": "Boas", "slug": "boas-and-pythons"},
        headers=headers,
    )
    assert res.json()["slug"] == "boas-and-pythons"


@pytest.mark.asyncio
async def test_lists_only_active_categories_in_order(client, create_user, login):
    admin = await create_user(role=UserRole.ADMIN.value)
    headers = await login(admin)
    await client.post("/api/v1/categories/", json={"title": "Frogs", "sort_order": 5}, headers=headers)
    await client.post("/api/v1/categories/", json={"title": "Turtles", "sort_order": 2}, headers=headers)
    await client.post("/api/v1/categories/", json={"title": "Hidden", "is_active": False}, headers=headers)

    res = await client.get("/api/v1/categories/")

    assert [c["title"] for c in res.json()] == ["Turtles", "Frogs"]


@pytest.mark.asyncio
async def test_species_for_category(client, create_user, login, category):
    admin = await create_user(role=UserRole.ADMIN.value)
    headers = await login(admin)

    res = await client.post(
        "/api/v1/species/", json={"category_id": str(category.id), "title": "Ball Python"}, headers=headers
    )
    assert res.status_code == 201

    res = await client.get(f"/api/v1/categories/{category.slug}/species")
    assert [s["title"] for s in res.json()] == ["Ball Python"]


@pytest.mark.asyncio
async def test_unknown_category_is_404(client):
    res = await client.get("/api/v1/categories/nope")
    assert res.status_code == 404
    assert res.json()["message"] == "Category not found"
