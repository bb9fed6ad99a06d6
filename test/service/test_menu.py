"""
Tests for categories, dishes and the public menu.
"""

import pytest


@pytest.fixture
def restaurant_factory(owner_client):
    async def _create(client=owner_client, name="The Italian Bistro"):
        response = await client.post("/api/restaurants", json={"name": name, "location": "New York, NY, USA"})
        assert response.status_code == 200, response.text
        return response.json()["id"]

    return _create


async def create_category(client, restaurant_id, name):
    response = await client.post(f"/api/restaurants/{restaurant_id}/categories", json={"name": name})
    assert response.status_code == 200, response.text
    return response.json()["id"]


async def create_dish(client, restaurant_id, **fields):
    payload = {"name": "Margherita Pizza", "price": "12.99", "spice_level": 0, **fields}
    return await client.post(f"/api/restaurants/{restaurant_id}/dishes", json=payload)


class TestCategories:

    @pytest.mark.asyncio
    async def test_listed_by_name(self, owner_client, restaurant_factory):
        restaurant_id = await restaurant_factory()
        for name in ("Main Course", "Appetizers", "Desserts"):
            await create_category(owner_client, restaurant_id, name)

        listed = (await owner_client.get(f"/api/restaurants/{restaurant_id}/categories")).json()

        assert [c["name"] for c in listed] == ["Appetizers", "Desserts", "Main Course"]
        assert all(c["restaurant_id"] == restaurant_id for c in listed)

    @pytest.mark.asyncio
    async def test_rename_and_delete(self, owner_client, restaurant_factory):
        restaurant_id = await restaurant_factory()
        category_id = await create_category(owner_client, restaurant_id, "Starters")

        renamed = await owner_client.patch(f"/api/categories/{category_id}", json={"name": "Appetizers"})
        assert renamed.json()["name"] == "Appetizers"

        assert (await owner_client.delete(f"/api/categories/{category_id}")).json() == {"success": True}
        assert (await owner_client.get(f"/api/restaurants/{restaurant_id}/categories")).json() == []

    @pytest.mark.asyncio
    async def test_other_owner_cannot_touch(self, owner_client, other_client, restaurant_factory):
        restaurant_id = await restaurant_factory()
        category_id = await create_category(owner_client, restaurant_id, "Appetizers")

        assert (await other_client.get(f"/api/restaurants/{restaurant_id}/categories")).status_code == 404
        assert (await other_client.post(f"/api/restaurants/{restaurant_id}/categories", json={"name": "X"})).status_code == 404
        assert (await other_client.patch(f"/api/categories/{category_id}", json={"name": "X"})).status_code == 404
        assert (await other_client.delete(f"/api/categories/{category_id}")).status_code == 404


class TestDishes:

    @pytest.mark.asyncio
    async def test_create_with_categories(self, owner_client, restaurant_factory):
        restaurant_id = await restaurant_factory()
        mains = await create_category(owner_client, restaurant_id, "Main Course")
        veg = await create_category(owner_client, restaurant_id, "Vegetarian")

        response = await create_dish(
            owner_client,
            restaurant_id,
            image="https://images.example.com/pizza.jpg",
            description="Fresh tomatoes, mozzarella, basil",
            category_ids=[mains, veg, mains],
        )

        assert response.status_code == 200, response.text
        dish = response.json()
        assert dish["price"] == "12.99"
        assert dish["image"] == "https://images.example.com/pizza.jpg"
        assert sorted(c["id"] for c in dish["categories"]) == sorted([mains, veg])

    @pytest.mark.asyncio
    async def test_category_from_another_restaurant(self, owner_client, restaurant_factory):
        first = await restaurant_factory(name="First")
        second = await restaurant_factory(name="Second")
        foreign = await create_category(owner_client, second, "Desserts")

        response = await create_dish(owner_client, first, category_ids=[foreign])

        assert response.status_code == 400
        assert response.json()["error_code"] == "bad_request"
        assert response.json()["message"] == "Some categories do not belong to this restaurant."
        assert (await owner_client.get(f"/api/restaurants/{first}/dishes")).json() == []

    @pytest.mark.asyncio
    async def test_spice_level_bounds(self, owner_client, restaurant_factory):
        restaurant_id = await restaurant_factory()
        assert (await create_dish(owner_client, restaurant_id, spice_level=4)).status_code == 422
        assert (await create_dish(owner_client, restaurant_id, spice_level=-1)).status_code == 422

    @pytest.mark.asyncio
    async def test_invalid_image_url(self, owner_client, restaurant_factory):
        restaurant_id = await restaurant_factory()
        assert (await create_dish(owner_client, restaurant_id, image="not a url")).status_code == 422

    @pytest.mark.asyncio
    async def test_update_replaces_categories(self, owner_client, restaurant_factory):
        restaurant_id = await restaurant_factory()
        mains = await create_category(owner_client, restaurant_id, "Main Course")
        veg = await create_category(owner_client, restaurant_id, "Vegetarian")
        dish = (await create_dish(owner_client, restaurant_id, category_ids=[mains])).json()

        response = await owner_client.patch(f"/api/dishes/{dish['id']}", json={"category_ids": [veg]})

        assert response.status_code == 200
        assert [c["id"] for c in response.json()["categories"]] == [veg]
        assert response.json()["name"] == "Margherita Pizza"

    @pytest.mark.asyncio
    async def test_update_without_category_ids_keeps_links(self, owner_client, restaurant_factory):
        restaurant_id = await restaurant_factory()
        mains = await create_category(owner_client, restaurant_id, "Main Course")
        dish = (await create_dish(owner_client, restaurant_id, category_ids=[mains])).json()

        response = await owner_client.patch(f"/api/dishes/{dish['id']}", json={"price": "14.50"})

        assert response.json()["price"] == "14.50"
        assert [c["id"] for c in response.json()["categories"]] == [mains]

    @pytest.mark.asyncio
    async def test_update_null_clears_optional_fields(self, owner_client, restaurant_factory):
        restaurant_id = await restaurant_factory()
        dish = (await create_dish(owner_client, restaurant_id, description="Classic")).json()

        response = await owner_client.patch(f"/api/dishes/{dish['id']}", json={"description": None})

        assert response.json()["description"] is None

    @pytest.mark.asyncio
    async def test_update_empty_category_ids_clears_links(self, owner_client, restaurant_factory):
        restaurant_id = await restaurant_factory()
        mains = await create_category(owner_client, restaurant_id, "Main Course")
        dish = (await create_dish(owner_client, restaurant_id, category_ids=[mains])).json()

        response = await owner_client.patch(f"/api/dishes/{dish['id']}", json={"category_ids": []})

        assert response.json()["categories"] == []

    @pytest.mark.asyncio
    async def test_delete_and_listing(self, owner_client, restaurant_factory):
        restaurant_id = await restaurant_factory()
        dish = (await create_dish(owner_client, restaurant_id)).json()
        assert len((await owner_client.get(f"/api/restaurants/{restaurant_id}/dishes")).json()) == 1

        assert (await owner_client.delete(f"/api/dishes/{dish['id']}")).json() == {"success": True}
        assert (await owner_client.get(f"/api/restaurants/{restaurant_id}/dishes")).json() == []

    @pytest.mark.asyncio
    async def test_other_owner_cannot_touch(self, owner_client, other_client, restaurant_factory):
        restaurant_id = await restaurant_factory()
        dish = (await create_dish(owner_client, restaurant_id)).json()

        assert (await other_client.get(f"/api/restaurants/{restaurant_id}/dishes")).status_code == 404
        assert (await create_dish(other_client, restaurant_id)).status_code == 404
        assert (await other_client.patch(f"/api/dishes/{dish['id']}", json={"name": "X"})).status_code == 404
        assert (await other_client.delete(f"/api/dishes/{dish['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_deleting_restaurant_removes_menu(self, app, owner_client, restaurant_factory):
        from sqlalchemy import func, select
        from database.models import Category, Dish, DishCategory

        restaurant_id = await restaurant_factory()
        mains = await create_category(owner_client, restaurant_id, "Main Course")
        await create_dish(owner_client, restaurant_id, category_ids=[mains])

        await owner_client.delete(f"/api/restaurants/{restaurant_id}")

        async with app.state.db_session_factory() as db:
            for model in (Category, Dish, DishCategory):
                assert (await db.execute(select(func.count()).select_from(model))).scalar_one() == 0


class TestPublicMenu:

    @pytest.mark.asyncio
    async def test_no_session_needed(self, app, owner_client, restaurant_factory):
        from httpx import AsyncClient, ASGITransport

        restaurant_id = await restaurant_factory()
        mains = await create_category(owner_client, restaurant_id, "Main Course")
        veg = await create_category(owner_client, restaurant_id, "Vegetarian")
        await create_category(owner_client, restaurant_id, "Desserts")
        dish = (await create_dish(owner_client, restaurant_id, category_ids=[mains, veg])).json()

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as diner:
            response = await diner.get(f"/api/public/menu/{restaurant_id}")

        assert response.status_code == 200
        menu = response.json()
        assert menu["restaurant"] == {"id": restaurant_id, "name": "The Italian Bistro", "location": "New York, NY, USA"}
        assert [c["name"] for c in menu["categories"]] == ["Desserts", "Main Course", "Vegetarian"]

        desserts, main_course, vegetarian = menu["categories"]
        assert desserts["dishes"] == []
        assert [d["id"] for d in main_course["dishes"]] == [dish["id"]]
        assert [d["id"] for d in vegetarian["dishes"]] == [dish["id"]]
        assert sorted(c["name"] for c in main_course["dishes"][0]["categories"]) == ["Main Course", "Vegetarian"]

    @pytest.mark.asyncio
    async def test_uncategorized_dishes_are_not_listed(self, client, owner_client, restaurant_factory):
        restaurant_id = await restaurant_factory()
        await create_dish(owner_client, restaurant_id)

        menu = (await client.get(f"/api/public/menu/{restaurant_id}")).json()

        assert menu["categories"] == []

    @pytest.mark.asyncio
    async def test_unknown_restaurant(self, client):
        response = await client.get("/api/public/menu/does-not-exist")

        assert response.status_code == 404
        assert response.json()["message"] == "Restaurant not found."
