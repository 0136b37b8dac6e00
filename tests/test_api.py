"""Tests for the pantry and recipe HTTP endpoints."""

from dataclasses import replace
from datetime import UTC, datetime, timedelta
from uuid import uuid4

from fastapi.testclient import TestClient

from nutrition_pantry.api.app import create_app
from nutrition_pantry.domain.units import UnitKind
from tests.conftest import InMemoryPantryRepository, make_ingredient


def _stock_chicken_bowl(repository: InMemoryPantryRepository, user_id, chicken=150):
    repository.stock(user_id, make_ingredient("Chicken breast", chicken, protein=31))
    repository.stock(
        user_id, make_ingredient("Brown rice", 960, unit_kind=UnitKind.VOLUME)
    )
    repository.stock(user_id, make_ingredient("Broccoli", 400))
    repository.stock(
        user_id, make_ingredient("Olive oil", 100, unit_kind=UnitKind.VOLUME)
    )


def test_health(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_add_and_list_pantry(container) -> None:
    client = TestClient(create_app(container))
    user_id = uuid4()

    created = client.post(
        f"/users/{user_id}/pantry",
        json={
            "name": "Greek yogurt",
            "amount": 1.2,
            "unit": "kg",
            "price_per_100": 0.5,
            "nutrients": {"carbs": 3.6, "fats": 0.4, "protein": 10.2},
            "package_size_base": 500,
            "expiry_date": "2026-04-01",
        },
    )
    listed = client.get(f"/users/{user_id}/pantry")

    assert created.status_code == 201
    body = created.json()
    assert body["created"] is True
    assert body["packages"] == 3
    assert body["added_amount"] == 1500
    assert listed.status_code == 200
    ingredient = listed.json()["ingredients"][0]
    assert ingredient["name"] == "Greek yogurt"
    assert ingredient["display_amount"] == "1.50 kg"
    assert ingredient["expiry_date"] == "2026-04-01"


def test_add_rejects_conflicting_unit_kind(container) -> None:
    client = TestClient(create_app(container))
    user_id = uuid4()
    payload = {"name": "Milk", "amount": 1, "unit": "l"}

    client.post(f"/users/{user_id}/pantry", json=payload)
    response = client.post(
        f"/users/{user_id}/pantry", json={**payload, "amount": 200, "unit": "g"}
    )

    assert response.status_code == 422


def test_add_rejects_unknown_unit(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        f"/users/{uuid4()}/pantry",
        json={"name": "Flour", "amount": 1, "unit": "bushel"},
    )

    assert response.status_code == 422


def test_inventory_mutations(container, pantry_repository) -> None:
    client = TestClient(create_app(container))
    user_id = uuid4()
    oil = pantry_repository.stock(
        user_id, make_ingredient("Olive oil", 300, unit_kind=UnitKind.VOLUME)
    )

    deducted = client.post(
        f"/users/{user_id}/pantry/{oil.id}/deduct", json={"amount": 500}
    )
    restocked = client.post(
        f"/users/{user_id}/pantry/{oil.id}/restock",
        json={"amount": 250, "note": "Market"},
    )
    unknown = client.post(
        f"/users/{user_id}/pantry/{uuid4()}/waste", json={"amount": 1}
    )
    invalid = client.post(
        f"/users/{user_id}/pantry/{oil.id}/steal", json={"amount": 1}
    )

    assert deducted.status_code == 200
    assert deducted.json()["std_remaining"] == 0
    assert restocked.json()["std_remaining"] == 250
    assert restocked.json()["history"][-1]["note"] == "Market"
    assert unknown.status_code == 404
    assert invalid.status_code == 422


def test_remove_and_reset(container, pantry_repository) -> None:
    client = TestClient(create_app(container))
    user_id = uuid4()
    oil = pantry_repository.stock(user_id, make_ingredient("Olive oil", 300))
    pantry_repository.stock(user_id, make_ingredient("Honey", 400))

    removed = client.delete(f"/users/{user_id}/pantry/{oil.id}")
    missing = client.delete(f"/users/{user_id}/pantry/{oil.id}")
    reset = client.post(f"/users/{user_id}/pantry/reset")

    assert removed.status_code == 204
    assert missing.status_code == 404
    assert reset.json() == {"reset": 1}


def test_expiring_endpoint(container, pantry_repository) -> None:
    client = TestClient(create_app(container))
    user_id = uuid4()
    soon = datetime.now(tz=UTC).date() + timedelta(days=3)
    pantry_repository.stock(
        user_id, replace(make_ingredient("Spinach", 150), expiry_date=soon)
    )

    response = client.get(f"/users/{user_id}/pantry/expiring")

    assert response.status_code == 200
    assert [item["name"] for item in response.json()["expiring"]] == ["Spinach"]
    assert response.json()["expired"] == []


def test_recipe_listing_filters(container) -> None:
    client = TestClient(create_app(container))

    response = client.get(
        f"/users/{uuid4()}/recipes", params={"diets": "Vegan, Dairy Free"}
    )

    assert response.status_code == 200
    body = response.json()
    assert {recipe["id"] for recipe in body["recipes"]} == {
        "tofu-stir-fry",
        "vegan-chickpea-bowl",
    }
    assert body["cuisines"] == ["Chinese", "Greek"]


def test_feasibility_endpoint(container, pantry_repository) -> None:
    client = TestClient(create_app(container))
    user_id = uuid4()
    _stock_chicken_bowl(pantry_repository, user_id)

    one = client.get(
        f"/users/{user_id}/recipes/grilled-chicken-bowl/feasibility",
        params={"pax": 1},
    )
    two = client.get(f"/users/{user_id}/recipes/grilled-chicken-bowl/feasibility")

    assert one.json() == {"can_make": True, "max_pax": 1, "limiting": None}
    assert two.json() == {
        "can_make": False,
        "max_pax": None,
        "limiting": {"ingredient": "Chicken breast", "needed": 200, "available": 150},
    }


def test_unknown_recipe_returns_404(container) -> None:
    client = TestClient(create_app(container))

    response = client.get(f"/users/{uuid4()}/recipes/nope/feasibility")

    assert response.status_code == 404


def test_nutrition_endpoint(container, pantry_repository) -> None:
    client = TestClient(create_app(container))
    user_id = uuid4()
    _stock_chicken_bowl(pantry_repository, user_id, chicken=400)

    ok = client.get(
        f"/users/{user_id}/recipes/grilled-chicken-bowl/nutrition", params={"pax": 2}
    )
    short = client.get(
        f"/users/{user_id}/recipes/grilled-chicken-bowl/nutrition", params={"pax": 6}
    )

    assert ok.status_code == 200
    assert ok.json()["totals"]["protein"] == 62
    assert ok.json()["per_person"]["protein"] == 31
    assert short.status_code == 409


def test_cook_endpoint(container, pantry_repository) -> None:
    client = TestClient(create_app(container))
    user_id = uuid4()
    _stock_chicken_bowl(pantry_repository, user_id, chicken=400)

    cooked = client.post(
        f"/users/{user_id}/recipes/grilled-chicken-bowl/cook",
        json={"pax": 2, "days": 2},
    )
    again = client.post(
        f"/users/{user_id}/recipes/grilled-chicken-bowl/cook", json={"pax": 2}
    )
    pantry = client.get(f"/users/{user_id}/pantry").json()["ingredients"]

    assert cooked.status_code == 200
    assert again.status_code == 409
    chicken = next(item for item in pantry if item["name"] == "Chicken breast")
    assert chicken["std_amount"] == 0


def test_food_lookup_endpoints(container, fdc_client) -> None:
    client = TestClient(create_app(container))

    search = client.get("/foods/search", params={"q": "chicken"})
    details = client.get("/foods/171477")

    assert search.status_code == 200
    assert search.json()["foods"][0]["fdc_id"] == 171477
    assert details.json()["nutrients"]["protein"] == 22.5
    assert fdc_client.food_calls == 1
