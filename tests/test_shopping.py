import pytest


@pytest.fixture
def planned_oats(authed_client):
    """Plan Overnight Oats (4 servings) on an otherwise empty schedule."""
    from app.main import app
    app.state.schedule.clear()
    recipes = authed_client.get("/recipes").json()["recipes"]
    oats_id = next(r["id"] for r in recipes if r["name"] == "Overnight Oats")
    authed_client.post("/meal-plan/add", data={
        "recipe_id": str(oats_id), "date": "2030-04-01", "meal_type": "breakfast", "servings": "4",
    })
    yield
    app.state.schedule.clear()
    authed_client.post("/shopping/generate")


def _lines(data):
    return [line for lines in data["categories"].values() for line in lines]


def test_shopping_page(authed_client):
    resp = authed_client.get("/shopping")
    assert resp.status_code == 200
    assert "categories" in resp.json()


def test_shopping_generate_scales_ingredients(authed_client, planned_oats):
    resp = authed_client.post("/shopping/generate")
    assert resp.status_code == 200
    data = resp.json()
    oats = next(line for line in _lines(data) if line["name"] == "rolled oats")
    assert oats["amount"] == 200
    assert data["total_price"] == pytest.approx(1.10 + 0.20)
    assert data["all_selected"] is False


def test_shopping_custom_items(authed_client):
    resp = authed_client.post("/shopping/items", data={
        "name": "Kitchen roll", "amount": "2", "unit": "rolls", "price": "£2.00",
    })
    assert resp.status_code == 200
    item = resp.json()
    assert item["category"] == "other"

    listing = authed_client.get("/shopping").json()
    custom = [line for line in _lines(listing) if line["custom"]]
    assert [line["name"] for line in custom] == ["Kitchen roll"]

    resp = authed_client.delete(f"/shopping/items/{item['id']}")
    assert resp.status_code == 200
    listing = authed_client.get("/shopping").json()
    assert not any(line["custom"] for line in _lines(listing))


def test_shopping_custom_item_validation(authed_client):
    assert authed_client.post("/shopping/items", data={"name": "  "}).status_code == 400
    resp = authed_client.post("/shopping/items", data={"name": "soap", "category": "household"})
    assert resp.status_code == 400


def test_shopping_toggle_select_and_cart(authed_client, planned_oats):
    authed_client.post("/shopping/generate")
    resp = authed_client.post("/shopping/toggle", data={"name": "Rolled Oats"})
    assert resp.status_code == 200
    assert resp.json()["checked"] is True

    resp = authed_client.post("/shopping/select", data={"name": "rolled oats"})
    assert resp.json()["selected"] is True
    cart = authed_client.get("/shopping/cart").json()
    assert [c["name"] for c in cart] == ["rolled oats"]
    assert cart[0]["product_name"] == "Jumbo Oats 1kg"

    resp = authed_client.post("/shopping/select-all")
    assert resp.json() == {"all_selected": True}
    assert len(authed_client.get("/shopping/cart").json()) == 4


def test_shopping_toggle_errors(authed_client):
    assert authed_client.post("/shopping/toggle").status_code == 400
    assert authed_client.post("/shopping/toggle", data={"name": "caviar"}).status_code == 404
    assert authed_client.post("/shopping/select", data={"item_id": "missing"}).status_code == 404


def test_shopping_export(authed_client, planned_oats):
    authed_client.post("/shopping/generate")
    resp = authed_client.get("/shopping/export")
    assert resp.status_code == 200
    assert "text/plain" in resp.headers["content-type"]
    assert "shopping_list.txt" in resp.headers["content-disposition"]
    assert "200 g rolled oats (Jumbo Oats 1kg) - £1.10" in resp.text.splitlines()
