"""Tests for the product endpoints."""
import pytest

from agroconnect.storage import EntityKind


def _create(client, headers, payload, **overrides):
    response = client.post("/api/products", json=dict(payload, **overrides), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateProduct:
    """Tests for POST /api/products."""

    def test_create_product(self, client, farmer, product_payload):
        user, headers = farmer

        response = client.post("/api/products", json=product_payload, headers=headers)

        assert response.status_code == 201
        body = response.json()
        assert body["sellerId"] == user["id"]
        assert body["price"] == "45.00"
        assert body["quantity"] == 100
        assert body["imageUrl"] == product_payload["imageUrl"]
        assert body["active"] is True
        assert body["featured"] is False
        assert body["createdAt"]

    def test_requires_authentication(self, client, product_payload):
        response = client.post("/api/products", json=product_payload)
        assert response.status_code == 401

    def test_validation_errors_name_fields(self, client, farmer, product_payload):
        _, headers = farmer

        response = client.post(
            "/api/products", json=dict(product_payload, price="free", category="livestock"), headers=headers
        )

        assert response.status_code == 422
        fields = {e["field"] for e in response.json()["details"]["validation_errors"]}
        assert {"price", "category"} <= fields

    def test_non_object_body_rejected(self, client, farmer):
        _, headers = farmer

        response = client.post("/api/products", json=["tomatoes"], headers=headers)

        assert response.status_code == 422

    def test_snake_case_keys_accepted(self, client, farmer, product_payload):
        _, headers = farmer
        payload = dict(product_payload)
        payload["image_url"] = payload.pop("imageUrl")

        body = _create(client, headers, payload)

        assert body["imageUrl"] == product_payload["imageUrl"]


class TestReadProducts:
    """Tests for public catalog reads."""

    def test_list_filters(self, client, farmer, product_payload):
        _, headers = farmer
        tomato = _create(client, headers, product_payload, name="Tomato", price="10")
        _create(client, headers, product_payload, name="Tractor", category="tools", price="50000",
                description="25HP tractor")

        response = client.get("/api/products", params={"category": "crops", "search": "tom"})

        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [tomato["id"]]
        assert client.get("/api/products", params={"category": "tools", "search": "tom"}).json() == []

    def test_price_range_and_sort(self, client, farmer, product_payload):
        _, headers = farmer
        _create(client, headers, product_payload, name="Tomato", price="10")
        okra = _create(client, headers, product_payload, name="Okra", price="25")
        yam = _create(client, headers, product_payload, name="Yam", price="30")

        response = client.get("/api/products", params={"minPrice": "20", "sortBy": "price-high"})

        assert [p["id"] for p in response.json()] == [yam["id"], okra["id"]]

    def test_unparseable_price_bound_ignored(self, client, farmer, product_payload):
        _, headers = farmer
        _create(client, headers, product_payload)

        response = client.get("/api/products", params={"minPrice": "cheap"})

        assert response.status_code == 200
        assert len(response.json()) == 1

    def test_seller_filter(self, client, farmer, other_farmer, product_payload):
        user, headers = farmer
        _, other_headers = other_farmer
        mine = _create(client, headers, product_payload)
        _create(client, other_headers, product_payload)

        response = client.get("/api/products", params={"sellerId": user["id"]})

        assert [p["id"] for p in response.json()] == [mine["id"]]

    def test_latest_limit(self, client, farmer, product_payload):
        _, headers = farmer
        for i in range(4):
            _create(client, headers, product_payload, name=f"Lot {i}")

        assert len(client.get("/api/products/latest", params={"limit": 2}).json()) == 2
        assert len(client.get("/api/products/latest").json()) == 4

    def test_featured(self, client, store, farmer, product_payload):
        _, headers = farmer
        product = _create(client, headers, product_payload)
        _create(client, headers, product_payload)
        store.update(EntityKind.PRODUCTS, product["id"], {"featured": True})

        response = client.get("/api/products/featured")

        assert [p["id"] for p in response.json()] == [product["id"]]

    def test_product_detail_includes_seller_without_password(self, client, farmer, product_payload):
        user, headers = farmer
        product = _create(client, headers, product_payload)

        response = client.get(f"/api/products/{product['id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == product["id"]
        assert body["seller"]["id"] == user["id"]
        assert "password" not in body["seller"]
        assert "passwordHash" not in body["seller"]

    def test_unknown_product(self, client):
        response = client.get("/api/products/does-not-exist")

        assert response.status_code == 404
        assert response.json()["details"]["resource"] == "Product"


class TestUpdateProduct:
    """Tests for PUT /api/products/{id}."""

    def test_owner_updates(self, client, farmer, product_payload):
        _, headers = farmer
        product = _create(client, headers, product_payload)

        response = client.put(f"/api/products/{product['id']}", json={"price": "50", "quantity": 80},
                              headers=headers)

        assert response.status_code == 200
        assert response.json()["price"] == "50.00"
        assert response.json()["quantity"] == 80
        assert response.json()["name"] == product["name"]

    def test_non_owner_gets_404_and_product_unchanged(self, client, farmer, other_farmer, product_payload):
        """Test that a foreign listing looks exactly like a missing one."""
        _, headers = farmer
        _, other_headers = other_farmer
        product = _create(client, headers, product_payload)

        foreign = client.put(f"/api/products/{product['id']}", json={"price": "1"}, headers=other_headers)
        missing = client.put("/api/products/does-not-exist", json={"price": "1"}, headers=other_headers)

        assert foreign.status_code == missing.status_code == 404
        assert client.get(f"/api/products/{product['id']}").json()["price"] == "45.00"

    def test_requires_authentication(self, client, farmer, product_payload):
        _, headers = farmer
        product = _create(client, headers, product_payload)

        response = client.put(f"/api/products/{product['id']}", json={"price": "1"})

        assert response.status_code == 401


class TestDeleteProduct:
    """Tests for soft delete through the API."""

    def test_deleted_product_hidden_everywhere(self, client, store, farmer, product_payload):
        """Test that a deactivated listing drops out of every public view."""
        _, headers = farmer
        product = _create(client, headers, product_payload)
        store.update(EntityKind.PRODUCTS, product["id"], {"featured": True})

        response = client.delete(f"/api/products/{product['id']}", headers=headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Product deleted successfully"}
        assert client.get("/api/products").json() == []
        assert client.get("/api/products/featured").json() == []
        assert client.get("/api/products/latest").json() == []
        assert client.get(f"/api/products/{product['id']}").status_code == 404

        mine = client.get("/api/products/mine", headers=headers).json()
        assert [(p["id"], p["active"]) for p in mine] == [(product["id"], False)]

    def test_delete_twice(self, client, farmer, product_payload):
        _, headers = farmer
        product = _create(client, headers, product_payload)

        first = client.delete(f"/api/products/{product['id']}", headers=headers)
        second = client.delete(f"/api/products/{product['id']}", headers=headers)

        assert first.status_code == second.status_code == 200

    def test_non_owner_cannot_delete(self, client, farmer, other_farmer, product_payload):
        _, headers = farmer
        _, other_headers = other_farmer
        product = _create(client, headers, product_payload)

        response = client.delete(f"/api/products/{product['id']}", headers=other_headers)

        assert response.status_code == 404
        assert client.get(f"/api/products/{product['id']}").status_code == 200

    @pytest.mark.parametrize("token, status", [(None, 401), ("garbage", 403)])
    def test_authentication_failures(self, client, farmer, product_payload, token, status):
        _, headers = farmer
        product = _create(client, headers, product_payload)
        bad_headers = {"Authorization": f"Bearer {token}"} if token else {}

        response = client.delete(f"/api/products/{product['id']}", headers=bad_headers)

        assert response.status_code == status
