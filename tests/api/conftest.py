"""Shared helpers for API tests."""

import json

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def create_via_api(client: TestClient):
    """Factory fixture that creates a product through POST /api/products."""

    def _create(image: tuple[str, bytes, str] | None = None, **fields) -> dict:
        product = {
            "name": "Bamboo Watch",
            "category": "Accessories",
            "price": 65,
            "inventory_status": "INSTOCK",
        }
        product.update(fields)
        files = {"imageFile": image} if image is not None else None

        response = client.post(
            "/api/products",
            data={"product": json.dumps(product)},
            files=files,
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create
