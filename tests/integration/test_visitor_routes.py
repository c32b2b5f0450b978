"""Integration tests for /api/visitors."""

from typing import Any


def _register(api: Any, apartment: str = "101") -> dict[str, Any]:
    response = api.client.post(
        "/api/visitors",
        json={
            "visitor_name": "Carlos Pereira",
            "visitor_document": "123.456.789-0",
            "visit_date": "2024-03-10",
            "visit_time": "18:30",
        },
        headers=api.users[apartment].headers,
    )
    assert response.status_code == 201
    return response.json()["data"]


def test_owner_cannot_approve(api: Any) -> None:
    visitor = _register(api)

    response = api.client.patch(
        f"/api/visitors/{visitor['id']}/approve", headers=api.users["101"].headers
    )

    assert response.status_code == 403


def test_admin_approves(api: Any) -> None:
    visitor = _register(api)

    response = api.client.patch(
        f"/api/visitors/{visitor['id']}/approve", headers=api.users["ADMIN"].headers
    )

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "approved"

    again = api.client.patch(
        f"/api/visitors/{visitor['id']}/reject", headers=api.users["101"].headers
    )
    assert again.status_code == 409


def test_owner_rejects_own_request(api: Any) -> None:
    visitor = _register(api)

    response = api.client.patch(
        f"/api/visitors/{visitor['id']}/reject", headers=api.users["101"].headers
    )
    assert response.json()["data"]["status"] == "rejected"


def test_short_document_is_400(api: Any) -> None:
    response = api.client.post(
        "/api/visitors",
        json={"visitor_name": "X", "visitor_document": "123", "visit_date": "2024-03-10"},
        headers=api.users["101"].headers,
    )
    assert response.status_code == 400


def test_update_and_delete(api: Any) -> None:
    visitor = _register(api)
    url = f"/api/visitors/{visitor['id']}"
    headers = api.users["101"].headers

    updated = api.client.put(url, json={"visit_time": "19:00"}, headers=headers)
    assert updated.json()["data"]["visit_time"] == "19:00:00"

    assert api.client.delete(url, headers=api.users["202"].headers).status_code == 403
    assert api.client.delete(url, headers=headers).status_code == 200
    assert api.client.get("/api/visitors", headers=headers).json()["data"] == []
