"""Integration tests for /api/notices."""

from typing import Any


def test_admin_posts_resident_reads(api: Any) -> None:
    created = api.client.post(
        "/api/notices",
        json={
            "title": "Manutenção do elevador",
            "content": "Elevador social parado das 9h às 12h",
            "type": "maintenance",
            "priority": "high",
        },
        headers=api.users["ADMIN"].headers,
    )
    assert created.status_code == 201

    listing = api.client.get("/api/notices", headers=api.users["101"].headers).json()
    assert listing["success"] is True
    assert [n["title"] for n in listing["data"]] == ["Manutenção do elevador"]


def test_expired_notice_not_listed(api: Any) -> None:
    api.client.post(
        "/api/notices",
        json={"title": "Old", "content": "x", "type": "general", "expires_at": "2000-01-01"},
        headers=api.users["ADMIN"].headers,
    )

    listing = api.client.get("/api/notices", headers=api.users["101"].headers).json()
    assert listing["data"] == []


def test_doorman_cannot_post(api: Any) -> None:
    response = api.client.post(
        "/api/notices",
        json={"title": "T", "content": "C", "type": "general"},
        headers=api.users["PORT"].headers,
    )
    assert response.status_code == 403


def test_delete_missing_is_404(api: Any) -> None:
    response = api.client.delete(
        "/api/notices/00000000-0000-0000-0000-000000000000", headers=api.users["ADMIN"].headers
    )
    assert response.status_code == 404
