"""Integration tests for owner-scoped resource endpoints."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from tollgate.presentation.cli.app import create_user
from tollgate_identity.domain.user import UserRole

PASSWORD = "SecurePassword123!"


def _login(client: TestClient, prefix: str, email: str) -> dict[str, str]:
    response = client.post(
        f"{prefix}/auth/login",
        json={"email": email, "password": PASSWORD},
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def _register_and_login(client: TestClient, prefix: str, email: str) -> dict[str, str]:
    response = client.post(
        f"{prefix}/auth/register",
        json={"email": email, "password": PASSWORD},
    )
    assert response.status_code == 201, response.text
    return _login(client, prefix, email)


def _create(
    client: TestClient,
    prefix: str,
    headers: dict,
    title: str,
    **extra,
) -> dict:
    response = client.post(
        f"{prefix}/resources",
        json={"title": title, **extra},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def alice(test_client, api_v1_prefix) -> dict[str, str]:
    return _register_and_login(test_client, api_v1_prefix, "alice@example.com")


@pytest.fixture
def bob(test_client, api_v1_prefix) -> dict[str, str]:
    return _register_and_login(test_client, api_v1_prefix, "bob@example.com")


@pytest.fixture
def admin(test_client, api_settings, api_v1_prefix) -> dict[str, str]:
    asyncio.run(
        create_user(api_settings, "admin@example.com", PASSWORD, UserRole.ADMIN),
    )
    return _login(test_client, api_v1_prefix, "admin@example.com")


@pytest.mark.integration
class TestResourceCreate:
    def test_create_sets_owner_to_caller(
        self,
        test_client: TestClient,
        alice,
        api_v1_prefix: str,
    ):
        profile = test_client.get(f"{api_v1_prefix}/auth/profile", headers=alice)

        created = _create(
            test_client,
            api_v1_prefix,
            alice,
            "Report",
            tags=["finance"],
            owner_id=999,
        )

        assert created["owner_id"] == profile.json()["id"]
        assert created["status"] == "DRAFT"
        assert created["tags"] == ["finance"]

    def test_create_requires_authentication(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
    ):
        response = test_client.post(f"{api_v1_prefix}/resources", json={"title": "x"})

        assert response.status_code == 401

    def test_create_rejects_empty_title(
        self,
        test_client: TestClient,
        alice,
        api_v1_prefix: str,
    ):
        response = test_client.post(
            f"{api_v1_prefix}/resources",
            json={"title": ""},
            headers=alice,
        )

        assert response.status_code == 422


@pytest.mark.integration
class TestResourceListing:
    def test_user_pages_only_own_resources(
        self,
        test_client: TestClient,
        alice,
        bob,
        api_v1_prefix: str,
    ):
        for i in range(3):
            _create(test_client, api_v1_prefix, alice, f"alice-{i}")
            _create(test_client, api_v1_prefix, bob, f"bob-{i}")
            _create(test_client, api_v1_prefix, bob, f"bob-extra-{i}")

        first = test_client.get(
            f"{api_v1_prefix}/resources",
            params={"page": 1, "page_size": 2},
            headers=alice,
        ).json()
        second = test_client.get(
            f"{api_v1_prefix}/resources",
            params={"page": 2, "page_size": 2},
            headers=alice,
        ).json()

        assert first["total"] == 3
        assert first["pages"] == 2
        assert [r["title"] for r in first["items"]] == ["alice-2", "alice-1"]
        assert [r["title"] for r in second["items"]] == ["alice-0"]

    def test_admin_lists_everything(
        self,
        test_client: TestClient,
        alice,
        bob,
        admin,
        api_v1_prefix: str,
    ):
        _create(test_client, api_v1_prefix, alice, "a")
        _create(test_client, api_v1_prefix, bob, "b")

        response = test_client.get(f"{api_v1_prefix}/resources", headers=admin)

        assert response.status_code == 200
        assert response.json()["total"] == 2

    def test_status_filter(self, test_client: TestClient, alice, api_v1_prefix: str):
        _create(test_client, api_v1_prefix, alice, "pub", status="PUBLISHED")
        _create(test_client, api_v1_prefix, alice, "draft")

        response = test_client.get(
            f"{api_v1_prefix}/resources",
            params={"status": "PUBLISHED"},
            headers=alice,
        )

        assert [r["title"] for r in response.json()["items"]] == ["pub"]

    def test_page_size_is_bounded(
        self,
        test_client: TestClient,
        alice,
        api_v1_prefix: str,
    ):
        response = test_client.get(
            f"{api_v1_prefix}/resources",
            params={"page_size": 1000},
            headers=alice,
        )

        assert response.status_code == 422


@pytest.mark.integration
class TestResourceOwnership:
    def test_other_user_gets_403(
        self,
        test_client: TestClient,
        alice,
        bob,
        api_v1_prefix: str,
    ):
        resource = _create(test_client, api_v1_prefix, alice, "private")
        url = f"{api_v1_prefix}/resources/{resource['id']}"

        read = test_client.get(url, headers=bob)
        update = test_client.put(url, json={"title": "mine now"}, headers=bob)
        delete = test_client.delete(url, headers=bob)

        assert (read.status_code, update.status_code, delete.status_code) == (
            403,
            403,
            403,
        )
        assert read.json() == {"detail": "Access denied", "code": "ACCESS_DENIED"}
        assert test_client.get(url, headers=alice).json()["title"] == "private"

    def test_owner_updates_and_deletes(
        self,
        test_client: TestClient,
        alice,
        api_v1_prefix: str,
    ):
        resource = _create(test_client, api_v1_prefix, alice, "draft", category="c")
        url = f"{api_v1_prefix}/resources/{resource['id']}"

        updated = test_client.put(
            url,
            json={"status": "PUBLISHED", "category": None},
            headers=alice,
        )
        deleted = test_client.delete(url, headers=alice)
        missing = test_client.get(url, headers=alice)

        assert updated.status_code == 200
        assert updated.json()["status"] == "PUBLISHED"
        assert updated.json()["category"] is None
        assert updated.json()["title"] == "draft"
        assert deleted.status_code == 204
        assert missing.status_code == 404
        assert missing.json()["code"] == "ENTITY_NOT_FOUND"

    def test_admin_can_edit_any_resource(
        self,
        test_client: TestClient,
        alice,
        admin,
        api_v1_prefix: str,
    ):
        resource = _create(test_client, api_v1_prefix, alice, "draft")
        url = f"{api_v1_prefix}/resources/{resource['id']}"

        response = test_client.put(url, json={"status": "ARCHIVED"}, headers=admin)

        assert response.status_code == 200
        assert response.json()["owner_id"] == resource["owner_id"]

    def test_null_title_rejected(
        self,
        test_client: TestClient,
        alice,
        api_v1_prefix: str,
    ):
        resource = _create(test_client, api_v1_prefix, alice, "keep")

        response = test_client.put(
            f"{api_v1_prefix}/resources/{resource['id']}",
            json={"title": None},
            headers=alice,
        )

        assert response.status_code == 422
