"""
API tests for authentication, current user, building listings, approval and images.
Exercises the full request path through the FastAPI app with an in-memory database.
"""

import pytest
from httpx import AsyncClient

from rental_premises.models.user import User
from rental_premises.models.building import Building
from tests.conftest import auth_headers


API = "/api/v1"


def photo(filename: str = "front.jpg", data: bytes = b"\xff\xd8\xff\xe0facade", content_type: str = "image/jpeg"):
    return (filename, data, content_type)


class TestAuthAPI:
    """Registration and login endpoints."""

    @pytest.mark.asyncio
    async def test_register_and_login(self, async_client: AsyncClient):
        response = await async_client.post(
            f"{API}/auth/register",
            json={"username": "newowner", "password": "newpassword123"}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["username"] == "newowner"
        assert body["role"] == "user"
        assert "password" not in body
        assert "hashed_password" not in body

        response = await async_client.post(
            f"{API}/auth/login",
            json={"username": "newowner", "password": "newpassword123"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["access_token"]
        assert body["user"]["username"] == "newowner"

    @pytest.mark.asyncio
    async def test_register_duplicate(self, async_client: AsyncClient, test_owner: User):
        response = await async_client.post(
            f"{API}/auth/register",
            json={"username": "owner", "password": "anotherpassword"}
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CONFLICT"

    @pytest.mark.asyncio
    async def test_register_short_password(self, async_client: AsyncClient):
        response = await async_client.post(
            f"{API}/auth/register",
            json={"username": "newowner", "password": "short"}
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, async_client: AsyncClient, test_owner: User):
        response = await async_client.post(
            f"{API}/auth/login",
            json={"username": "owner", "password": "wrongpassword"}
        )

        assert response.status_code == 401


class TestCurrentUserAPI:
    """Current user resolution over HTTP."""

    @pytest.mark.asyncio
    async def test_anonymous(self, async_client: AsyncClient):
        response = await async_client.get(f"{API}/users/me")

        assert response.status_code == 200
        body = response.json()
        assert body["anonymous"] is True
        assert body["id"] is None
        assert body["username"] is None
        assert body["logs"] == []

    @pytest.mark.asyncio
    async def test_invalid_token_is_anonymous(self, async_client: AsyncClient):
        response = await async_client.get(
            f"{API}/users/me",
            headers={"Authorization": "Bearer not-a-token"}
        )

        assert response.status_code == 200
        assert response.json()["anonymous"] is True

    @pytest.mark.asyncio
    async def test_authenticated_with_audit_log(self, async_client: AsyncClient, test_owner: User):
        headers = auth_headers(test_owner)
        create = await async_client.post(
            f"{API}/buildings",
            data={"name": "Loft", "location": "Moscow", "price": "50000"},
            files={"facade_file": photo()},
            headers=headers
        )
        assert create.status_code == 201

        response = await async_client.get(f"{API}/users/me", headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["anonymous"] is False
        assert body["username"] == "owner"
        assert [entry["message"] for entry in body["logs"]] == ["Создал помещение: Loft"]


class TestBuildingsAPI:
    """Listing submission, lookup, filtering and deletion."""

    @pytest.mark.asyncio
    async def test_create_with_facade_and_fetch_image(self, async_client: AsyncClient, test_owner: User):
        response = await async_client.post(
            f"{API}/buildings",
            data={"name": "Loft", "location": "Moscow", "price": "50000"},
            files={"facade_file": photo(data=b"facade-bytes")},
            headers=auth_headers(test_owner)
        )

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Loft"
        assert body["approved"] is False
        assert body["user_id"] == test_owner.id
        assert len(body["images"]) == 1
        image = body["images"][0]
        assert image["preview_image"] is True
        assert image["name"] == "front.jpg"
        assert body["preview_image_id"] == image["id"]

        image_response = await async_client.get(f"{API}/images/{image['id']}")

        assert image_response.status_code == 200
        assert image_response.content == b"facade-bytes"
        assert image_response.headers["content-type"].startswith("image/jpeg")

    @pytest.mark.asyncio
    async def test_create_with_all_photos(self, async_client: AsyncClient, test_owner: User):
        response = await async_client.post(
            f"{API}/buildings",
            data={"name": "Loft", "location": "Moscow", "price": "50000"},
            files={
                "facade_file": photo("front.jpg"),
                "entrance_file": photo("entrance.png", content_type="image/png"),
                "interior_file": photo("interior.jpg"),
            },
            headers=auth_headers(test_owner)
        )

        assert response.status_code == 201
        images = response.json()["images"]
        assert [image["name"] for image in images] == ["front.jpg", "entrance.png", "interior.jpg"]
        assert [image["preview_image"] for image in images] == [True, False, False]

    @pytest.mark.asyncio
    async def test_create_anonymous(self, async_client: AsyncClient):
        response = await async_client.post(
            f"{API}/buildings",
            data={"name": "Loft", "location": "Moscow", "price": "50000"},
            files={"facade_file": photo()}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_create_negative_price(self, async_client: AsyncClient, test_owner: User):
        response = await async_client.post(
            f"{API}/buildings",
            data={"name": "Loft", "location": "Moscow", "price": "-1"},
            files={"facade_file": photo()},
            headers=auth_headers(test_owner)
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_get_building(self, async_client: AsyncClient, test_building: Building):
        response = await async_client.get(f"{API}/buildings/{test_building.id}")

        assert response.status_code == 200
        assert response.json()["id"] == test_building.id
        assert response.json()["images"] == []

    @pytest.mark.asyncio
    async def test_get_missing_building(self, async_client: AsyncClient):
        response = await async_client.get(f"{API}/buildings/42")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_get_missing_image(self, async_client: AsyncClient):
        response = await async_client.get(f"{API}/images/42")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_list_with_filters(self, async_client: AsyncClient, test_building: Building):
        response = await async_client.get(f"{API}/buildings", params={"name": "Loft", "price": 50000})

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["buildings"][0]["id"] == test_building.id

        response = await async_client.get(f"{API}/buildings", params={"price": 49999})
        assert response.json()["total"] == 0

        response = await async_client.get(f"{API}/buildings", params={"approved": "true"})
        assert response.json()["total"] == 0

    @pytest.mark.asyncio
    async def test_list_ignores_empty_filters(self, async_client: AsyncClient, test_building: Building):
        response = await async_client.get(f"{API}/buildings", params={"name": "", "location": ""})

        assert response.status_code == 200
        assert response.json()["total"] == 1

    @pytest.mark.asyncio
    async def test_delete_anonymous(self, async_client: AsyncClient, test_building: Building):
        response = await async_client.delete(f"{API}/buildings/{test_building.id}")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_delete_by_other_user(
        self,
        async_client: AsyncClient,
        test_building: Building,
        test_other_user: User
    ):
        response = await async_client.delete(
            f"{API}/buildings/{test_building.id}",
            headers=auth_headers(test_other_user)
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_delete_by_owner(self, async_client: AsyncClient, test_building: Building, test_owner: User):
        building_id = test_building.id

        response = await async_client.delete(f"{API}/buildings/{building_id}", headers=auth_headers(test_owner))

        assert response.status_code == 204
        assert (await async_client.get(f"{API}/buildings/{building_id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_missing(self, async_client: AsyncClient, test_owner: User):
        response = await async_client.delete(f"{API}/buildings/99999", headers=auth_headers(test_owner))

        assert response.status_code == 204


class TestApprovalAPI:
    """Admin review endpoints."""

    @pytest.mark.asyncio
    async def test_approve_requires_token(self, async_client: AsyncClient, test_building: Building):
        response = await async_client.post(f"{API}/buildings/{test_building.id}/approve")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_approve_requires_admin(
        self,
        async_client: AsyncClient,
        test_building: Building,
        test_owner: User
    ):
        response = await async_client.post(
            f"{API}/buildings/{test_building.id}/approve",
            headers=auth_headers(test_owner)
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_approve(
        self,
        async_client: AsyncClient,
        test_building: Building,
        test_admin: User,
        log_repository
    ):
        response = await async_client.post(
            f"{API}/buildings/{test_building.id}/approve",
            headers=auth_headers(test_admin)
        )

        assert response.status_code == 200
        assert response.json()["approved"] is True
        assert test_admin.audit_log == [f"Одобрил помещение, id = {test_building.id}"]
        assert await log_repository.count({"user_id": test_admin.id}) == 1

    @pytest.mark.asyncio
    async def test_reject(self, async_client: AsyncClient, test_building: Building, test_admin: User):
        response = await async_client.post(
            f"{API}/buildings/{test_building.id}/reject",
            headers=auth_headers(test_admin)
        )

        assert response.status_code == 200
        assert response.json()["approved"] is False
        assert test_admin.audit_log == [f"Не одобрил помещение, id = {test_building.id}"]

    @pytest.mark.asyncio
    async def test_approve_missing(self, async_client: AsyncClient, test_admin: User, log_repository):
        admin_id = test_admin.id

        response = await async_client.post(f"{API}/buildings/42/approve", headers=auth_headers(test_admin))

        assert response.status_code == 404
        assert "42" in response.json()["error"]["message"]
        assert test_admin.audit_log == []
        assert await log_repository.count({"user_id": admin_id}) == 0


class TestHealthAPI:
    """Service information endpoint."""

    @pytest.mark.asyncio
    async def test_root(self, async_client: AsyncClient):
        response = await async_client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_docs_served_outside_production(self, async_client: AsyncClient):
        response = await async_client.get("/docs")

        assert response.status_code == 200
