"""
Integration Tests for the destinations API.
"""

import pytest

API = "/api/v1/destinations"


class TestPublicCatalogue:
    async def test_list_is_paginated(self, client, api, destination):
        response = await client.get(API)

        items = api.assert_paginated(response, total=1)
        assert items[0]["slug"] == "gulmarg"
        assert response.json()["pagination"]["has_more"] is False

    async def test_filter_by_region(self, client, api, destination):
        response = await client.get(API, params={"region": "Anantnag"})

        assert api.assert_paginated(response, total=0) == []

    async def test_get_by_slug(self, client, api, destination):
        response = await client.get(f"{API}/gulmarg")

        data = api.assert_success(response)
        assert data["name"] == "Gulmarg"

    async def test_unknown_slug(self, client, api):
        response = await client.get(f"{API}/atlantis")

        api.assert_error(response, 404, "RES_NOT_FOUND")

    async def test_limit_is_bounded(self, client, api):
        response = await client.get(API, params={"limit": 500})

        api.assert_validation_error(response)


class TestAdminManagement:
    async def test_create_derives_slug(self, client, api, admin_headers):
        response = await client.post(
            API,
            json={"name": "Doodhpathri Valley", "region": "Budgam"},
            headers=admin_headers,
        )

        data = api.assert_success(response, 201)
        assert data["slug"] == "doodhpathri-valley"
        assert data["is_active"] is True

    async def test_customer_cannot_create(self, client, api, customer_headers):
        response = await client.post(API, json={"name": "Yusmarg", "region": "Budgam"}, headers=customer_headers)

        api.assert_error(response, 403, "AUTHZ_FORBIDDEN")

    async def test_anonymous_cannot_create(self, client, api):
        response = await client.post(API, json={"name": "Yusmarg", "region": "Budgam"})

        api.assert_error(response, 401)

    async def test_duplicate_name(self, client, api, admin_headers, destination):
        response = await client.post(API, json={"name": "Gulmarg", "region": "Baramulla"}, headers=admin_headers)

        api.assert_error(response, 409)

    async def test_rename_regenerates_slug(self, client, api, admin_headers, destination):
        response = await client.patch(
            f"{API}/{destination.id}",
            json={"name": "Gulmarg Meadows"},
            headers=admin_headers,
        )

        data = api.assert_success(response)
        assert data["slug"] == "gulmarg-meadows"

    async def test_cannot_deactivate_with_active_tours(self, client, api, admin_headers, destination, tour):
        response = await client.delete(f"{API}/{destination.id}", headers=admin_headers)

        error = api.assert_error(response, 409)
        assert error["details"] == {"active_tours": 1}

    async def test_deactivate_hides_destination(self, client, api, admin_headers, destination):
        response = await client.delete(f"{API}/{destination.id}", headers=admin_headers)
        assert api.assert_success(response)["is_active"] is False

        response = await client.get(f"{API}/gulmarg")
        api.assert_error(response, 404)

    @pytest.mark.parametrize("name", ["!!", "گلمرگ"])
    async def test_create_rejects_name_without_slug(self, client, api, admin_headers, name):
        response = await client.post(API, json={"name": name, "region": "Srinagar"}, headers=admin_headers)

        error = api.assert_validation_error(response)
        assert error["details"]["validation_errors"][0]["field"] == "body.name"

    async def test_rename_rejects_name_without_slug(self, client, api, admin_headers, destination):
        response = await client.patch(f"{API}/{destination.id}", json={"name": "!!!"}, headers=admin_headers)

        api.assert_validation_error(response)

    @pytest.mark.parametrize("field", ["name", "region"])
    async def test_update_rejects_null_required_field(self, client, api, admin_headers, destination, field):
        response = await client.patch(f"{API}/{destination.id}", json={field: None}, headers=admin_headers)

        api.assert_validation_error(response)

    async def test_update_clears_optional_fields(self, client, api, admin_headers, destination):
        response = await client.patch(
            f"{API}/{destination.id}",
            json={"description": None, "image_url": None},
            headers=admin_headers,
        )

        data = api.assert_success(response)
        assert data["description"] is None
        assert data["image_url"] is None
        assert data["name"] == "Gulmarg"
