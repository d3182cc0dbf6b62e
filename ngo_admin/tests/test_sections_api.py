"""
Tests for section settings and page snapshot endpoints
"""

import pytest
from httpx import AsyncClient

from ngo_admin.models import Event
from ngo_admin.models.section_setting import DEFAULT_SECTION_SETTINGS


class TestSectionSettingsAPI:

    @pytest.mark.asyncio
    async def test_list_pages(self, client: AsyncClient):
        response = await client.get("/api/v1/sections/")

        assert response.status_code == 200
        assert "events" in response.json()["data"]["pages"]

    @pytest.mark.asyncio
    async def test_defaults_returned_when_nothing_stored(self, client: AsyncClient):
        response = await client.get("/api/v1/sections/events")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["page"] == "events"
        assert data["settings"] == DEFAULT_SECTION_SETTINGS["events"]

    @pytest.mark.asyncio
    async def test_update_merges_over_defaults(self, client: AsyncClient):
        response = await client.put(
            "/api/v1/sections/events",
            json={"settings": {"section_title": "Join Our Events", "max_events_to_show": 8}}
        )

        assert response.status_code == 200
        settings = response.json()["data"]["settings"]
        assert settings["section_title"] == "Join Our Events"
        assert settings["max_events_to_show"] == 8
        assert settings["slideshow_interval"] == 5000

        response = await client.put("/api/v1/sections/events", json={"settings": {"auto_slideshow": False}})
        settings = response.json()["data"]["settings"]
        assert settings["auto_slideshow"] is False
        assert settings["section_title"] == "Join Our Events"

        response = await client.get("/api/v1/sections/events")
        assert response.json()["data"]["settings"]["max_events_to_show"] == 8

    @pytest.mark.asyncio
    async def test_unknown_key_rejected(self, client: AsyncClient):
        response = await client.put("/api/v1/sections/events", json={"settings": {"banner_color": "red"}})

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "banner_color"

    @pytest.mark.asyncio
    async def test_wrong_type_rejected(self, client: AsyncClient):
        response = await client.put("/api/v1/sections/testimonials", json={"settings": {"auto_scroll": "yes"}})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_choice_enforced(self, client: AsyncClient):
        response = await client.put("/api/v1/sections/events", json={"settings": {"max_events_to_show": 5}})
        assert response.status_code == 400

        response = await client.put("/api/v1/sections/video-lectures", json={"settings": {"view_mode": "table"}})
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_unknown_page(self, client: AsyncClient):
        response = await client.get("/api/v1/sections/donations")
        assert response.status_code == 404
        assert response.json()["error_type"] == "SectionNotFoundError"

        response = await client.put("/api/v1/sections/donations", json={"settings": {}})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_reset_restores_defaults(self, client: AsyncClient):
        await client.put("/api/v1/sections/testimonials", json={"settings": {"title": "Voices", "max_visible": 4}})

        response = await client.post("/api/v1/sections/testimonials/reset")
        assert response.status_code == 200
        assert response.json()["data"]["settings"] == DEFAULT_SECTION_SETTINGS["testimonials"]

        response = await client.get("/api/v1/sections/testimonials")
        assert response.json()["data"]["settings"]["title"] == "Donor Stories"


class TestPageSnapshotAPI:

    @pytest.mark.asyncio
    async def test_events_page(self, client: AsyncClient, test_event: Event):
        await client.put("/api/v1/sections/events", json={"settings": {"section_visible": False}})

        response = await client.get("/api/v1/pages/events")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["entity"] == "events"
        assert data["section_settings"]["section_visible"] is False
        assert [item["id"] for item in data["items"]] == [str(test_event.id)]

    @pytest.mark.asyncio
    async def test_newsletter_page_lists_subscribers(self, client: AsyncClient):
        await client.post("/api/v1/subscribers/", json={"email": "reader@hopefoundation.org"})

        data = (await client.get("/api/v1/pages/newsletter")).json()["data"]
        assert data["entity"] == "subscribers"
        assert data["items"][0]["email"] == "reader@hopefoundation.org"

    @pytest.mark.asyncio
    async def test_unknown_page(self, client: AsyncClient):
        response = await client.get("/api/v1/pages/donations")

        assert response.status_code == 404
