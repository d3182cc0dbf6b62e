"""
Tests for event registrations and their CSV export
"""

import csv
import io
from datetime import date

import pytest
from httpx import AsyncClient

from ngo_admin.client import AdminApiClient, EntityListPage
from ngo_admin.core.exceptions import RecordValidationError
from ngo_admin.models import Event
from ngo_admin.services.csv_export import (
    REGISTRATION_EXPORT_COLUMNS,
    date_only,
    export_filename,
    records_to_csv,
)

BASE = "/api/v1/event-registrations"


def parse_csv(text: str) -> list:
    return list(csv.DictReader(io.StringIO(text)))


@pytest.fixture
async def registrations(client: AsyncClient, test_event: Event) -> list:
    payloads = [
        {
            "event_id": str(test_event.id), "event_title": test_event.title, "name": "Asha Rao",
            "email": "asha@hopefoundation.org", "participants": 2, "status": "confirmed",
            "payment_status": "paid", "amount": 50, "dietary_restrictions": "Vegetarian",
        },
        {
            "event_id": str(test_event.id), "event_title": test_event.title, "name": "Kabir Das",
            "email": "kabir@hopefoundation.org", "phone": "+91 98765 43210",
        },
        {
            "event_title": "Beach Cleanup", "name": "Meera Nair",
            "email": "meera@hopefoundation.org", "participants": 4, "status": "cancelled",
        },
    ]
    records = []
    for payload in payloads:
        response = await client.post(f"{BASE}/", json=payload)
        assert response.status_code == 201, response.json()
        records.append(response.json()["data"])
    return records


class TestRegistrationsAPI:

    @pytest.mark.asyncio
    async def test_create_defaults(self, client: AsyncClient):
        response = await client.post(f"{BASE}/", json={
            "event_title": "Annual Charity Gala", "name": "  Asha Rao ", "email": "Asha.Rao@HopeFoundation.org",
        })

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["name"] == "Asha Rao"
        assert data["email"] == "asha.rao@hopefoundation.org"
        assert data["status"] == "pending"
        assert data["payment_status"] == "free"
        assert data["participants"] == 1
        assert data["amount"] == 0.0
        assert data["event_id"] is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field, value", [
        ("status", "waitlisted"),
        ("payment_status", "refunded"),
        ("participants", 0),
        ("amount", -5),
    ])
    async def test_invalid_values_rejected(self, client: AsyncClient, field, value):
        payload = {"event_title": "Gala", "name": "Asha", "email": "asha@hopefoundation.org", field: value}
        response = await client.post(f"{BASE}/", json=payload)

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_status_filter_and_stats(self, client: AsyncClient, registrations: list):
        response = await client.get(f"{BASE}/?status=confirmed")
        assert [item["name"] for item in response.json()["data"]["items"]] == ["Asha Rao"]

        response = await client.get(f"{BASE}/?category=Beach Cleanup")
        assert [item["name"] for item in response.json()["data"]["items"]] == ["Meera Nair"]

        stats = (await client.get(f"{BASE}/stats")).json()["data"]
        assert stats["total_count"] == 3
        assert stats["active_count"] == 1
        assert stats["by_status"] == {"confirmed": 1, "pending": 1, "cancelled": 1}
        assert stats["sums"] == {"participants": 7.0, "amount": 50.0}

    @pytest.mark.asyncio
    async def test_deleting_event_keeps_registrations(self, client: AsyncClient, registrations: list, test_event: Event):
        response = await client.delete(f"/api/v1/events/{test_event.id}?confirm=true")
        assert response.status_code == 200

        response = await client.get(f"{BASE}/{registrations[0]['id']}")
        assert response.status_code == 200
        assert response.json()["data"]["event_title"] == "Annual Charity Gala"


class TestRegistrationExport:

    @pytest.mark.asyncio
    async def test_export_route(self, client: AsyncClient, registrations: list):
        response = await client.get(f"{BASE}/export")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert response.headers["content-disposition"] == (
            f'attachment; filename="event-registrations_{date.today().isoformat()}.csv"'
        )

        header = response.text.splitlines()[0]
        assert header == ("ID,Event,Name,Email,Phone,Participants,Registration Date,Status,"
                          "Payment Status,Amount,Special Needs,Dietary Restrictions")

        rows = {row["Name"]: row for row in parse_csv(response.text)}
        assert set(rows) == {"Asha Rao", "Kabir Das", "Meera Nair"}
        assert rows["Asha Rao"]["Amount"] == "$50.00"
        assert rows["Asha Rao"]["Dietary Restrictions"] == "Vegetarian"
        assert rows["Asha Rao"]["Special Needs"] == "None"
        assert rows["Kabir Das"]["Amount"] == "Free"
        assert rows["Kabir Das"]["Phone"] == "+91 98765 43210"
        assert rows["Meera Nair"]["Participants"] == "4"
        assert rows["Asha Rao"]["Registration Date"] == date_only(registrations[0]["created_at"])

    @pytest.mark.asyncio
    async def test_export_respects_filters(self, client: AsyncClient, registrations: list):
        response = await client.get(f"{BASE}/export?status=pending")
        assert [row["Name"] for row in parse_csv(response.text)] == ["Kabir Das"]

        response = await client.get(f"{BASE}/export?search=nair")
        assert [row["Name"] for row in parse_csv(response.text)] == ["Meera Nair"]

    @pytest.mark.asyncio
    async def test_entities_without_columns_have_no_export(self, client: AsyncClient, test_event: Event):
        response = await client.get("/api/v1/events/export")

        # Falls through to the single-record route
        assert response.status_code == 404
        assert response.json()["error_type"] == "RecordNotFoundError"

    @pytest.mark.asyncio
    async def test_client_export(self, api: AdminApiClient, registrations: list):
        text = await api.export_csv("event-registrations", status="confirmed")

        assert [row["Email"] for row in parse_csv(text)] == ["asha@hopefoundation.org"]

    @pytest.mark.asyncio
    async def test_page_export_matches_filtered_view(self, api: AdminApiClient, registrations: list):
        page = EntityListPage("event-registrations", api=api)
        await page.refresh()
        page.set_filters(status="cancelled")

        rows = parse_csv(page.export_csv())
        assert [(row["Name"], row["Amount"], row["Payment Status"]) for row in rows] == [
            ("Meera Nair", "Free", "free"),
        ]

    def test_page_export_needs_columns(self):
        page = EntityListPage("events")

        with pytest.raises(RecordValidationError):
            page.export_csv()


class TestCsvHelpers:

    def test_quoting_and_missing_fields(self):
        record = {"id": "1", "name": 'Rao, Asha "AR"', "email": "asha@hopefoundation.org", "amount": 0}
        rows = parse_csv(records_to_csv(REGISTRATION_EXPORT_COLUMNS, [record]))

        assert rows[0]["Name"] == 'Rao, Asha "AR"'
        assert rows[0]["Phone"] == ""
        assert rows[0]["Payment Status"] == "N/A"
        assert rows[0]["Registration Date"] == ""

    def test_date_only(self):
        assert date_only("2025-04-15T19:30:00+00:00") == "2025-04-15"
        assert date_only("April 15") == "April 15"
        assert date_only(None) == ""

    def test_export_filename(self):
        assert export_filename("event-registrations", date(2025, 4, 15)) == "event-registrations_2025-04-15.csv"
