"""
Tests for the events API endpoints
"""

import pytest
from httpx import AsyncClient
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID, uuid4

from ngo_admin.models import Event


class TestEventsAPI:
    """Test class for events CRUD endpoints"""

    @pytest.mark.asyncio
    async def test_create_event(self, client: AsyncClient, event_payload: dict):
        """Creating an event returns the stored record with defaults filled in"""
        response = await client.post("/api/v1/events/", json=event_payload)

        assert response.status_code == 201
        body = response.json()
        assert body["status"] is True
        assert body["message"] == "Event created successfully"

        event = body["data"]
        UUID(event["id"])
        assert event["title"] == "Gala"
        assert event["date"] == "April 15, 2025"
        assert event["time"] == "7:00 PM - 10:00 PM"
        assert event["location"] == "Hall A"
        assert event["description"] == "desc"
        assert event["visible"] is True
        assert event["featured"] is False
        assert event["registrations"] == 0

    @pytest.mark.asyncio
    async def test_created_ids_are_unique(self, client: AsyncClient, event_payload: dict):
        ids = set()
        for _ in range(5):
            response = await client.post("/api/v1/events/", json=event_payload)
            assert response.status_code == 201
            ids.add(response.json()["data"]["id"])

        assert len(ids) == 5

    @pytest.mark.asyncio
    async def test_create_event_strips_whitespace(self, client: AsyncClient, event_payload: dict):
        event_payload["title"] = "  Spring Fair  "
        response = await client.post("/api/v1/events/", json=event_payload)

        assert response.status_code == 201
        assert response.json()["data"]["title"] == "Spring Fair"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title", ["", "   "])
    async def test_create_event_rejects_empty_title(
        self, client: AsyncClient, test_db: AsyncSession, event_payload: dict, title: str
    ):
        event_payload["title"] = title
        response = await client.post("/api/v1/events/", json=event_payload)

        assert response.status_code == 422
        body = response.json()
        assert body["status"] is False
        assert body["error_type"] == "ValidationError"

        count = await test_db.execute(select(func.count(Event.id)))
        assert count.scalar() == 0

    @pytest.mark.asyncio
    async def test_create_event_missing_required_field(self, client: AsyncClient, event_payload: dict):
        del event_payload["location"]
        response = await client.post("/api/v1/events/", json=event_payload)

        assert response.status_code == 422
        fields = [e["field"] for e in response.json()["details"]["validation_errors"]]
        assert any("location" in field for field in fields)

    @pytest.mark.asyncio
    async def test_list_events(self, client: AsyncClient, test_event: Event):
        response = await client.get("/api/v1/events/")

        assert response.status_code == 200
        data = response.json()["data"]
        assert "items" in data
        assert "pagination" in data
        assert len(data["items"]) == 1

        pagination = data["pagination"]
        assert pagination == {"page": 1, "limit": 20, "total": 1, "pages": 1}

        item = data["items"][0]
        assert item["id"] == str(test_event.id)
        assert item["title"] == "Annual Charity Gala"
        assert "created_at" in item

    @pytest.mark.asyncio
    async def test_list_events_with_pagination(self, client: AsyncClient, test_db: AsyncSession):
        for i in range(15):
            test_db.add(Event(
                title=f"Event {i}",
                date="May 1, 2025",
                time="10:00 AM",
                location="Community Hall",
                description=f"Description {i}",
            ))
        await test_db.commit()

        response = await client.get("/api/v1/events/?page=1&limit=5")
        assert response.status_code == 200
        data = response.json()["data"]
        assert len(data["items"]) == 5
        assert data["pagination"]["total"] == 15
        assert data["pagination"]["pages"] == 3

        response = await client.get("/api/v1/events/?page=3&limit=5")
        data = response.json()["data"]
        assert len(data["items"]) == 5
        assert data["pagination"]["page"] == 3

        response = await client.get("/api/v1/events/?page=4&limit=5")
        assert response.json()["data"]["items"] == []

    @pytest.mark.asyncio
    async def test_list_events_rejects_bad_paging(self, client: AsyncClient):
        response = await client.get("/api/v1/events/?page=0")
        assert response.status_code == 422

        response = await client.get("/api/v1/events/?limit=500")
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_search_events(self, client: AsyncClient, test_event: Event):
        response = await client.get("/api/v1/events/?search=BALLROOM")
        assert len(response.json()["data"]["items"]) == 1

        response = await client.get("/api/v1/events/?search=marathon")
        data = response.json()["data"]
        assert data["items"] == []
        assert data["pagination"]["total"] == 0

    @pytest.mark.asyncio
    async def test_filter_events_by_category(self, client: AsyncClient, test_db: AsyncSession, test_event: Event):
        test_db.add(Event(title="Beach Cleanup", date="June 5, 2025", time="7:00 AM",
                          location="Juhu Beach", description="Volunteer drive", category="Volunteer"))
        await test_db.commit()

        response = await client.get("/api/v1/events/?category=Fundraiser")
        items = response.json()["data"]["items"]
        assert [item["title"] for item in items] == ["Annual Charity Gala"]

        response = await client.get("/api/v1/events/?category=all")
        assert response.json()["data"]["pagination"]["total"] == 2

    @pytest.mark.asyncio
    async def test_sort_events(self, client: AsyncClient, test_db: AsyncSession):
        for title in ("Bravo", "Alpha", "Charlie"):
            test_db.add(Event(title=title, date="d", time="t", location="l", description="x"))
        await test_db.commit()

        response = await client.get("/api/v1/events/?sort_by=title&sort_order=asc")
        titles = [item["title"] for item in response.json()["data"]["items"]]
        assert titles == ["Alpha", "Bravo", "Charlie"]

        response = await client.get("/api/v1/events/?sort_by=location")
        assert response.status_code == 400
        assert response.json()["error_type"] == "RecordValidationError"

    @pytest.mark.asyncio
    async def test_get_event(self, client: AsyncClient, test_event: Event):
        response = await client.get(f"/api/v1/events/{test_event.id}")

        assert response.status_code == 200
        assert response.json()["data"]["title"] == test_event.title

    @pytest.mark.asyncio
    @pytest.mark.parametrize("record_id", [str(uuid4()), "not-a-uuid"])
    async def test_get_event_not_found(self, client: AsyncClient, record_id: str):
        response = await client.get(f"/api/v1/events/{record_id}")

        assert response.status_code == 404
        body = response.json()
        assert body["status"] is False
        assert body["error_type"] == "RecordNotFoundError"

    @pytest.mark.asyncio
    async def test_update_event(self, client: AsyncClient, test_db: AsyncSession, test_event: Event):
        response = await client.put(
            f"/api/v1/events/{test_event.id}",
            json={"title": "Annual Charity Gala 2025", "registrations": 150}
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == str(test_event.id)
        assert data["title"] == "Annual Charity Gala 2025"
        assert data["registrations"] == 150
        # Untouched fields keep their values
        assert data["location"] == "Grand Ballroom, Metropolis Hotel"
        assert data["featured"] is True

    @pytest.mark.asyncio
    async def test_update_changes_exactly_one_record(self, client: AsyncClient, test_db: AsyncSession):
        events = [Event(title=f"Event {i}", date="d", time="t", location="l", description="x") for i in range(3)]
        test_db.add_all(events)
        await test_db.commit()

        before = (await client.get("/api/v1/events/")).json()["data"]["items"]
        response = await client.patch(f"/api/v1/events/{events[1].id}", json={"location": "Town Hall"})
        assert response.status_code == 200
        after = (await client.get("/api/v1/events/")).json()["data"]["items"]

        changed = [
            new["id"] for old, new in zip(
                sorted(before, key=lambda e: e["id"]), sorted(after, key=lambda e: e["id"])
            )
            if old["location"] != new["location"]
        ]
        assert changed == [str(events[1].id)]

    @pytest.mark.asyncio
    async def test_update_event_cannot_blank_required_field(self, client: AsyncClient, test_event: Event):
        response = await client.put(f"/api/v1/events/{test_event.id}", json={"title": "  "})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_update_missing_event(self, client: AsyncClient):
        response = await client.put(f"/api/v1/events/{uuid4()}", json={"title": "Ghost"})

        assert response.status_code == 404
        assert response.json()["error_type"] == "RecordNotFoundError"

    @pytest.mark.asyncio
    async def test_toggle_event_flag(self, client: AsyncClient, test_event: Event):
        url = f"/api/v1/events/{test_event.id}/toggle/visible"

        response = await client.patch(url)
        assert response.status_code == 200
        assert response.json()["data"]["visible"] is False

        response = await client.patch(url)
        assert response.json()["data"]["visible"] is True

    @pytest.mark.asyncio
    async def test_toggle_non_boolean_field(self, client: AsyncClient, test_event: Event):
        response = await client.patch(f"/api/v1/events/{test_event.id}/toggle/title")

        assert response.status_code == 400
        assert response.json()["error_type"] == "RecordValidationError"

    @pytest.mark.asyncio
    async def test_delete_requires_confirmation(self, client: AsyncClient, test_event: Event):
        response = await client.delete(f"/api/v1/events/{test_event.id}")

        assert response.status_code == 409
        body = response.json()
        assert body["error_type"] == "ConfirmationRequiredError"
        assert body["details"]["confirm"] is False

        response = await client.get(f"/api/v1/events/{test_event.id}")
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_delete_event(self, client: AsyncClient, test_db: AsyncSession, test_event: Event):
        test_db.add(Event(title="Other", date="d", time="t", location="l", description="x"))
        await test_db.commit()

        response = await client.delete(f"/api/v1/events/{test_event.id}?confirm=true")
        assert response.status_code == 200
        assert response.json()["message"] == "Event deleted successfully"

        response = await client.get(f"/api/v1/events/{test_event.id}")
        assert response.status_code == 404

        response = await client.get("/api/v1/events/")
        assert response.json()["data"]["pagination"]["total"] == 1

    @pytest.mark.asyncio
    async def test_delete_missing_event(self, client: AsyncClient):
        response = await client.delete(f"/api/v1/events/{uuid4()}?confirm=true")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_bulk_delete(self, client: AsyncClient, test_db: AsyncSession):
        events = [Event(title=f"Event {i}", date="d", time="t", location="l", description="x") for i in range(3)]
        test_db.add_all(events)
        await test_db.commit()
        ids = [str(events[0].id), str(events[1].id)]

        response = await client.post("/api/v1/events/bulk-delete", json={"ids": ids})
        assert response.status_code == 409

        response = await client.post("/api/v1/events/bulk-delete?confirm=true", json={"ids": ids})
        assert response.status_code == 200
        assert response.json()["data"] == {"deleted": 2}

        remaining = (await client.get("/api/v1/events/")).json()["data"]["items"]
        assert [item["id"] for item in remaining] == [str(events[2].id)]

    @pytest.mark.asyncio
    async def test_bulk_delete_with_unknown_id_deletes_nothing(
        self, client: AsyncClient, test_event: Event
    ):
        response = await client.post(
            "/api/v1/events/bulk-delete?confirm=true",
            json={"ids": [str(test_event.id), str(uuid4())]}
        )

        assert response.status_code == 404
        response = await client.get(f"/api/v1/events/{test_event.id}")
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_event_stats(self, client: AsyncClient, test_db: AsyncSession, test_event: Event):
        test_db.add(Event(title="Hidden", date="d", time="t", location="l", description="x",
                          visible=False, registrations=30, category="Workshop"))
        await test_db.commit()

        response = await client.get("/api/v1/events/stats?category=Workshop")
        assert response.status_code == 200
        stats = response.json()["data"]

        assert stats["total_count"] == 2
        assert stats["active_count"] == 1
        assert stats["filtered_count"] == 1
        assert stats["active_percentage"] == 50.0
        assert stats["sums"]["registrations"] == 150
        assert stats["by_category"] == {"Fundraiser": 1, "Workshop": 1}
        assert stats["filtered_count"] <= stats["total_count"]

    @pytest.mark.asyncio
    async def test_stats_of_empty_collection(self, client: AsyncClient):
        response = await client.get("/api/v1/events/stats")
        stats = response.json()["data"]

        assert stats["total_count"] == 0
        assert stats["active_percentage"] == 0.0

    @pytest.mark.asyncio
    async def test_unknown_route_uses_error_envelope(self, client: AsyncClient):
        response = await client.get("/api/v1/fundraisers/")

        assert response.status_code == 404
        assert response.json()["status"] is False

    @pytest.mark.asyncio
    async def test_health_check(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}
