"""Integration tests for the event endpoints.

These tests exercise single-event CRUD under /api/events, the batch
endpoints under /api/events-list, the conflict check, and the error
responses produced by the exception handlers.
"""

import copy

from models.generator import generate_repeat_instances
from tests.fixtures.events import EVENT_JSON_EXAMPLES, create_event_form


def _payload(name: str) -> dict:
    return copy.deepcopy(EVENT_JSON_EXAMPLES[name])


class TestHealth:
    """Tests for the root and health endpoints."""

    def test_health(self, client_with_store):
        """The health endpoint reports healthy."""
        client, _ = client_with_store

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_root(self, client_with_store):
        """The root endpoint names the API."""
        client, _ = client_with_store

        assert "Calendar Scheduler" in client.get("/").json()["message"]


class TestSingleEventCrud:
    """Tests for /api/events."""

    def test_create_event(self, client_with_store):
        """POST stores the event and returns it with an id."""
        client, store = client_with_store

        response = client.post("/api/events", json=_payload("single"))

        assert response.status_code == 201
        data = response.json()
        assert data["id"]
        assert data["group_id"] is None
        assert data["date"] == "2025-07-03"
        assert data["repeat"]["type"] == "none"
        assert store.get_event(data["id"]) is not None

    def test_get_event(self, client_with_store):
        """GET returns a stored event."""
        client, store = client_with_store
        event = store.create_event(create_event_form())

        response = client.get(f"/api/events/{event.id}")

        assert response.status_code == 200
        assert response.json()["title"] == "Team Meeting"

    def test_get_missing_event(self, client_with_store):
        """GET of an unknown id is a 404 listing the id."""
        client, _ = client_with_store

        response = client.get("/api/events/missing")

        assert response.status_code == 404
        assert response.json()["error"] == "Event Not Found"
        assert response.json()["event_ids"] == ["missing"]

    def test_update_event(self, client_with_store):
        """PUT replaces the content and keeps the id."""
        client, store = client_with_store
        event = store.create_event(create_event_form())
        payload = _payload("single")

        response = client.put(f"/api/events/{event.id}", json=payload)

        assert response.status_code == 200
        assert response.json()["id"] == event.id
        assert store.get_event(event.id).title == "Dentist"

    def test_update_missing_event(self, client_with_store):
        """PUT of an unknown id is a 404 listing the id."""
        client, _ = client_with_store

        response = client.put("/api/events/missing", json=_payload("single"))

        assert response.status_code == 404
        assert response.json()["event_ids"] == ["missing"]

    def test_delete_event(self, client_with_store):
        """DELETE removes the event."""
        client, store = client_with_store
        event = store.create_event(create_event_form())

        response = client.delete(f"/api/events/{event.id}")

        assert response.status_code == 204
        assert store.get_event(event.id) is None

    def test_delete_missing_event(self, client_with_store):
        """DELETE of an unknown id is a 404."""
        client, _ = client_with_store

        assert client.delete("/api/events/missing").status_code == 404


class TestValidation:
    """Tests for rejected payloads."""

    def test_invalid_date(self, client_with_store):
        """A date the calendar lacks is rejected with 422."""
        client, _ = client_with_store
        payload = _payload("single")
        payload["date"] = "2025-02-30"

        response = client.post("/api/events", json=payload)

        assert response.status_code == 422

    def test_end_before_start(self, client_with_store):
        """An event must end after it starts."""
        client, _ = client_with_store
        payload = _payload("single")
        payload["end_time"] = "13:00"

        assert client.post("/api/events", json=payload).status_code == 422

    def test_zero_interval(self, client_with_store):
        """A repeating rule with interval 0 is rejected."""
        client, _ = client_with_store
        payload = _payload("weekly")
        payload["repeat"]["interval"] = 0

        assert client.post("/api/events", json=payload).status_code == 422

    def test_unknown_view(self, client_with_store):
        """Only week and month views are accepted."""
        client, _ = client_with_store

        assert client.get("/api/events", params={"view": "year"}).status_code == 422


class TestListEvents:
    """Tests for GET /api/events with search and views."""

    def _seed(self, store):
        for title, date in [
            ("Lunch", "2025-06-30"),
            ("Review", "2025-07-01"),
            ("Planning", "2025-07-05"),
            ("Retro", "2025-07-31"),
            ("Offsite", "2025-08-01"),
        ]:
            store.create_event(create_event_form(title=title, date=date))

    def _titles(self, response):
        return [event["title"] for event in response.json()["events"]]

    def test_list_all(self, client_with_store):
        """Without filters every event is returned in storage order."""
        client, store = client_with_store
        self._seed(store)

        response = client.get("/api/events")

        assert response.status_code == 200
        assert self._titles(response) == ["Lunch", "Review", "Planning", "Retro", "Offsite"]

    def test_month_view_uses_today(self, client_with_store):
        """The month view defaults to the server's date (pinned to 2025-07-01)."""
        client, store = client_with_store
        self._seed(store)

        response = client.get("/api/events", params={"view": "month"})

        assert self._titles(response) == ["Review", "Planning", "Retro"]

    def test_week_view_with_date(self, client_with_store):
        """An explicit date centres the view."""
        client, store = client_with_store
        self._seed(store)

        response = client.get("/api/events", params={"view": "week", "date": "2025-07-31"})

        assert self._titles(response) == ["Retro", "Offsite"]

    def test_search(self, client_with_store):
        """Search is case-insensitive."""
        client, store = client_with_store
        self._seed(store)

        response = client.get("/api/events", params={"search": "RETRO"})

        assert self._titles(response) == ["Retro"]


class TestBatchEndpoints:
    """Tests for /api/events-list."""

    def _weekly_instances(self):
        form = create_event_form(
            title="Standup",
            repeat={"type": "weekly", "interval": 1, "end_date": "2025-07-29"},
        )
        return [i.model_dump(mode="json") for i in generate_repeat_instances(form)]

    def test_create_batch_assigns_group(self, client_with_store):
        """A repeating batch is stored under one group id."""
        client, store = client_with_store

        response = client.post("/api/events-list", json={"events": self._weekly_instances()})

        assert response.status_code == 201
        data = response.json()
        assert len(data) == 5
        assert len({event["group_id"] for event in data}) == 1
        assert data[0]["group_id"].startswith("repeat-")
        assert len(store.list_events()) == 5

    def test_create_empty_batch_rejected(self, client_with_store):
        """A batch must contain at least one event."""
        client, _ = client_with_store

        assert client.post("/api/events-list", json={"events": []}).status_code == 422

    def test_update_batch(self, client_with_store):
        """PUT updates every event in the batch."""
        client, _ = client_with_store
        created = client.post("/api/events-list", json={"events": self._weekly_instances()}).json()
        for event in created[:2]:
            event["title"] = "Moved"

        response = client.put("/api/events-list", json={"events": created[:2]})

        assert response.status_code == 200
        assert [event["title"] for event in response.json()] == ["Moved", "Moved"]

    def test_update_batch_with_unknown_id(self, client_with_store):
        """An unknown id fails the whole batch."""
        client, store = client_with_store
        created = client.post("/api/events-list", json={"events": self._weekly_instances()}).json()
        created[0]["title"] = "Moved"
        created[1]["id"] = "ghost"

        response = client.put("/api/events-list", json={"events": created[:2]})

        assert response.status_code == 404
        assert response.json()["event_ids"] == ["ghost"]
        assert store.get_event(created[0]["id"]).title == "Standup"

    def test_delete_batch(self, client_with_store):
        """DELETE with a body removes the listed events."""
        client, store = client_with_store
        created = client.post("/api/events-list", json={"events": self._weekly_instances()}).json()

        response = client.request(
            "DELETE", "/api/events-list", json={"event_ids": [created[0]["id"]]}
        )

        assert response.status_code == 204
        assert len(store.list_events()) == 4

    def test_delete_group(self, client_with_store):
        """Deleting a group removes every occurrence."""
        client, store = client_with_store
        created = client.post("/api/events-list", json={"events": self._weekly_instances()}).json()
        group_id = created[0]["group_id"]

        response = client.delete(f"/api/events-list/groups/{group_id}")

        assert response.status_code == 200
        assert response.json() == {"group_id": group_id, "deleted": 5}
        assert store.list_events() == []


class TestConflicts:
    """Tests for POST /api/events/conflicts."""

    def test_reports_overlap(self, client_with_store):
        """An overlapping stored event is reported."""
        client, store = client_with_store
        existing = store.create_event(create_event_form(start_time="09:00", end_time="10:00"))
        candidate = create_event_form(start_time="09:30", end_time="10:30").model_dump(mode="json")

        response = client.post("/api/events/conflicts", json=candidate)

        assert response.status_code == 200
        data = response.json()
        assert data["has_conflict"] is True
        assert [event["id"] for event in data["conflicts"]] == [existing.id]

    def test_editing_excludes_self(self, client_with_store):
        """An event being edited does not conflict with its stored self."""
        client, store = client_with_store
        existing = store.create_event(create_event_form(start_time="09:00", end_time="10:00"))
        candidate = existing.to_form().model_dump(mode="json")
        candidate["id"] = existing.id

        response = client.post("/api/events/conflicts", json=candidate)

        assert response.json() == {"has_conflict": False, "conflicts": []}
