"""Tests for the web interface."""

import importlib
from urllib.parse import unquote

import pytest
from fastapi.testclient import TestClient

from ibs_tracker.services.repository import LogRepository
from ibs_tracker.services.store import KeyValueStore
from ibs_tracker.web import app as web_app
from ibs_tracker.web.app import app


@pytest.fixture()
def client(settings):
    with TestClient(app) as test_client:
        yield test_client


def stored_entries(settings):
    with KeyValueStore(settings.store_path) as store:
        return LogRepository.from_store(store, settings=settings).sorted_desc()


class TestPages:
    """Tests for basic pages."""

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}

    def test_app_configures_logging(self, settings, monkeypatch):
        calls = []
        monkeypatch.setattr("ibs_tracker.utils.logging_config.setup_logging", calls.append)

        importlib.reload(web_app)

        assert calls == [settings.log_level]

    def test_home_redirects_to_log(self, client):
        response = client.get("/", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "/logs/"

    def test_empty_log(self, client):
        response = client.get("/logs/")
        assert response.status_code == 200
        assert "No entries yet" in response.text

    def test_new_forms(self, client):
        for log_type in ("symptom", "intake", "stress"):
            assert client.get(f"/logs/new/{log_type}").status_code == 200

    def test_unknown_form(self, client):
        assert client.get("/logs/new/sleep").status_code == 404


class TestSaving:
    """Tests for form submissions."""

    def test_create_intake(self, client, settings):
        response = client.post(
            "/logs/intake",
            data={"item": "Coffee", "quantity": "1 cup"},
            follow_redirects=False,
        )
        assert response.status_code == 303

        [entry] = stored_entries(settings)
        assert entry.item == "Coffee"
        assert "Coffee (1 cup)" in client.get("/logs/").text

    def test_blank_intake_rerenders_form(self, client, settings):
        response = client.post("/logs/intake", data={"item": "  "})
        assert response.status_code == 400
        assert "Please enter the food or drink item." in response.text
        assert stored_entries(settings) == []

    def test_create_symptom(self, client, settings):
        client.post(
            "/logs/symptom",
            data={
                "bowel_movement": "type4",
                "cramps_severity": "0",
                "bloating_severity": "3",
                "urgency": "true",
            },
        )

        [entry] = stored_entries(settings)
        assert entry.bowel_movement.value == "type4"
        assert entry.cramps_severity is None
        assert entry.bloating_severity == 3
        assert entry.urgency is True

    def test_second_stress_redirects_with_notice(self, client, settings):
        client.post("/logs/stress", data={"level": "2"})

        response = client.post("/logs/stress", data={"level": "4"}, follow_redirects=False)

        assert response.status_code == 303
        assert "already logged" in unquote(response.headers["location"])
        assert [e.level for e in stored_entries(settings)] == [2]

    def test_stress_form_blocked_after_logging(self, client):
        client.post("/logs/stress", data={"level": "2"})

        response = client.get("/logs/new/stress", follow_redirects=False)
        assert response.status_code == 303


class TestEditing:
    """Tests for editing and deleting."""

    def test_edit_form(self, client, settings):
        client.post("/logs/intake", data={"item": "Tea"})
        [entry] = stored_entries(settings)

        response = client.get(f"/logs/{entry.id}/edit")
        assert response.status_code == 200
        assert 'value="Tea"' in response.text

    def test_edit_missing_entry(self, client):
        assert client.get("/logs/nope/edit").status_code == 404

    def test_update_with_new_time(self, client, settings):
        client.post("/logs/stress", data={"level": "2"})
        [entry] = stored_entries(settings)

        client.post(
            "/logs/stress",
            data={"entry_id": entry.id, "when": "2024-01-01T08:30", "level": "5"},
        )

        [updated] = stored_entries(settings)
        assert updated.id == entry.id
        assert updated.level == 5
        assert updated.logged_at.strftime("%Y-%m-%d %H:%M") == "2024-01-01 08:30"

    def test_update_with_bad_time_is_rejected(self, client, settings):
        client.post("/logs/intake", data={"item": "Tea"})
        [entry] = stored_entries(settings)

        response = client.post(
            "/logs/intake",
            data={"entry_id": entry.id, "when": "not a date", "item": "Coffee"},
        )

        assert response.status_code == 400
        assert stored_entries(settings) == [entry]

    def test_delete(self, client, settings):
        client.post("/logs/intake", data={"item": "Tea"})
        [entry] = stored_entries(settings)

        response = client.post(f"/logs/{entry.id}/delete", follow_redirects=False)
        assert response.status_code == 303
        assert stored_entries(settings) == []

        # Deleting again is harmless
        assert client.post(f"/logs/{entry.id}/delete", follow_redirects=False).status_code == 303


class TestChartAndExport:
    """Tests for chart data and export."""

    def test_chart_not_enough_data(self, client):
        assert client.get("/chart/api/data").json() == {"points": [], "enough_data": False}
        assert "Not enough data" in client.get("/chart/").text

    def test_chart_data(self, client):
        client.post("/logs/symptom", data={"cramps_severity": "3"})

        data = client.get("/chart/api/data").json()
        [point] = data["points"]
        assert point["cramps"] == 3
        assert point["bloating"] is None
        assert data["enough_data"] is False

    def test_export_empty(self, client):
        response = client.get("/export")
        assert response.status_code == 404
        assert response.json() == {"detail": "No data to export."}

    def test_export_download(self, client):
        client.post("/logs/intake", data={"item": "Tea"})

        response = client.get("/export")

        assert response.status_code == 200
        assert response.headers["content-disposition"].startswith(
            'attachment; filename="ibs_tracker_data_'
        )
        [record] = response.json()
        assert record["item"] == "Tea"
