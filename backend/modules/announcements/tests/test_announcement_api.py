"""
Tests for the happy-bar announcement.
"""

from modules.announcements.models import Announcement, AnnouncementLogEntry


class TestAnnouncementAPI:

    def test_empty_before_first_update(self, client):
        assert client.get("/api/happy").json() == {"ok": True, "happy": ""}

        data = client.get("/api/data").json()
        assert data["happy"] == data["happyBarText"] == data["text"] == ""
        assert data["updatedAt"] is None

    def test_update_replaces_text_and_broadcasts_it(self, client, published_events):
        response = client.post("/api/happy", json={"happy": "Happy hour 16-18!"})

        assert response.status_code == 200
        assert response.json() == {"ok": True, "happy": "Happy hour 16-18!"}
        assert client.get("/api/happy").json()["happy"] == "Happy hour 16-18!"
        assert published_events == [("happy-updated", "Happy hour 16-18!")]

    def test_text_field_accepted(self, client, published_events):
        client.post("/api/happy", json={"text": "-20% na shake'i"})

        data = client.get("/api/data").json()
        assert data["happyBarText"] == "-20% na shake'i"
        assert data["updatedAt"]

    def test_single_row_with_append_only_log(self, client, db_session, published_events):
        for text in ("pierwszy", "drugi", ""):
            client.post("/api/happy", json={"happy": text})

        assert db_session.query(Announcement).count() == 1
        log = db_session.query(AnnouncementLogEntry).order_by(AnnouncementLogEntry.id).all()
        assert [entry.text for entry in log] == ["pierwszy", "drugi", ""]
        assert client.get("/api/happy").json()["happy"] == ""
