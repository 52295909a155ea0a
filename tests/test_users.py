"""
Integration tests for the user endpoints.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from streakboard.core.config import settings
from streakboard.models.user import UserRecord
from streakboard.services.users import default_display_name

START = datetime(2026, 3, 10, 9, 30, tzinfo=timezone.utc)


def test_default_display_name():
    assert default_display_name("987654321") == "User_4321"
    assert default_display_name("ab") == "User_ab"


class TestGetUser:
    def test_unknown_user_gets_zeroed_default(self, client, db):
        r = client.get("/api/user/100200300")
        assert r.status_code == 200
        body = r.json()
        assert body["exists"] is False
        assert body["displayName"] == "User_0300"
        assert body["totalCheckins"] == 0
        assert body["currentStreak"] == 0
        assert body["bestStreak"] == 0
        assert body["checkinHistory"] == []
        assert body["season"] == "2026-spring"
        assert body["currentSeason"]["id"] == "2026-spring"
        # read-only: nothing stored
        assert db.get(UserRecord, "100200300") is None

    def test_after_checkins(self, client, clock):
        client.post("/api/checkin/reader")
        clock.set(START + timedelta(days=1))
        client.post("/api/checkin/reader")

        body = client.get("/api/user/reader").json()
        assert body["exists"] is True
        assert body["checkinHistory"] == ["2026-03-10", "2026-03-11"]
        assert body["lastCheckinDate"] == "2026-03-11"
        assert body["currentStreak"] == 2
        assert body["bestStreak"] == 2
        assert body["totalCheckins"] == 2

    def test_stale_streak_reported_without_decay(self, client, clock):
        client.post("/api/checkin/stale")
        clock.set(START + timedelta(days=1))
        client.post("/api/checkin/stale")
        clock.set(START + timedelta(days=10))
        assert client.get("/api/user/stale").json()["currentStreak"] == 2

    def test_stale_streak_decays_when_enabled(self, client, clock, monkeypatch):
        monkeypatch.setattr(settings, "STREAK_DECAY_ON_READ", True)
        client.post("/api/checkin/decayed")
        clock.set(START + timedelta(days=1))
        assert client.get("/api/user/decayed").json()["currentStreak"] == 1
        clock.set(START + timedelta(days=2))
        assert client.get("/api/user/decayed").json()["currentStreak"] == 0

    @staticmethod
    def _seed_corrupt(db, user_id):
        db.add(UserRecord(
            id=user_id,
            start_date=START,
            checkin_history="[]",
            last_checkin_date=None,
            streak=0,
            best_streak=0,
            total_checkins=7,
        ))
        db.commit()

    def test_corrupted_record_surfaces_on_register(self, client, db):
        self._seed_corrupt(db, "broken-register")
        r = client.post("/api/user/broken-register")
        assert r.status_code == 500
        body = r.json()
        assert body["code"] == "INVARIANT_VIOLATION"
        assert body["details"]["invariant"] == "total_matches_history"

    def test_corrupted_record_surfaces_on_rename(self, client, db):
        self._seed_corrupt(db, "broken-rename")
        r = client.patch("/api/user/broken-rename", json={"displayName": "Fixed?"})
        assert r.status_code == 500
        assert r.json()["code"] == "INVARIANT_VIOLATION"

        db.expire_all()
        assert db.get(UserRecord, "broken-rename").display_name is None

    def test_corrupted_record_surfaces(self, client, db):
        db.add(UserRecord(
            id="broken",
            start_date=START,
            checkin_history='["2026-03-10", "2026-03-10"]',
            last_checkin_date=START.date(),
            streak=1,
            best_streak=1,
            total_checkins=2,
        ))
        db.commit()
        r = client.get("/api/user/broken")
        assert r.status_code == 500
        body = r.json()
        assert body["code"] == "INVARIANT_VIOLATION"
        assert body["details"]["invariant"] == "unique_days"


class TestRegisterUser:
    def test_register_creates_zero_record(self, client, db):
        r = client.post("/api/user/newbie", json={"displayName": "Newbie"})
        assert r.status_code == 201
        body = r.json()
        assert body["exists"] is True
        assert body["displayName"] == "Newbie"
        assert body["totalCheckins"] == 0
        assert body["bestStreak"] == 0

        record = db.get(UserRecord, "newbie")
        assert record.total_checkins == 0
        assert record.history == []
        assert record.season == "2026-spring"

    def test_register_without_body(self, client):
        r = client.post("/api/user/anon-1234")
        assert r.status_code == 201
        assert r.json()["displayName"] == "User_1234"

    def test_register_twice_returns_existing(self, client):
        client.post("/api/checkin/veteran")
        r = client.post("/api/user/veteran", json={"displayName": "Ignored"})
        assert r.status_code == 200
        body = r.json()
        assert body["totalCheckins"] == 1
        assert body["displayName"] == "User_eran"


class TestRenameUser:
    def test_rename(self, client):
        client.post("/api/checkin/renamer")
        r = client.patch("/api/user/renamer", json={"displayName": "Streak Queen"})
        assert r.status_code == 200
        assert r.json()["displayName"] == "Streak Queen"

        board = client.get("/api/leaderboard").json()
        assert board["entries"][0]["displayName"] == "Streak Queen"

    def test_rename_unknown_user(self, client):
        r = client.patch("/api/user/ghost", json={"displayName": "Boo"})
        assert r.status_code == 404
        body = r.json()
        assert body["code"] == "USER_NOT_FOUND"
        assert body["details"]["user_id"] == "ghost"

    def test_rename_requires_name(self, client):
        client.post("/api/user/blank")
        r = client.patch("/api/user/blank", json={"displayName": ""})
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"
