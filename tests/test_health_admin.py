from datetime import timedelta, timezone


def test_health_ok(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json() == {"success": True, "status": "OK", "database": "connected"}


def test_health_reports_database_down(museum, client, monkeypatch):
    monkeypatch.setattr(museum.health, "ping", lambda db: False)
    r = client.get("/api/health")
    assert r.status_code == 503
    body = r.json()
    assert body["success"] is False
    assert body["status"] == "ERROR"
    assert body["database"] == "disconnected"


def test_stats_require_admin(client):
    r = client.get("/api/admin/stats")
    assert r.status_code == 401
    assert r.json() == {"success": False, "message": "Unauthorized"}
    assert r.headers["WWW-Authenticate"].startswith("Basic")

    assert client.get("/api/admin/stats", auth=("curator", "wrong")).status_code == 401


def test_stats_counts(museum, client, make_payload, monkeypatch):
    # A museum far west of UTC: its "today" differs from the UTC date for part of every day
    tz = timezone(timedelta(hours=-10))
    monkeypatch.setattr(museum.admin, "MUSEUM_TZ", tz)
    museum.main.app.dependency_overrides[museum.bookings.get_today] = lambda: museum.clock.museum_today(tz)

    client.post("/api/bookings", json=make_payload(numberOfVisitors=2, tourType="guided"))
    client.post("/api/bookings", json=make_payload(numberOfVisitors=5, tourType="self-guided"))
    client.post("/api/bookings", json=make_payload(numberOfVisitors=1, tourType="private"))
    client.post("/api/bookings", json=make_payload(numberOfVisitors=30, tourType="guided"))  # rejected

    r = client.get("/api/admin/stats", auth=("curator", "s3cret"))
    assert r.status_code == 200
    assert r.json() == {
        "success": True,
        "data": {
            "totalBookings": 3,
            "todayBookings": 3,
            "totalVisitors": 8,
            "guidedTours": 1,
            "selfGuidedTours": 1,
            "privateTours": 1,
        },
    }
