import uuid
from datetime import date, timedelta

from hub.models import HabitInsight, HabitLog


def _create(client, headers, name="Meditate", **extra):
    r = client.post("/habits", json={"name": name, **extra}, headers=headers)
    assert r.status_code == 200
    return r.json()


def test_create_and_list_defaults(client, headers):
    habit = _create(client, headers)
    assert habit["frequency"] == "daily"
    assert habit["color"] == "#22c55e"

    listed = client.get("/habits", headers=headers).json()
    assert [h["id"] for h in listed] == [habit["id"]]


def test_toggle_creates_then_flips_today(client, headers):
    habit = _create(client, headers)

    first = client.post(f"/habits/{habit['id']}/toggle", headers=headers).json()
    assert first["completed"] is True
    assert first["logged_at"] == date.today().isoformat()

    second = client.post(f"/habits/{habit['id']}/toggle", headers=headers).json()
    assert second["id"] == first["id"]
    assert second["completed"] is False

    logs = client.get("/habits/logs", headers=headers).json()
    assert len(logs) == 1


def test_logs_window(client, headers, db, user_id):
    habit = _create(client, headers)
    db.add(HabitLog(
        habit_id=uuid.UUID(habit["id"]),
        user_id=user_id,
        completed=True,
        logged_at=date.today() - timedelta(days=20),
    ))
    db.commit()

    assert client.get("/habits/logs?days=7", headers=headers).json() == []
    assert len(client.get("/habits/logs?days=30", headers=headers).json()) == 1


def test_habits_are_owner_scoped(client, headers, other_headers):
    habit = _create(client, headers)
    assert client.get("/habits", headers=other_headers).json() == []
    assert client.post(f"/habits/{habit['id']}/toggle", headers=other_headers).status_code == 404
    assert client.delete(f"/habits/{habit['id']}", headers=other_headers).status_code == 404
    assert client.delete(f"/habits/{habit['id']}", headers=headers).status_code == 200


def test_missing_user_header_is_401(client):
    assert client.get("/habits").status_code == 401
    assert client.get("/habits", headers={"X-User-Id": "not-a-uuid"}).status_code == 401


def test_insights_require_habits(client, headers, gateway):
    r = client.post("/habits/insights", headers=headers)
    assert r.status_code == 400
    assert gateway.calls == []


def test_insights_send_habits_and_named_logs(client, headers, gateway):
    habit = _create(client, headers, name="Run", frequency="weekly")
    client.post(f"/habits/{habit['id']}/toggle", headers=headers)
    gateway.content = '{"insights": [{"type": "pattern", "message": "Consistent!"}], "overallScore": 90}'

    r = client.post("/habits/insights", headers=headers)

    assert r.status_code == 200
    assert r.json()["overallScore"] == 90
    system = gateway.system_prompt
    assert "- Run (weekly)" in system
    assert f"Run on {date.today().isoformat()}: ✓ Completed" in system


def test_insights_rate_limited(client, headers, gateway):
    _create(client, headers)
    gateway.status = 429
    r = client.post("/habits/insights", headers=headers)
    assert r.status_code == 429
    assert r.json() == {"error": "Rate limit exceeded. Please try again later."}


def test_insight_history(client, headers, db, user_id):
    client.get("/profile", headers=headers)
    db.add(HabitInsight(user_id=user_id, insight_text="Keep going", insight_type="encouragement"))
    db.commit()
    rows = client.get("/habits/insights/history", headers=headers).json()
    assert rows[0]["insight_text"] == "Keep going"
    assert rows[0]["insight_type"] == "encouragement"
