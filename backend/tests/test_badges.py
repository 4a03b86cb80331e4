from datetime import datetime, timedelta, timezone

from questlms.models.student_badge import StudentBadge


def _badge(client, name, points_required=None):
    r = client.post("/badges", json={"name": name, "description": None, "points_required": points_required})
    assert r.status_code == 201, r.text
    return r.json()


def test_create_and_list_badges(client):
    _badge(client, "First Steps", 100)
    _badge(client, "Forum Helper")
    rows = client.get("/badges").json()
    assert [b["name"] for b in rows] == ["First Steps", "Forum Helper"]
    assert rows[1]["points_required"] is None


def test_student_without_badges(client, student):
    assert client.get(f"/students/{student['id']}/badges").json() == []


def test_award_badge(client, student):
    b = _badge(client, "Forum Helper")
    r = client.post(f"/students/{student['id']}/badges", json={"badge_id": b["id"]})
    assert r.status_code == 201
    assert r.json()["badge_id"] == b["id"]

    dup = client.post(f"/students/{student['id']}/badges", json={"badge_id": b["id"]})
    assert dup.status_code == 409
    assert client.post(f"/students/{student['id']}/badges", json={"badge_id": 999}).status_code == 404


def test_badges_only_for_requested_student(client, make_user):
    s1, s2 = make_user("student"), make_user("student")
    b1, b2 = _badge(client, "One"), _badge(client, "Two")
    client.post(f"/students/{s1['id']}/badges", json={"badge_id": b1["id"]})
    client.post(f"/students/{s2['id']}/badges", json={"badge_id": b2["id"]})

    rows = client.get(f"/students/{s1['id']}/badges").json()
    assert [r["badge_id"] for r in rows] == [b1["id"]]


def test_badges_ordered_by_earned_at(client, db, student):
    newer, older = _badge(client, "Newer"), _badge(client, "Older")
    now = datetime.now(timezone.utc)
    db.add(StudentBadge(student_id=student["id"], badge_id=newer["id"], earned_at=now))
    db.add(StudentBadge(student_id=student["id"], badge_id=older["id"], earned_at=now - timedelta(days=3)))
    db.commit()

    rows = client.get(f"/students/{student['id']}/badges").json()
    assert [r["badge_id"] for r in rows] == [older["id"], newer["id"]]


def test_points_badges_awarded_on_progress(client, student, course, make_mission):
    first = _badge(client, "First Steps", 100)
    _badge(client, "Quality Champion", 500)
    manual = _badge(client, "Forum Helper")

    m = make_mission(points_reward=150)
    client.post(f"/missions/{m['id']}/complete", json={"student_id": student["id"]})

    held = [r["badge_id"] for r in client.get(f"/students/{student['id']}/badges").json()]
    assert held == [first["id"]]
    assert manual["id"] not in held

    # crossing the same threshold again does not duplicate the badge
    m2 = make_mission(meeting_number=2, points_reward=10)
    client.post(f"/missions/{m2['id']}/complete", json={"student_id": student["id"]})
    assert len(client.get(f"/students/{student['id']}/badges").json()) == 1


def test_blank_badge_name_rejected(client):
    r = client.post("/badges", json={"name": "   ", "description": None})
    assert r.status_code == 422
    assert client.get("/badges").json() == []
