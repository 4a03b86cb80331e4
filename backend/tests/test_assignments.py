import pytest
from sqlalchemy import select

from questlms.models.assignment import Assignment
from questlms.models.assignment_submission import AssignmentSubmission


@pytest.fixture()
def make_assignment(client, mission):
    def _make(is_active=True, points_reward=80, due_date="2026-12-01T23:59:00"):
        r = client.post("/assignments", json={
            "mission_id": mission["id"],
            "title": "Quality Plan Draft",
            "description": "Draft a quality plan",
            "points_reward": points_reward,
            "due_date": due_date,
            "is_active": is_active,
        })
        assert r.status_code == 201, r.text
        return r.json()

    return _make


@pytest.fixture()
def assignment(make_assignment):
    return make_assignment()


def test_create_assignment(client, assignment, mission):
    assert assignment["mission_id"] == mission["id"]
    assert assignment["due_date"].startswith("2026-12-01T23:59")
    assert assignment["is_active"] is True


def test_create_assignment_without_due_date(make_assignment):
    assert make_assignment(due_date=None)["due_date"] is None


def test_create_assignment_unknown_mission(client):
    r = client.post("/assignments", json={"mission_id": 999, "title": "A", "points_reward": 0})
    assert r.status_code == 404


def test_submit_with_content(client, assignment, student):
    r = client.post(f"/assignments/{assignment['id']}/submissions", json={
        "student_id": student["id"], "content": "My plan", "file_url": None,
    })
    assert r.status_code == 201
    body = r.json()
    assert body["content"] == "My plan"
    assert body["score"] is None
    assert body["points_earned"] is None
    assert body["feedback"] is None
    assert body["graded_at"] is None


def test_submit_with_file_url(client, assignment, student):
    r = client.post("/assignments/submit", json={
        "assignment_id": assignment["id"], "student_id": student["id"],
        "content": None, "file_url": "https://files.school.edu/plan.pdf",
    })
    assert r.status_code == 201
    assert r.json()["file_url"] == "https://files.school.edu/plan.pdf"


def test_submission_saved(client, assignment, student, db):
    client.post(f"/assignments/{assignment['id']}/submissions", json={
        "student_id": student["id"], "content": "Both", "file_url": "https://files.school.edu/a.pdf",
    })
    rows = db.scalars(select(AssignmentSubmission)).all()
    assert len(rows) == 1
    assert rows[0].student_id == student["id"]
    assert rows[0].submitted_at is not None


def test_submit_twice_rejected(client, assignment, student):
    url = f"/assignments/{assignment['id']}/submissions"
    assert client.post(url, json={"student_id": student["id"], "content": "v1"}).status_code == 201
    r = client.post(url, json={"student_id": student["id"], "content": "v2"})
    assert r.status_code == 409
    assert r.json()["detail"] == "Assignment already submitted"


def test_submit_missing_assignment(client, student):
    r = client.post("/assignments/999/submissions", json={"student_id": student["id"], "content": "x"})
    assert r.status_code == 404
    assert r.json()["detail"] == "Assignment not found"


def test_submit_unknown_student(client, assignment):
    r = client.post(f"/assignments/{assignment['id']}/submissions", json={"student_id": 999, "content": "x"})
    assert r.status_code == 404
    assert r.json()["detail"] == "Student not found"


def test_submit_inactive_assignment(client, make_assignment, student):
    a = make_assignment(is_active=False)
    r = client.post(f"/assignments/{a['id']}/submissions", json={"student_id": student["id"], "content": "x"})
    assert r.status_code == 400
    assert r.json()["detail"] == "Assignment is not active"


def test_submit_as_lecturer(client, assignment, lecturer):
    r = client.post(f"/assignments/{assignment['id']}/submissions", json={"student_id": lecturer["id"], "content": "x"})
    assert r.status_code == 404
    assert r.json()["detail"] == "Student not found"


def test_submit_requires_content_or_file(client, assignment, student):
    r = client.post(f"/assignments/{assignment['id']}/submissions", json={
        "student_id": student["id"], "content": None, "file_url": None,
    })
    assert r.status_code == 400
    assert r.json()["detail"] == "Either content or file_url must be provided"


def test_points_for_score():
    a = Assignment(points_reward=80)
    assert a.points_for_score(100) == 80
    assert a.points_for_score(0) == 0
    assert a.points_for_score(75) == 60
    b = Assignment(points_reward=5)
    # 2.5 rounds up
    assert b.points_for_score(50) == 3


def test_grade_submission_credits_progress(client, assignment, student, course, enroll):
    enroll(student["id"], course["id"])
    sub = client.post(f"/assignments/{assignment['id']}/submissions", json={
        "student_id": student["id"], "content": "Plan",
    }).json()

    r = client.post(f"/assignments/submissions/{sub['id']}/grade", json={"score": 75, "feedback": "Good"})
    assert r.status_code == 200
    body = r.json()
    assert body["score"] == 75
    assert body["points_earned"] == 60
    assert body["feedback"] == "Good"
    assert body["graded_at"] is not None

    p = client.get("/progress", params={"student_id": student["id"], "course_id": course["id"]}).json()
    assert p["total_points"] == 60

    again = client.post(f"/assignments/submissions/{sub['id']}/grade", json={"score": 100})
    assert again.status_code == 409


def test_grade_validation(client, assignment, student):
    sub = client.post(f"/assignments/{assignment['id']}/submissions", json={
        "student_id": student["id"], "content": "Plan",
    }).json()
    assert client.post(f"/assignments/submissions/{sub['id']}/grade", json={"score": 101}).status_code == 422
    assert client.post("/assignments/submissions/999/grade", json={"score": 10}).status_code == 404


def test_list_submissions(client, assignment, make_user, mission):
    s1, s2 = make_user("student"), make_user("student")
    for s in (s1, s2):
        client.post(f"/assignments/{assignment['id']}/submissions", json={"student_id": s["id"], "content": "x"})
    rows = client.get(f"/assignments/{assignment['id']}/submissions").json()
    assert [r["student_id"] for r in rows] == [s1["id"], s2["id"]]
    assert client.get(f"/missions/{mission['id']}/assignments").json()[0]["id"] == assignment["id"]
