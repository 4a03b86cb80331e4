import pytest
from sqlalchemy import select

from questlms.models.quiz_question import QuizQuestion
from questlms.models.student_progress import StudentProgress
from questlms.models.quiz_submission import QuizSubmission
from questlms.routers.quizzes import score_answers


def _q(qid, answer, points=1):
    return QuizQuestion(id=qid, quiz_id=1, question_text="?", question_type="short_answer",
                        correct_answer=answer, points=points, order_index=qid)


@pytest.mark.parametrize("answers,expected", [
    ({"1": "Deming", "2": "true", "3": "Act"}, (100, 12)),
    ({"1": "  deming ", "2": "TRUE", "3": "nope"}, (67, 8)),
    ({"1": "deming"}, (33, 5)),
    ({}, (0, 0)),
    ({"1": "", "2": "false", "3": "   "}, (0, 0)),
])
def test_score_answers(answers, expected):
    questions = [_q(1, "Deming", 5), _q(2, "true", 3), _q(3, " Act ", 4)]
    assert score_answers(questions, answers) == expected


def test_score_rounds_half_up():
    questions = [_q(1, "a"), _q(2, "b")]
    assert score_answers(questions, {"1": "a"}) == (50, 1)
    eight = [_q(i, "x") for i in range(1, 9)]
    # 1/8 = 12.5%
    assert score_answers(eight, {"1": "x"})[0] == 13


@pytest.fixture()
def quiz(client, mission):
    r = client.post("/quizzes", json={
        "mission_id": mission["id"],
        "title": "TQM Basics",
        "description": None,
        "points_reward": 50,
        "time_limit_minutes": 30,
    })
    assert r.status_code == 201, r.text
    q = r.json()
    q1 = client.post(f"/quizzes/{q['id']}/questions", json={
        "question_text": "What is 2 + 2?",
        "question_type": "multiple_choice",
        "options": ["3", "4", "5", "6"],
        "correct_answer": "4",
        "points": 5,
        "order_index": 1,
    }).json()
    q2 = client.post(f"/quizzes/{q['id']}/questions", json={
        "question_text": "Is the sky blue?",
        "question_type": "true_false",
        "options": ["true", "false"],
        "correct_answer": "true",
        "points": 3,
        "order_index": 2,
    }).json()
    q["question_ids"] = [q1["id"], q2["id"]]
    return q


def _submit(client, quiz, student, a1, a2):
    i1, i2 = quiz["question_ids"]
    return client.post(f"/quizzes/{quiz['id']}/submissions", json={
        "student_id": student["id"],
        "answers": {str(i1): a1, str(i2): a2},
    })


def test_create_quiz_unknown_mission(client):
    r = client.post("/quizzes", json={"mission_id": 999, "title": "Q", "points_reward": 0})
    assert r.status_code == 404


def test_create_quiz_validation(client, mission):
    base = {"mission_id": mission["id"], "title": "Q", "points_reward": 0}
    assert client.post("/quizzes", json={**base, "time_limit_minutes": 0}).status_code == 422
    assert client.post("/quizzes", json={**base, "points_reward": -1}).status_code == 422
    r = client.post("/quizzes", json={**base, "description": None, "time_limit_minutes": None})
    assert r.status_code == 201
    assert r.json()["time_limit_minutes"] is None


def test_get_quiz_hides_answers(client, quiz):
    body = client.get(f"/quizzes/{quiz['id']}").json()
    assert [q["order_index"] for q in body["questions"]] == [1, 2]
    assert all("correct_answer" not in q for q in body["questions"])
    assert body["questions"][0]["options"] == ["3", "4", "5", "6"]


def test_multiple_choice_needs_options(client, quiz):
    r = client.post(f"/quizzes/{quiz['id']}/questions", json={
        "question_text": "Pick", "question_type": "multiple_choice", "correct_answer": "a",
    })
    assert r.status_code == 400


def test_submit_all_correct(client, quiz, student):
    r = _submit(client, quiz, student, "4", "true")
    assert r.status_code == 201
    body = r.json()
    assert body["quiz_id"] == quiz["id"]
    assert body["student_id"] == student["id"]
    assert body["score"] == 100
    assert body["points_earned"] == 8


def test_submit_partial(client, quiz, student):
    body = _submit(client, quiz, student, "4", "false").json()
    assert body["score"] == 50
    assert body["points_earned"] == 5


def test_submit_none_correct(client, quiz, student):
    body = _submit(client, quiz, student, "3", "false").json()
    assert body["score"] == 0
    assert body["points_earned"] == 0


def test_submit_case_insensitive(client, quiz, student):
    body = _submit(client, quiz, student, " 4 ", "TRUE").json()
    assert body["score"] == 100


def test_submission_saved(client, quiz, student, db):
    _submit(client, quiz, student, "4", "false")
    rows = db.scalars(select(QuizSubmission)).all()
    assert len(rows) == 1
    i1, i2 = quiz["question_ids"]
    assert rows[0].answers == {str(i1): "4", str(i2): "false"}
    assert rows[0].points_earned == 5


def test_submit_by_body_route(client, quiz, student):
    i1, i2 = quiz["question_ids"]
    r = client.post("/quizzes/submit", json={
        "quiz_id": quiz["id"], "student_id": student["id"], "answers": {str(i1): "4"},
    })
    assert r.status_code == 201
    assert r.json()["score"] == 50


def test_submit_updates_enrolled_progress(client, quiz, student, course, enroll):
    enroll(student["id"], course["id"])
    _submit(client, quiz, student, "4", "true")
    p = client.get("/progress", params={"student_id": student["id"], "course_id": course["id"]}).json()
    assert p["total_points"] == 8
    assert p["missions_completed"] == 0


def test_submit_without_progress_leaves_it_absent(client, quiz, student, course):
    _submit(client, quiz, student, "4", "true")
    r = client.get("/progress", params={"student_id": student["id"], "course_id": course["id"]})
    assert r.json() is None


def test_submit_inactive_quiz(client, mission, student):
    q = client.post("/quizzes", json={
        "mission_id": mission["id"], "title": "Off", "points_reward": 0, "is_active": False,
    }).json()
    r = client.post(f"/quizzes/{q['id']}/submissions", json={"student_id": student["id"], "answers": {}})
    assert r.status_code == 404
    assert r.json()["detail"] == "Quiz not found or inactive"


def test_submit_missing_quiz(client, student):
    r = client.post("/quizzes/999/submissions", json={"student_id": student["id"], "answers": {}})
    assert r.status_code == 404
    assert r.json()["detail"] == "Quiz not found or inactive"


def test_submit_quiz_without_questions(client, mission, student):
    q = client.post("/quizzes", json={"mission_id": mission["id"], "title": "Empty", "points_reward": 0}).json()
    r = client.post(f"/quizzes/{q['id']}/submissions", json={"student_id": student["id"], "answers": {}})
    assert r.status_code == 400
    assert r.json()["detail"] == "No questions found for quiz"


def test_mission_quizzes_listing(client, quiz, mission):
    rows = client.get(f"/missions/{mission['id']}/quizzes").json()
    assert [q["id"] for q in rows] == [quiz["id"]]


def test_lecturer_cannot_submit_quiz(client, quiz, lecturer):
    r = _submit(client, quiz, lecturer, "4", "true")
    assert r.status_code == 404
    assert r.json()["detail"] == "Student not found"


def test_submit_levels_up_and_awards_badge(client, db, quiz, student, course, enroll):
    enroll(student["id"], course["id"])
    badge = client.post("/badges", json={"name": "Level Two", "points_required": 200}).json()
    row = db.scalar(select(StudentProgress).where(StudentProgress.student_id == student["id"]))
    row.total_points = 195
    db.commit()

    body = _submit(client, quiz, student, "4", "false").json()
    assert body["points_earned"] == 5

    p = client.get("/progress", params={"student_id": student["id"], "course_id": course["id"]}).json()
    assert p["total_points"] == 200
    assert p["current_level"] == 2
    held = [b["badge_id"] for b in client.get(f"/students/{student['id']}/badges").json()]
    assert held == [badge["id"]]


def test_resubmission_credits_again(client, quiz, student, course, enroll):
    enroll(student["id"], course["id"])
    _submit(client, quiz, student, "4", "true")
    _submit(client, quiz, student, "4", "true")
    p = client.get("/progress", params={"student_id": student["id"], "course_id": course["id"]}).json()
    assert p["total_points"] == 16
