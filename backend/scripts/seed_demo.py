#!/usr/bin/env python3
"""
Seed a database with a demo TQM course: a lecturer, a handful of students,
four missions with materials, a quiz, an assignment, a forum and badges.
Does nothing when the database already has users.
"""
import argparse
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///questlms.db")

from sqlalchemy import select, func  # noqa: E402

from questlms.db import Base, SessionLocal, engine  # noqa: E402
from questlms.models import (  # noqa: E402
    Assignment,
    Badge,
    Course,
    DiscussionForum,
    LearningMaterial,
    Mission,
    Quiz,
    QuizQuestion,
    StudentProgress,
    User,
)
from questlms.security import hash_password  # noqa: E402

DEMO_PASSWORD = "questlms"

STUDENTS = [
    # username, full name, points, missions completed
    ("ahmad", "Ahmad Pratama", 370, 2),
    ("siti", "Siti Nurhaliza", 520, 3),
    ("budi", "Budi Santoso", 450, 3),
    ("maya", "Maya Sari", 320, 2),
    ("rizki", "Rizki Pratama", 280, 2),
]

MISSIONS = [
    # meeting, title, description, points, active
    (1, "Introduction to TQM", "Fundamentals of Total Quality Management and its principles", 100, True),
    (2, "Quality Planning & Control", "Quality planning processes and control mechanisms", 120, True),
    (3, "Continuous Improvement", "Implementing continuous improvement strategies", 150, True),
    (4, "Statistical Quality Control", "Statistical methods for process improvement", 140, False),
]

BADGES = [
    ("First Steps", "Earned 100 points", 100),
    ("Quality Apprentice", "Earned 300 points", 300),
    ("Quality Champion", "Earned 500 points", 500),
    ("Forum Helper", "Awarded by the lecturer for helpful answers", None),
]


def seed(s) -> None:
    lecturer = User(
        username="lecturer",
        email="lecturer@questlms.dev",
        password_hash=hash_password(DEMO_PASSWORD),
        full_name="Dr. Hendra Wijaya",
        role="lecturer",
    )
    s.add(lecturer)
    s.flush()

    course = Course(
        name="Total Quality Management (TQM)",
        description="Practical module covering TQM principles, implementation, "
                    "and continuous improvement methodologies",
        lecturer_id=lecturer.id,
    )
    s.add(course)
    s.flush()

    missions = []
    for number, title, description, points, active in MISSIONS:
        m = Mission(
            course_id=course.id,
            title=f"Meeting {number}: {title}",
            description=description,
            meeting_number=number,
            points_reward=points,
            is_active=active,
        )
        s.add(m)
        missions.append(m)
    s.flush()

    first = missions[0]
    s.add_all([
        LearningMaterial(mission_id=first.id, title="TQM Fundamentals Lecture",
                         content="Core concepts and principles of Total Quality Management",
                         material_type="lecture"),
        LearningMaterial(mission_id=first.id, title="TQM Introduction Video",
                         content="Video covering TQM basics", material_type="video",
                         file_url="/materials/tqm-intro.mp4"),
        LearningMaterial(mission_id=first.id, title="Deming's 14 Points",
                         content="Reading on Deming's management principles", material_type="reading"),
    ])

    quiz = Quiz(mission_id=first.id, title="TQM Basics Quiz",
                description="Check your understanding of meeting 1", points_reward=50,
                time_limit_minutes=15)
    s.add(quiz)
    s.flush()
    s.add_all([
        QuizQuestion(quiz_id=quiz.id, question_text="Who proposed the 14 points for management?",
                     question_type="multiple_choice",
                     options=["Juran", "Deming", "Crosby", "Ishikawa"],
                     correct_answer="Deming", points=5, order_index=1),
        QuizQuestion(quiz_id=quiz.id, question_text="TQM focuses on customer satisfaction.",
                     question_type="true_false", options=["true", "false"],
                     correct_answer="true", points=3, order_index=2),
        QuizQuestion(quiz_id=quiz.id, question_text="Name the cycle Plan-Do-Check-...",
                     question_type="short_answer", correct_answer="Act", points=4, order_index=3),
    ])

    s.add(Assignment(mission_id=missions[1].id, title="Quality Plan Draft",
                     description="Draft a quality plan for a small service business",
                     points_reward=80))
    s.add(DiscussionForum(mission_id=first.id, title="Introduction to TQM Q&A",
                          description="Questions about the first meeting"))

    for name, description, required in BADGES:
        s.add(Badge(name=name, description=description, points_required=required))

    for username, full_name, points, done in STUDENTS:
        student = User(
            username=username,
            email=f"{username}@questlms.dev",
            password_hash=hash_password(DEMO_PASSWORD),
            full_name=full_name,
            role="student",
        )
        s.add(student)
        s.flush()
        s.add(StudentProgress(
            student_id=student.id,
            course_id=course.id,
            total_points=points,
            current_level=StudentProgress.level_for_points(points),
            missions_completed=done,
        ))


def main():
    parser = argparse.ArgumentParser(description="Seed QuestLMS with a demo course")
    parser.add_argument("--create-tables", action="store_true",
                        help="Create missing tables first (no Alembic run needed)")
    args = parser.parse_args()

    if args.create_tables:
        Base.metadata.create_all(bind=engine)

    with SessionLocal() as s:
        users = s.scalar(select(func.count()).select_from(User))
        if users:
            print(f"[seed] Database already has {users} users; nothing to do")
            return
        seed(s)
        s.commit()

    print(f"[seed] Demo data created (password for every account: '{DEMO_PASSWORD}')")


if __name__ == "__main__":
    main()
