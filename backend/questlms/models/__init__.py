# backend/questlms/models/__init__.py
from questlms.db import Base

# import all model modules so tables get registered on Base.metadata
from .user import User
from .course import Course
from .mission import Mission
from .learning_material import LearningMaterial
from .quiz import Quiz
from .quiz_question import QuizQuestion
from .assignment import Assignment
from .student_progress import StudentProgress
from .badge import Badge
from .student_badge import StudentBadge
from .quiz_submission import QuizSubmission
from .assignment_submission import AssignmentSubmission
from .discussion_forum import DiscussionForum
from .discussion_post import DiscussionPost
from .mission_completion import MissionCompletion


__all__ = [
    "Base",
    "User",
    "Course",
    "Mission",
    "LearningMaterial",
    "Quiz",
    "QuizQuestion",
    "Assignment",
    "StudentProgress",
    "Badge",
    "StudentBadge",
    "QuizSubmission",
    "AssignmentSubmission",
    "DiscussionForum",
    "DiscussionPost",
    "MissionCompletion",
]
