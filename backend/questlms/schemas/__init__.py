# backend/questlms/schemas/__init__.py

# Users / courses / missions
from .user import UserCreate, UserOut
from .course import CourseCreate, CourseOut
from .mission import MissionCreate, MissionOut, MissionCompleteIn, MissionCompletionOut
from .learning_material import LearningMaterialCreate, LearningMaterialOut

# Quizzes and assignments
from .quiz import (
    QuizCreate,
    QuizOut,
    QuizDetail,
    QuizQuestionCreate,
    QuizQuestionOut,
    QuizSubmitIn,
    QuizSubmitRequest,
    QuizSubmissionOut,
)
from .assignment import (
    AssignmentCreate,
    AssignmentOut,
    AssignmentSubmitIn,
    AssignmentSubmitRequest,
    AssignmentGradeIn,
    AssignmentSubmissionOut,
)

# Gamification
from .progress import EnrollIn, StudentProgressOut, LeaderboardEntry
from .badge import BadgeCreate, BadgeOut, BadgeAwardIn, StudentBadgeOut

# Discussions
from .discussion import (
    DiscussionForumCreate,
    DiscussionForumOut,
    DiscussionPostIn,
    DiscussionPostCreate,
    DiscussionPostOut,
)

__all__ = [
    "UserCreate", "UserOut",
    "CourseCreate", "CourseOut",
    "MissionCreate", "MissionOut", "MissionCompleteIn", "MissionCompletionOut",
    "LearningMaterialCreate", "LearningMaterialOut",
    "QuizCreate", "QuizOut", "QuizDetail", "QuizQuestionCreate", "QuizQuestionOut",
    "QuizSubmitIn", "QuizSubmitRequest", "QuizSubmissionOut",
    "AssignmentCreate", "AssignmentOut", "AssignmentSubmitIn", "AssignmentSubmitRequest",
    "AssignmentGradeIn", "AssignmentSubmissionOut",
    "EnrollIn", "StudentProgressOut", "LeaderboardEntry",
    "BadgeCreate", "BadgeOut", "BadgeAwardIn", "StudentBadgeOut",
    "DiscussionForumCreate", "DiscussionForumOut", "DiscussionPostIn",
    "DiscussionPostCreate", "DiscussionPostOut",
]
