"""Database models package."""

from gradebook.models.account import Account, AccountRole, StudentProfile
from gradebook.models.audit import AuditAction, AuditLog
from gradebook.models.course import (
    Course,
    CourseDepartment,
    CourseInstructor,
    Department,
    InstructorRole,
)
from gradebook.models.grade import GradeRecord
from gradebook.models.petition import Petition

__all__ = [
    # Accounts
    "Account",
    "AccountRole",
    "StudentProfile",
    # Courses
    "Course",
    "CourseDepartment",
    "CourseInstructor",
    "Department",
    "InstructorRole",
    # Grades
    "GradeRecord",
    # Petitions
    "Petition",
    # Audit
    "AuditLog",
    "AuditAction",
]
