"""Account schemas."""

from gradebook.models.account import Account, AccountRole
from gradebook.schemas.common import BaseSchema


class AccountResponse(BaseSchema):
    """Fields shared by every account."""

    name: str
    email: str
    backup_email: str | None = None
    faculty: str | None = None
    role: AccountRole


class StudentResponse(AccountResponse):
    """Student account with its profile."""

    student_code: str | None = None
    department: str | None = None
    current_semester: int | None = None
    total_credit_hours: int | None = None
    has_registered_courses: bool = False

    @classmethod
    def from_account(cls, account: Account) -> "StudentResponse":
        profile = account.student_profile
        return cls(
            name=account.name,
            email=account.email,
            backup_email=account.backup_email,
            faculty=account.faculty,
            role=account.role,
            student_code=profile.student_code if profile else None,
            department=profile.department if profile else None,
            current_semester=profile.current_semester if profile else None,
            total_credit_hours=profile.total_credit_hours if profile else None,
            has_registered_courses=profile.has_registered_courses if profile else False,
        )


class RosterEntry(BaseSchema):
    """Student as listed on a course roster."""

    student_code: str | None = None
    email: str
    current_semester: int | None = None
    department: str | None = None
    total_credit_hours: int | None = None

    @classmethod
    def from_account(cls, account: Account) -> "RosterEntry":
        profile = account.student_profile
        return cls(
            student_code=profile.student_code if profile else None,
            email=account.email,
            current_semester=profile.current_semester if profile else None,
            department=profile.department if profile else None,
            total_credit_hours=profile.total_credit_hours if profile else None,
        )
