import pytest
from sqlalchemy import func, select

from gradebook.core.exceptions import InvalidStateError, NotFoundError, ValidationError
from gradebook.models import GradeRecord
from gradebook.services.eligibility import EligibilityResolver


@pytest.fixture
def catalogue(seed):
    cs = seed.department("CS")
    math = seed.department("Math")
    seed.course("CS301", semester=3, departments=(cs,))
    seed.course("CS302", semester=3, departments=(cs, math))
    seed.course("CS401", semester=4, departments=(cs,))
    seed.course("MA301", semester=3, departments=(math,))
    seed.course("CS303", semester=3, faculty="Science", departments=(cs,))
    return cs, math


def test_available_courses_match_department_semester_and_faculty(db, seed, catalogue):
    seed.student("student@uni.edu", department="CS", faculty="Engineering", semester=3)

    courses = EligibilityResolver(db).available_courses("student@uni.edu")

    assert [c.code for c in courses] == ["CS301", "CS302"]


def test_available_courses_require_a_current_semester(db, seed, catalogue):
    seed.student("student@uni.edu", semester=None)

    with pytest.raises(InvalidStateError):
        EligibilityResolver(db).available_courses("student@uni.edu")


def test_available_courses_for_unknown_student(db, catalogue):
    with pytest.raises(NotFoundError):
        EligibilityResolver(db).available_courses("ghost@uni.edu")


def test_register_creates_zeroed_records(db, seed, catalogue):
    student = seed.student("student@uni.edu")

    result = EligibilityResolver(db).register_courses("student@uni.edu", ["CS301", "CS302"])

    assert result.registered == ["CS301", "CS302"]
    assert result.already_registered == []
    assert result.unresolved == []
    records = db.execute(select(GradeRecord).where(GradeRecord.student_id == student.id)).scalars().all()
    assert len(records) == 2
    for record in records:
        assert (record.mid_term, record.final_exam, record.quizzes, record.practical, record.total) == (0, 0, 0, 0, 0)


def test_register_is_idempotent(db, seed, catalogue):
    student = seed.student("student@uni.edu")
    resolver = EligibilityResolver(db)

    resolver.register_courses("student@uni.edu", ["CS301"])
    second = resolver.register_courses("student@uni.edu", ["CS301", "CS301", "CS302"])

    assert second.registered == ["CS302"]
    assert second.already_registered == ["CS301"]
    count = db.execute(
        select(func.count()).select_from(GradeRecord).where(GradeRecord.student_id == student.id)
    ).scalar()
    assert count == 2


def test_register_drops_and_reports_unresolved_codes(db, seed, catalogue):
    seed.student("student@uni.edu", faculty="Engineering")

    # CS303 exists, but in another faculty
    result = EligibilityResolver(db).register_courses("student@uni.edu", ["CS301", "XX999", "CS303"])

    assert result.registered == ["CS301"]
    assert result.unresolved == ["XX999", "CS303"]


def test_register_with_no_matching_course_fails(db, seed, catalogue):
    seed.student("student@uni.edu")

    with pytest.raises(ValidationError):
        EligibilityResolver(db).register_courses("student@uni.edu", ["XX999", "CS303"])

    assert db.execute(select(func.count()).select_from(GradeRecord)).scalar() == 0


def test_register_for_unknown_student(db, catalogue):
    with pytest.raises(NotFoundError):
        EligibilityResolver(db).register_courses("ghost@uni.edu", ["CS301"])


def test_complete_registration_sets_flag(db, seed):
    student = seed.student("student@uni.edu")
    assert student.student_profile.has_registered_courses is False

    EligibilityResolver(db).complete_registration("student@uni.edu")

    assert student.student_profile.has_registered_courses is True
