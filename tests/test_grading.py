import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from gradebook.core.database import Base
from gradebook.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from gradebook.models import AccountRole, GradeRecord, InstructorRole
from gradebook.schemas.grade import GradeUpdate
from gradebook.services.grading import GradeUpdatePolicy, compute_total
from gradebook.services.record_store import RecordStore

from factories import Seeder


@pytest.fixture
def graded_course(seed):
    """A doctor teaching a practical course and a non-practical course, one student on both."""
    doctor = seed.instructor("doctor@uni.edu")
    student = seed.student("student@uni.edu")
    lab = seed.course("CS201", has_practical=True, max_mid_term=20, max_final_exam=50, max_quizzes=10, max_practical=20)
    theory = seed.course("CS202", has_practical=False, max_mid_term=30, max_final_exam=60, max_quizzes=10)
    seed.teach(doctor, lab)
    seed.teach(doctor, theory)
    seed.enroll(student, lab)
    seed.enroll(student, theory)
    return doctor, student, lab, theory


def test_compute_total_counts_practical_only_when_course_has_one():
    record = GradeRecord(mid_term=10.0, final_exam=40.0, quizzes=5.0, practical=15.0)

    assert compute_total(record, True) == 70.0
    assert compute_total(record, False) == 55.0


def test_compute_total_skips_null_components():
    record = GradeRecord(mid_term=None, final_exam=30.0, quizzes=None, practical=None)

    assert compute_total(record, True) == 30.0


def test_update_sets_components_and_total(db, graded_course):
    _, _, lab, _ = graded_course
    policy = GradeUpdatePolicy(db)

    record = policy.update_grade(
        "doctor@uni.edu",
        InstructorRole.DOCTOR,
        "CS201",
        GradeUpdate(student_email="student@uni.edu", mid_term=15, final_exam=45, quizzes=8, practical=18),
    )

    assert record.course_id == lab.id
    assert (record.mid_term, record.final_exam, record.quizzes, record.practical) == (15, 45, 8, 18)
    assert record.total == 86


def test_omitted_components_keep_their_values(db, graded_course):
    policy = GradeUpdatePolicy(db)
    policy.update_grade(
        "doctor@uni.edu",
        InstructorRole.DOCTOR,
        "CS201",
        GradeUpdate(student_email="student@uni.edu", mid_term=12, final_exam=40, quizzes=7, practical=16),
    )

    record = policy.update_grade(
        "doctor@uni.edu",
        InstructorRole.DOCTOR,
        "CS201",
        GradeUpdate(student_email="student@uni.edu", mid_term=18),
    )

    assert record.mid_term == 18
    assert record.final_exam == 40
    assert record.quizzes == 7
    assert record.practical == 16
    assert record.total == 18 + 40 + 7 + 16


def test_practical_ignored_on_course_without_practical(db, graded_course):
    policy = GradeUpdatePolicy(db)
    before = policy.update_grade(
        "doctor@uni.edu",
        InstructorRole.DOCTOR,
        "CS202",
        GradeUpdate(student_email="student@uni.edu", mid_term=20),
    )
    total_before = before.total

    record = policy.update_grade(
        "doctor@uni.edu",
        InstructorRole.DOCTOR,
        "CS202",
        GradeUpdate(student_email="student@uni.edu", practical=15),
    )

    assert record.practical == 0
    assert record.total == total_before == 20


def test_stored_practical_never_counts_on_course_without_practical(db, seed):
    doctor = seed.instructor("doctor@uni.edu")
    student = seed.student("student@uni.edu")
    course = seed.course("CS300", has_practical=False)
    seed.teach(doctor, course)
    seed.enroll(student, course, practical=25.0, total=0.0)

    record = GradeUpdatePolicy(db).update_grade(
        "doctor@uni.edu",
        InstructorRole.DOCTOR,
        "CS300",
        GradeUpdate(student_email="student@uni.edu", quizzes=5),
    )

    assert record.practical == 25.0
    assert record.total == 5.0


def test_total_matches_components_after_update_sequence(db, graded_course):
    policy = GradeUpdatePolicy(db)
    updates = [
        ("CS201", GradeUpdate(student_email="student@uni.edu", mid_term=10)),
        ("CS202", GradeUpdate(student_email="student@uni.edu", final_exam=55, practical=9)),
        ("CS201", GradeUpdate(student_email="student@uni.edu", practical=20, quizzes=3)),
        ("CS202", GradeUpdate(student_email="student@uni.edu", quizzes=10)),
        ("CS201", GradeUpdate(student_email="student@uni.edu", final_exam=33.5)),
    ]
    for course_code, update in updates:
        policy.update_grade("doctor@uni.edu", InstructorRole.DOCTOR, course_code, update)

    store = RecordStore(db)
    for course_code in ("CS201", "CS202"):
        record = store.find_grade_record("student@uni.edu", course_code)
        expected = record.mid_term + record.final_exam + record.quizzes
        if record.course.has_practical_component:
            expected += record.practical
        assert record.total == pytest.approx(expected)


def test_instructor_not_teaching_course_is_forbidden(db, seed, graded_course):
    seed.instructor("other@uni.edu")
    policy = GradeUpdatePolicy(db)

    with pytest.raises(ForbiddenError):
        policy.update_grade(
            "other@uni.edu",
            InstructorRole.DOCTOR,
            "CS201",
            GradeUpdate(student_email="student@uni.edu", mid_term=20),
        )

    record = RecordStore(db).find_grade_record("student@uni.edu", "CS201")
    assert record.mid_term == 0
    assert record.total == 0


def test_role_selects_taught_courses_collection(db, seed, graded_course):
    _, _, lab, _ = graded_course
    assistant = seed.instructor("assistant@uni.edu", role=AccountRole.ASSISTANT)
    seed.teach(assistant, lab, role=InstructorRole.ASSISTANT)
    policy = GradeUpdatePolicy(db)

    record = policy.update_grade(
        "assistant@uni.edu",
        InstructorRole.ASSISTANT,
        "CS201",
        GradeUpdate(student_email="student@uni.edu", quizzes=9),
    )
    assert record.total == 9

    with pytest.raises(ForbiddenError):
        policy.update_grade(
            "assistant@uni.edu",
            InstructorRole.ASSISTANT,
            "CS202",
            GradeUpdate(student_email="student@uni.edu", quizzes=9),
        )
    # A doctor account is not an assistant
    with pytest.raises(NotFoundError):
        policy.update_grade(
            "doctor@uni.edu",
            InstructorRole.ASSISTANT,
            "CS201",
            GradeUpdate(student_email="student@uni.edu", quizzes=9),
        )


def test_unregistered_student_is_not_found(db, seed, graded_course):
    seed.student("newcomer@uni.edu")

    with pytest.raises(NotFoundError):
        GradeUpdatePolicy(db).update_grade(
            "doctor@uni.edu",
            InstructorRole.DOCTOR,
            "CS201",
            GradeUpdate(student_email="newcomer@uni.edu", mid_term=5),
        )


def test_component_above_course_maximum_is_rejected(db, graded_course):
    policy = GradeUpdatePolicy(db, enforce_maximums=True)

    with pytest.raises(ValidationError) as exc_info:
        policy.update_grade(
            "doctor@uni.edu",
            InstructorRole.DOCTOR,
            "CS201",
            GradeUpdate(student_email="student@uni.edu", mid_term=10, quizzes=11),
        )

    assert exc_info.value.status_code == 422
    assert "quizzes" in exc_info.value.details
    record = RecordStore(db).find_grade_record("student@uni.edu", "CS201")
    assert record.mid_term == 0


def test_maximums_not_enforced_when_disabled(db, graded_course):
    policy = GradeUpdatePolicy(db, enforce_maximums=False)

    record = policy.update_grade(
        "doctor@uni.edu",
        InstructorRole.DOCTOR,
        "CS201",
        GradeUpdate(student_email="student@uni.edu", quizzes=11),
    )

    assert record.total == 11


def test_get_student_grades_for_taught_course(db, graded_course):
    student, record, course = GradeUpdatePolicy(db).get_student_grades(
        "doctor@uni.edu", InstructorRole.DOCTOR, "CS202", "student@uni.edu"
    )

    assert student.email == "student@uni.edu"
    assert course.code == "CS202"
    assert record.course_id == course.id


@pytest.mark.xfail(reason="concurrent edits of one grade record may lose an update", strict=True)
def test_concurrent_edits_keep_total_consistent(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'race.db'}")
    Base.metadata.create_all(engine)
    make_session = sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)

    with make_session() as setup:
        seed = Seeder(setup)
        doctor = seed.instructor("doctor@uni.edu")
        student = seed.student("student@uni.edu")
        course = seed.course("CS101")
        seed.teach(doctor, course)
        seed.enroll(student, course)
        setup.commit()

    first, second = make_session(), make_session()
    try:
        # Both editors load the record before either writes. Holding the rows
        # keeps them in each session's identity map, so the second edit works
        # on a stale copy.
        loaded_first = RecordStore(first).find_grade_record("student@uni.edu", "CS101")
        loaded_second = RecordStore(second).find_grade_record("student@uni.edu", "CS101")

        GradeUpdatePolicy(first).update_grade(
            "doctor@uni.edu", InstructorRole.DOCTOR, "CS101",
            GradeUpdate(student_email="student@uni.edu", mid_term=30),
        )
        first.commit()
        GradeUpdatePolicy(second).update_grade(
            "doctor@uni.edu", InstructorRole.DOCTOR, "CS101",
            GradeUpdate(student_email="student@uni.edu", quizzes=5),
        )
        second.commit()
        assert loaded_first is not loaded_second
    finally:
        first.close()
        second.close()

    with make_session() as check:
        record = RecordStore(check).find_grade_record("student@uni.edu", "CS101")
        assert record.total == record.mid_term + record.final_exam + record.quizzes
    engine.dispose()
