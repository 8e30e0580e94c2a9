import pytest

from gradebook.core.exceptions import NotFoundError
from gradebook.models import AccountRole, InstructorRole
from gradebook.services.record_store import RecordStore


def test_find_student_only_returns_students(db, seed):
    seed.student("student@uni.edu")
    seed.instructor("doctor@uni.edu")
    store = RecordStore(db)

    assert store.find_student("student@uni.edu").role == AccountRole.STUDENT
    with pytest.raises(NotFoundError):
        store.find_student("doctor@uni.edu")
    with pytest.raises(NotFoundError):
        store.find_student("ghost@uni.edu")


def test_find_course_is_scoped_to_faculty(db, seed):
    engineering = seed.course("GEN101", faculty="Engineering")
    science = seed.course("GEN101", faculty="Science")
    store = RecordStore(db)

    assert store.find_course("GEN101", "Engineering").id == engineering.id
    assert store.find_course("GEN101", "Science").id == science.id
    with pytest.raises(NotFoundError):
        store.find_course("GEN101", "Arts")


def test_find_grade_record_resolves_code_in_student_faculty(db, seed):
    student = seed.student("student@uni.edu", faculty="Science")
    seed.course("GEN101", faculty="Engineering")
    science = seed.course("GEN101", faculty="Science")
    seed.enroll(student, science, mid_term=12.0)

    record = RecordStore(db).find_grade_record("student@uni.edu", "GEN101")

    assert record.course_id == science.id
    assert record.mid_term == 12.0


def test_find_grade_record_missing_registration(db, seed):
    seed.student("student@uni.edu")
    seed.course("CS101")

    with pytest.raises(NotFoundError):
        RecordStore(db).find_grade_record("student@uni.edu", "CS101")


def test_list_grade_records_filters(db, seed):
    student = seed.student("student@uni.edu")
    seed.enroll(student, seed.course("CS201", semester=2))
    seed.enroll(student, seed.course("CS101", semester=1))
    seed.enroll(student, seed.course("CS102", semester=1))
    store = RecordStore(db)

    everything = store.list_grade_records("student@uni.edu")
    first_semester = store.list_grade_records("student@uni.edu", semester=1)
    one_course = store.list_grade_records("student@uni.edu", course_code="CS201")

    assert [course.code for _, course in everything] == ["CS101", "CS102", "CS201"]
    assert [course.code for _, course in first_semester] == ["CS101", "CS102"]
    assert [course.code for _, course in one_course] == ["CS201"]
    for record, course in everything:
        assert record.course_id == course.id


def test_list_grade_records_unknown_student(db):
    with pytest.raises(NotFoundError):
        RecordStore(db).list_grade_records("ghost@uni.edu")


def test_list_roster(db, seed):
    course = seed.course("CS101")
    seed.course("CS102")
    for email in ("b@uni.edu", "a@uni.edu"):
        seed.enroll(seed.student(email), course)
    seed.student("c@uni.edu")
    store = RecordStore(db)

    roster = store.list_roster("CS101", "Engineering")

    assert [s.email for s in roster] == ["a@uni.edu", "b@uni.edu"]
    assert store.list_roster("CS102", "Engineering") == []
    with pytest.raises(NotFoundError):
        store.list_roster("CS999", "Engineering")


def test_list_taught_courses_by_role(db, seed):
    doctor = seed.instructor("doctor@uni.edu")
    assistant = seed.instructor("assistant@uni.edu", role=AccountRole.ASSISTANT)
    cs101 = seed.course("CS101")
    cs102 = seed.course("CS102")
    seed.teach(doctor, cs102)
    seed.teach(doctor, cs101)
    seed.teach(assistant, cs101, role=InstructorRole.ASSISTANT)
    store = RecordStore(db)

    assert [c.code for c in store.list_taught_courses("doctor@uni.edu", InstructorRole.DOCTOR)] == ["CS101", "CS102"]
    assert [c.code for c in store.list_taught_courses("assistant@uni.edu", InstructorRole.ASSISTANT)] == ["CS101"]
    with pytest.raises(NotFoundError):
        store.list_taught_courses("assistant@uni.edu", InstructorRole.DOCTOR)
