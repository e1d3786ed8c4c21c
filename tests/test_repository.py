"""Tests für das generische Repository und die Eingabeprüfung."""

import pytest

from config.schema import ValidationConfig
from models.errors import DuplicateIdError
from models.repository import Repository
from models.student import Student
from models.teacher import Teacher
from models.validation import validate_age, validate_id, validate_name


@pytest.fixture
def students() -> Repository[Student]:
    repo: Repository[Student] = Repository("Student")
    repo.insert(Student(id=1, name="Ann", age=20, course="CS"))
    repo.insert(Student(id=2, name="Bob", age=22, course="Math"))
    return repo


class TestRepository:
    def test_insert_then_find(self):
        repo: Repository[Teacher] = Repository("Teacher")
        t = Teacher(id=10, name="Mr. X", subject="Math")
        assert repo.insert(t) is t
        assert repo.find_by_id(10) == Teacher(id=10, name="Mr. X", subject="Math")

    def test_find_returns_live_handle(self, students):
        """Änderungen über das gefundene Objekt wirken direkt im Repository."""
        students.find_by_id(1).course = "EE"
        assert students.find_by_id(1).course == "EE"

    def test_find_missing_returns_none(self, students):
        assert students.find_by_id(99) is None

    def test_duplicate_rejected_keeps_first(self, students):
        with pytest.raises(DuplicateIdError) as exc:
            students.insert(Student(id=1, name="Clone", age=30, course="X"))
        assert exc.value.entity_id == 1
        assert exc.value.kind == "Student"
        assert len(students) == 2
        assert students.find_by_id(1).name == "Ann"

    def test_delete(self, students):
        assert students.delete_by_id(1) is True
        assert students.find_by_id(1) is None
        assert students.ids() == [2]

    def test_delete_absent_is_noop(self, students):
        before = students.list_all()
        assert students.delete_by_id(99) is False
        assert students.list_all() == before

    def test_list_insertion_order(self):
        repo: Repository[Student] = Repository("Student")
        for sid in (3, 1, 2):
            repo.insert(Student(id=sid, name=f"S{sid}", age=18, course="X"))
        assert [s.id for s in repo.list_all()] == [3, 1, 2]
        assert [s.id for s in repo] == [3, 1, 2]

    def test_reinsert_after_delete_goes_to_end(self, students):
        students.delete_by_id(1)
        students.insert(Student(id=1, name="Ann", age=20, course="CS"))
        assert students.ids() == [2, 1]

    def test_contains_and_len(self, students):
        assert 1 in students
        assert 3 not in students
        assert len(students) == 2
        students.clear()
        assert len(students) == 0


class TestValidation:
    def test_validate_name(self):
        assert validate_name("Ann")
        assert not validate_name("")
        assert not validate_name("   ")
        assert not validate_name(None)

    def test_validate_age_default_range(self):
        assert validate_age(16)
        assert validate_age(100)
        assert not validate_age(15)
        assert not validate_age(101)

    def test_validate_age_custom_rules(self):
        rules = ValidationConfig(min_age=6, max_age=19)
        assert validate_age(6, rules)
        assert not validate_age(20, rules)

    def test_validate_id(self):
        assert validate_id(1)
        assert not validate_id(0)
        assert not validate_id(-3)
