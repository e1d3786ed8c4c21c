"""SchoolRecords: die drei Repositories eines Laufs in einem Objekt."""

from models.classroom import Classroom
from models.repository import Repository
from models.student import Student
from models.teacher import Teacher


class SchoolRecords:
    """Einmal beim Programmstart erzeugt und an alle Komponenten weitergereicht."""

    def __init__(self) -> None:
        self.students: Repository[Student] = Repository("Student")
        self.teachers: Repository[Teacher] = Repository("Teacher")
        self.classrooms: Repository[Classroom] = Repository("Classroom")

    # ─── Übersicht ───

    def summary(self) -> str:
        """Kurze Übersicht über den Datenbestand."""
        dangling = sum(
            len(c.student_ids) - len(c.resolve_students(self.students))
            for c in self.classrooms
        )
        missing_teachers = sum(
            1 for c in self.classrooms
            if c.teacher_id is not None and c.resolve_teacher(self.teachers) is None
        )
        lines = [
            f"Schüler: {len(self.students)}",
            f"Lehrkräfte: {len(self.teachers)}",
            f"Klassen: {len(self.classrooms)}",
            f"Verwaiste Schüler-Referenzen: {dangling}" if dangling else "",
            f"Verwaiste Lehrkraft-Referenzen: {missing_teachers}" if missing_teachers else "",
        ]
        return "\n".join(line for line in lines if line)

    def class_info(self, classroom: Classroom) -> str:
        return classroom.get_info(self.teachers, self.students)
