"""Datenmodell für eine Klasse mit Lehrer- und Schülerverknüpfungen (Pydantic v2)."""

from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.student import Student
from models.teacher import Teacher

if TYPE_CHECKING:
    from models.repository import Repository


class Classroom(BaseModel):
    """Eine Klasse (z.B. "CS101") mit höchstens einer Lehrkraft und beliebig vielen Schülern.

    Lehrkraft und Schüler werden NUR über ihre ID referenziert (schwache Referenz).
    Die Klasse besitzt die Datensätze nicht: wird ein Schüler oder eine Lehrkraft
    gelöscht, bleibt die ID hier stehen und wird bei der Anzeige als "nicht vorhanden"
    behandelt.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: int = Field(frozen=True)
    class_name: str
    teacher_id: Optional[int] = None           # None = keine Lehrkraft zugewiesen
    student_ids: list[int] = Field(default_factory=list)  # Reihenfolge = Einfügereihenfolge

    @field_validator("student_ids")
    @classmethod
    def _drop_duplicates(cls, v: list[int]) -> list[int]:
        return list(dict.fromkeys(v))

    # ─── Verknüpfungen ───

    def set_teacher(self, teacher_id: Optional[int]) -> None:
        """Ersetzt die Lehrkraft-Referenz ohne Prüfung (None entfernt sie)."""
        self.teacher_id = teacher_id

    def has_student(self, student_id: int) -> bool:
        return student_id in self.student_ids

    def add_student(self, student_id: int) -> bool:
        """Hängt eine Schüler-ID an.

        Ist die ID bereits in der Klasse, passiert nichts und es wird False
        zurückgegeben ("bereits in der Klasse").
        """
        if self.has_student(student_id):
            return False
        self.student_ids.append(student_id)
        return True

    def remove_student(self, student_id: int) -> bool:
        """Entfernt alle Einträge mit dieser ID. Unbekannte ID: stiller No-op."""
        before = len(self.student_ids)
        self.student_ids[:] = [sid for sid in self.student_ids if sid != student_id]
        return len(self.student_ids) != before

    # ─── Auflösung ───

    def resolve_teacher(self, teachers: "Repository[Teacher]") -> Optional[Teacher]:
        """Aktuelle Lehrkraft oder None (nicht gesetzt oder inzwischen gelöscht)."""
        if self.teacher_id is None:
            return None
        return teachers.find_by_id(self.teacher_id)

    def resolve_students(self, students: "Repository[Student]") -> list[Student]:
        """Alle noch existierenden Schüler in gespeicherter Reihenfolge."""
        resolved = []
        for sid in self.student_ids:
            student = students.find_by_id(sid)
            if student is not None:
                resolved.append(student)
        return resolved

    def get_info(self, teachers: "Repository[Teacher]",
                 students: "Repository[Student]") -> str:
        """Kurzbeschreibung, bei jedem Aufruf neu aus den Referenzen berechnet.

        Verwaiste Schüler-IDs zählen nicht mit.
        """
        teacher = self.resolve_teacher(teachers)
        teacher_name = teacher.name if teacher is not None else "None"
        count = len(self.resolve_students(students))
        return (
            f"Classroom [ID={self.id}, Name={self.class_name}, "
            f"Teacher={teacher_name}, Students Count={count}]"
        )
