"""Textdatei-Ablage für Schüler, Lehrkräfte und Klassen.

Format (eine Zeile pro Datensatz, kein Kopf, Komma als Trenner):

    students.txt     id,name,age,course
    teachers.txt     id,name,subject
    classrooms.txt   id,className,teacherId|null,studentCount,studentId1,...,studentIdN

Felder werden über das csv-Modul geschrieben: nur Werte, die selbst ein Komma
oder Anführungszeichen enthalten, werden gequotet. Alle anderen Zeilen sehen
exakt so aus wie oben. Gelesen wird strikt zeilenweise: ein offenes
Anführungszeichen oder eine falsch kodierte Zeile betrifft nur diese Zeile.

Laden ist tolerant: fehlerhafte Zeilen werden übersprungen, unauflösbare
Lehrer-/Schüler-IDs in Klassenzeilen verworfen, eine fehlende Datei zählt als
"keine Datensätze". Die Ladereihenfolge Schüler → Lehrkräfte → Klassen ist
zwingend, da Klassenzeilen gegen die bereits geladenen Repositories auflösen.
"""

import csv
import logging
from pathlib import Path
from typing import Callable, Optional, TypeVar

from pydantic import BaseModel

from config.schema import StorageConfig
from models.classroom import Classroom
from models.errors import DuplicateIdError, MalformedRecordError
from models.repository import Repository
from models.school_records import SchoolRecords
from models.student import Student
from models.teacher import Teacher

logger = logging.getLogger(__name__)

E = TypeVar("E", Student, Teacher, Classroom)

STUDENT_FIELDS = 4
TEACHER_FIELDS = 3
CLASSROOM_MIN_FIELDS = 3


# ─── Berichte ─────────────────────────────────────────────────────────────────

class LoadReport(BaseModel):
    """Bericht über einen Ladevorgang."""
    students_loaded: int = 0
    teachers_loaded: int = 0
    classrooms_loaded: int = 0
    lines_skipped: int = 0
    missing_files: list[str] = []
    warnings: list[str] = []
    errors: list[str] = []      # I/O-Fehler: betroffene Datei gilt als leer

    @property
    def ok(self) -> bool:
        return not self.errors

    def print_rich(self) -> None:
        from rich.console import Console
        from rich.panel import Panel
        console = Console()
        lines = [f"[green]Schüler: {self.students_loaded}[/green]  "
                 f"[green]Lehrkräfte: {self.teachers_loaded}[/green]  "
                 f"[green]Klassen: {self.classrooms_loaded}[/green]"]
        if self.missing_files:
            lines.append(f"[dim]Nicht vorhanden: {', '.join(self.missing_files)}[/dim]")
        if self.warnings:
            lines.append("\n[yellow]Warnungen:[/yellow]")
            for w in self.warnings:
                lines.append(f"  [yellow]• {w}[/yellow]")
        if self.errors:
            lines.append("\n[red]Fehler:[/red]")
            for e in self.errors:
                lines.append(f"  [red]• {e}[/red]")
        console.print(Panel("\n".join(lines), title="Daten geladen", border_style="cyan"))


class SaveReport(BaseModel):
    """Bericht über einen Speichervorgang."""
    written: dict[str, int] = {}   # Dateipfad → geschriebene Zeilen
    errors: list[str] = []

    @property
    def ok(self) -> bool:
        return not self.errors

    def print_rich(self) -> None:
        from rich.console import Console
        console = Console()
        for path, count in self.written.items():
            console.print(f"[green]✓[/green] {count} Datensätze gespeichert: {path}")
        for e in self.errors:
            console.print(f"[red]✗ Speichern fehlgeschlagen:[/red] {e}")


# ─── Zeilen-Codecs ────────────────────────────────────────────────────────────

def _parse_int(value: str, what: str) -> int:
    try:
        return int(value.strip())
    except ValueError:
        raise MalformedRecordError(f"{what} ist keine Zahl: {value!r}")


def _one_line(value: str) -> str:
    """Ein Datensatz belegt genau eine Zeile: Umbrüche werden zu Leerzeichen."""
    return value.replace("\r\n", " ").replace("\r", " ").replace("\n", " ")


def encode_student(student: Student) -> list[str]:
    return [str(student.id), _one_line(student.name), str(student.age),
            _one_line(student.course)]


def decode_student(fields: list[str]) -> Student:
    if len(fields) != STUDENT_FIELDS:
        raise MalformedRecordError(
            f"{len(fields)} Felder statt {STUDENT_FIELDS} (id,name,age,course)")
    return Student(
        id=_parse_int(fields[0], "ID"),
        name=fields[1],
        age=_parse_int(fields[2], "Alter"),
        course=fields[3],
    )


def encode_teacher(teacher: Teacher) -> list[str]:
    return [str(teacher.id), _one_line(teacher.name), _one_line(teacher.subject)]


def decode_teacher(fields: list[str]) -> Teacher:
    if len(fields) != TEACHER_FIELDS:
        raise MalformedRecordError(
            f"{len(fields)} Felder statt {TEACHER_FIELDS} (id,name,subject)")
    return Teacher(
        id=_parse_int(fields[0], "ID"),
        name=fields[1],
        subject=fields[2],
    )


def encode_classroom(classroom: Classroom, sentinel: str = "null") -> list[str]:
    """Gespeichert werden die Referenzen wie sie stehen, auch verwaiste."""
    teacher_col = str(classroom.teacher_id) if classroom.teacher_id is not None else sentinel
    return [
        str(classroom.id),
        _one_line(classroom.class_name),
        teacher_col,
        str(len(classroom.student_ids)),
        *(str(sid) for sid in classroom.student_ids),
    ]


# ─── Ablage ───────────────────────────────────────────────────────────────────

class TextStore:
    """Liest und schreibt die drei Datendateien gemäß StorageConfig."""

    def __init__(self, config: Optional[StorageConfig] = None) -> None:
        self.config = config or StorageConfig()
        self._report = LoadReport()

    # ─── Laden ───

    def load(self, records: Optional[SchoolRecords] = None) -> tuple[SchoolRecords, LoadReport]:
        """Lädt alle drei Dateien, in fester Reihenfolge.

        Kein Fehler bricht den Vorgang ab; alles Übersprungene steht im Bericht.
        """
        records = records if records is not None else SchoolRecords()
        self._report = LoadReport()
        cfg = self.config

        self._report.students_loaded = self._load_file(
            cfg.students_path, records.students, decode_student)
        self._report.teachers_loaded = self._load_file(
            cfg.teachers_path, records.teachers, decode_teacher)
        self._report.classrooms_loaded = self._load_file(
            cfg.classrooms_path, records.classrooms,
            lambda fields: self._decode_classroom(fields, records))

        logger.info(
            f"Geladen: {self._report.students_loaded} Schüler, "
            f"{self._report.teachers_loaded} Lehrkräfte, "
            f"{self._report.classrooms_loaded} Klassen "
            f"({self._report.lines_skipped} Zeilen übersprungen)"
        )
        return records, self._report

    def _read_lines(self, path: Path) -> Optional[list[bytes]]:
        """Rohzeilen einer Datei; None wenn sie fehlt oder nicht lesbar ist."""
        if not path.exists():
            logger.info(f"{path} nicht vorhanden – keine Datensätze")
            self._report.missing_files.append(str(path))
            return None
        try:
            with open(path, "rb") as f:
                return f.read().splitlines()
        except OSError as e:
            msg = f"{path}: nicht lesbar ({e}) – als leer behandelt"
            logger.warning(msg)
            self._report.errors.append(msg)
            return None

    def _split_line(self, raw: bytes) -> list[str]:
        """Dekodiert und zerlegt genau eine Zeile; Anführungszeichen wirken nie zeilenübergreifend."""
        try:
            line = raw.decode(self.config.encoding)
        except UnicodeDecodeError as e:
            raise MalformedRecordError(f"ungültige Zeichenkodierung ({e.reason})")
        if not line.strip():
            return []
        try:
            return next(csv.reader([line]), [])
        except csv.Error as e:
            raise MalformedRecordError(f"nicht lesbar ({e})")

    def _load_file(self, path: Path, repo: Repository[E],
                   decode: Callable[[list[str]], E]) -> int:
        lines = self._read_lines(path)
        if lines is None:
            return 0
        loaded = 0
        for line_number, raw in enumerate(lines, start=1):
            try:
                fields = self._split_line(raw)
                if not fields:
                    continue  # Leerzeile
                repo.insert(decode(fields))
            except (MalformedRecordError, DuplicateIdError) as e:
                self._skip(path, line_number, str(e))
                continue
            loaded += 1
        return loaded

    def _skip(self, path: Path, line_number: int, reason: str) -> None:
        msg = f"{path.name}, Zeile {line_number}: übersprungen – {reason}"
        logger.warning(msg)
        self._report.warnings.append(msg)
        self._report.lines_skipped += 1

    def _note(self, msg: str) -> None:
        logger.warning(msg)
        self._report.warnings.append(msg)

    def _decode_classroom(self, fields: list[str], records: SchoolRecords) -> Classroom:
        """Dekodiert eine Klassenzeile und löst Lehrer-/Schüler-IDs auf.

        Nur die ersten drei Spalten sind Pflicht. Nicht auflösbare oder nicht
        lesbare Referenzen werden verworfen, die Klasse selbst bleibt erhalten.
        """
        if len(fields) < CLASSROOM_MIN_FIELDS:
            raise MalformedRecordError(
                f"{len(fields)} Felder, mindestens {CLASSROOM_MIN_FIELDS} nötig "
                f"(id,className,teacherId)")
        classroom = Classroom(
            id=_parse_int(fields[0], "ID"),
            class_name=fields[1],
        )

        teacher_col = fields[2].strip()
        if teacher_col != self.config.no_teacher_sentinel:
            try:
                teacher_id = _parse_int(teacher_col, "Lehrkraft-ID")
            except MalformedRecordError as e:
                self._note(f"Klasse {classroom.id}: {e} – keine Lehrkraft")
            else:
                if teacher_id in records.teachers:
                    classroom.set_teacher(teacher_id)
                else:
                    self._note(
                        f"Klasse {classroom.id}: Lehrkraft {teacher_id} "
                        f"nicht gefunden – keine Lehrkraft")

        if len(fields) > 3:
            id_fields = fields[4:]
            try:
                count = _parse_int(fields[3], "Schüleranzahl")
            except MalformedRecordError as e:
                self._note(f"Klasse {classroom.id}: {e} – lese alle Folgespalten")
            else:
                id_fields = id_fields[:max(count, 0)]
            for value in id_fields:
                try:
                    student_id = _parse_int(value, "Schüler-ID")
                except MalformedRecordError as e:
                    self._note(f"Klasse {classroom.id}: {e} – verworfen")
                    continue
                if student_id not in records.students:
                    self._note(
                        f"Klasse {classroom.id}: Schüler {student_id} "
                        f"nicht gefunden – verworfen")
                    continue
                classroom.add_student(student_id)
        return classroom

    # ─── Speichern ───

    def save(self, records: SchoolRecords) -> SaveReport:
        """Schreibt alle drei Dateien komplett neu (Schüler, Lehrkräfte, Klassen).

        Ein Fehler bei einer Datei hält die übrigen nicht auf.
        """
        cfg = self.config
        report = SaveReport()
        sentinel = cfg.no_teacher_sentinel
        plan = [
            (cfg.students_path, [encode_student(s) for s in records.students]),
            (cfg.teachers_path, [encode_teacher(t) for t in records.teachers]),
            (cfg.classrooms_path,
             [encode_classroom(c, sentinel) for c in records.classrooms]),
        ]
        for path, rows in plan:
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                with open(path, "w", encoding=cfg.encoding, newline="") as f:
                    writer = csv.writer(f, lineterminator="\n")
                    writer.writerows(rows)
            except OSError as e:
                msg = f"{path}: {e}"
                logger.warning(f"Speichern fehlgeschlagen – {msg}")
                report.errors.append(msg)
                continue
            report.written[str(path)] = len(rows)
        logger.info(
            f"Gespeichert: {len(report.written)} von {len(plan)} Dateien")
        return report
