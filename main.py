"""Schulverwaltung — Haupt-CLI.

Verwendung:
  python main.py menu                              Interaktives Menü
  python main.py student add <id> <name> <alter> <kurs>
  python main.py student show|delete <id>
  python main.py student update <id> [--name] [--age] [--course]
  python main.py student list
  python main.py teacher add <id> <name> <fach>
  python main.py teacher show|delete|update|list ...
  python main.py class add <id> <name>
  python main.py class assign-teacher <klasse> <lehrer>
  python main.py class add-student|remove-student <klasse> <schüler>
  python main.py class show|delete|update|list ...
  python main.py config show|init

Daten liegen in students.txt, teachers.txt und classrooms.txt im
Datenverzeichnis (Standard: aktuelles Verzeichnis).
"""

import logging
import sys
from pathlib import Path
from typing import NoReturn, Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich import box

from config.manager import ConfigManager
from config.schema import AppConfig
from models.classroom import Classroom
from models.errors import DuplicateIdError
from models.school_records import SchoolRecords
from models.student import Student
from models.teacher import Teacher
from models.validation import validate_age, validate_id, validate_name
from storage.text_store import TextStore

console = Console()


class Session:
    """Konfiguration, Ablage und (bei Bedarf geladene) Datensätze eines Aufrufs."""

    def __init__(self, manager: ConfigManager, config: AppConfig) -> None:
        self.manager = manager
        self.config = config
        self.store = TextStore(config.storage)
        self._records: Optional[SchoolRecords] = None

    @property
    def records(self) -> SchoolRecords:
        if self._records is None:
            self._records, report = self.store.load()
            for msg in report.errors:
                console.print(f"[red]{escape(msg)}[/red]")
        return self._records

    def save(self) -> bool:
        report = self.store.save(self.records)
        for msg in report.errors:
            console.print(f"[red]Speichern fehlgeschlagen:[/red] {escape(msg)}")
        return report.ok


def _abort(message: str) -> NoReturn:
    console.print(f"[red]{message}[/red]")
    sys.exit(1)


def _check_id(session: Session, entity_id: int) -> None:
    if not validate_id(entity_id, session.config.validation):
        _abort(f"Ungültige ID {entity_id}: muss ≥ {session.config.validation.min_id} sein.")


def _check_text(value: str, label: str) -> str:
    if not validate_name(value):
        _abort(f"Ungültige Eingabe: {label} darf nicht leer sein.")
    return value.strip()


def _check_age(session: Session, age: int) -> None:
    rules = session.config.validation
    if not validate_age(age, rules):
        _abort(f"Ungültiges Alter {age}: erlaubt sind {rules.min_age}–{rules.max_age}.")


# ─── STUDENT ──────────────────────────────────────────────────────────────────

@click.group("student")
def cmd_student():
    """Schüler anlegen, anzeigen, ändern, löschen."""


@cmd_student.command("add")
@click.argument("student_id", type=int)
@click.argument("name")
@click.argument("age", type=int)
@click.argument("course")
@click.pass_obj
def student_add(session: Session, student_id: int, name: str, age: int, course: str):
    """Legt einen neuen Schüler an."""
    _check_id(session, student_id)
    name = _check_text(name, "Name")
    _check_age(session, age)
    course = _check_text(course, "Kurs")
    try:
        session.records.students.insert(
            Student(id=student_id, name=name, age=age, course=course))
    except DuplicateIdError:
        _abort(f"Schüler mit ID {student_id} existiert bereits.")
    session.save()
    console.print("[green]✓[/green] Schüler angelegt.")


@cmd_student.command("show")
@click.argument("student_id", type=int)
@click.pass_obj
def student_show(session: Session, student_id: int):
    """Zeigt einen Schüler an."""
    student = session.records.students.find_by_id(student_id)
    if student is None:
        _abort("Schüler nicht gefunden.")
    console.print(escape(student.get_details()))


@cmd_student.command("update")
@click.argument("student_id", type=int)
@click.option("--name", default=None, help="Neuer Name.")
@click.option("--age", type=int, default=None, help="Neues Alter.")
@click.option("--course", default=None, help="Neuer Kurs.")
@click.pass_obj
def student_update(session: Session, student_id: int, name: Optional[str],
                   age: Optional[int], course: Optional[str]):
    """Ändert Felder eines Schülers (nicht angegebene bleiben)."""
    student = session.records.students.find_by_id(student_id)
    if student is None:
        _abort("Schüler nicht gefunden.")
    if name is not None:
        student.name = _check_text(name, "Name")
    if age is not None:
        _check_age(session, age)
        student.age = age
    if course is not None:
        student.course = _check_text(course, "Kurs")
    session.save()
    console.print(f"[green]✓[/green] {escape(student.get_details())}")


@cmd_student.command("delete")
@click.argument("student_id", type=int)
@click.pass_obj
def student_delete(session: Session, student_id: int):
    """Löscht einen Schüler. Klassenzuordnungen bleiben als verwaiste Referenz stehen."""
    if not session.records.students.delete_by_id(student_id):
        _abort("Schüler nicht gefunden.")
    session.save()
    console.print("[green]✓[/green] Schüler gelöscht.")


@cmd_student.command("list")
@click.pass_obj
def student_list(session: Session):
    """Listet alle Schüler."""
    students = session.records.students.list_all()
    if not students:
        console.print("[dim]Keine Schüler vorhanden.[/dim]")
        return
    table = Table(title="Schüler", box=box.ROUNDED)
    table.add_column("ID", justify="right")
    table.add_column("Name", style="bold")
    table.add_column("Alter", justify="right")
    table.add_column("Kurs")
    for s in students:
        table.add_row(str(s.id), escape(s.name), str(s.age), escape(s.course))
    console.print(table)


# ─── TEACHER ──────────────────────────────────────────────────────────────────

@click.group("teacher")
def cmd_teacher():
    """Lehrkräfte anlegen, anzeigen, ändern, löschen."""


@cmd_teacher.command("add")
@click.argument("teacher_id", type=int)
@click.argument("name")
@click.argument("subject")
@click.pass_obj
def teacher_add(session: Session, teacher_id: int, name: str, subject: str):
    """Legt eine neue Lehrkraft an."""
    _check_id(session, teacher_id)
    name = _check_text(name, "Name")
    subject = _check_text(subject, "Fach")
    try:
        session.records.teachers.insert(
            Teacher(id=teacher_id, name=name, subject=subject))
    except DuplicateIdError:
        _abort(f"Lehrkraft mit ID {teacher_id} existiert bereits.")
    session.save()
    console.print("[green]✓[/green] Lehrkraft angelegt.")


@cmd_teacher.command("show")
@click.argument("teacher_id", type=int)
@click.pass_obj
def teacher_show(session: Session, teacher_id: int):
    """Zeigt eine Lehrkraft an."""
    teacher = session.records.teachers.find_by_id(teacher_id)
    if teacher is None:
        _abort("Lehrkraft nicht gefunden.")
    console.print(escape(teacher.get_details()))


@cmd_teacher.command("update")
@click.argument("teacher_id", type=int)
@click.option("--name", default=None, help="Neuer Name.")
@click.option("--subject", default=None, help="Neues Fach.")
@click.pass_obj
def teacher_update(session: Session, teacher_id: int, name: Optional[str],
                   subject: Optional[str]):
    """Ändert Felder einer Lehrkraft."""
    teacher = session.records.teachers.find_by_id(teacher_id)
    if teacher is None:
        _abort("Lehrkraft nicht gefunden.")
    if name is not None:
        teacher.name = _check_text(name, "Name")
    if subject is not None:
        teacher.subject = _check_text(subject, "Fach")
    session.save()
    console.print(f"[green]✓[/green] {escape(teacher.get_details())}")


@cmd_teacher.command("delete")
@click.argument("teacher_id", type=int)
@click.pass_obj
def teacher_delete(session: Session, teacher_id: int):
    """Löscht eine Lehrkraft. Klassen zeigen danach "keine Lehrkraft"."""
    if not session.records.teachers.delete_by_id(teacher_id):
        _abort("Lehrkraft nicht gefunden.")
    session.save()
    console.print("[green]✓[/green] Lehrkraft gelöscht.")


@cmd_teacher.command("list")
@click.pass_obj
def teacher_list(session: Session):
    """Listet alle Lehrkräfte."""
    teachers = session.records.teachers.list_all()
    if not teachers:
        console.print("[dim]Keine Lehrkräfte vorhanden.[/dim]")
        return
    table = Table(title="Lehrkräfte", box=box.ROUNDED)
    table.add_column("ID", justify="right")
    table.add_column("Name", style="bold")
    table.add_column("Fach")
    for t in teachers:
        table.add_row(str(t.id), escape(t.name), escape(t.subject))
    console.print(table)


# ─── CLASS ────────────────────────────────────────────────────────────────────

@click.group("class")
def cmd_class():
    """Klassen verwalten und mit Lehrkräften/Schülern verknüpfen."""


def _find_class(session: Session, class_id: int) -> Classroom:
    classroom = session.records.classrooms.find_by_id(class_id)
    if classroom is None:
        _abort("Klasse nicht gefunden.")
    return classroom


@cmd_class.command("add")
@click.argument("class_id", type=int)
@click.argument("name")
@click.pass_obj
def class_add(session: Session, class_id: int, name: str):
    """Legt eine neue Klasse an (z.B. "Math 101")."""
    _check_id(session, class_id)
    name = _check_text(name, "Klassenname")
    try:
        session.records.classrooms.insert(Classroom(id=class_id, class_name=name))
    except DuplicateIdError:
        _abort(f"Klasse mit ID {class_id} existiert bereits.")
    session.save()
    console.print("[green]✓[/green] Klasse angelegt.")


@cmd_class.command("show")
@click.argument("class_id", type=int)
@click.pass_obj
def class_show(session: Session, class_id: int):
    """Zeigt eine Klasse mit Lehrkraft und Schülern."""
    records = session.records
    classroom = _find_class(session, class_id)
    console.print(escape(records.class_info(classroom)))
    teacher = classroom.resolve_teacher(records.teachers)
    if teacher is not None:
        console.print(f"Lehrkraft: {escape(teacher.get_details())}")
    students = classroom.resolve_students(records.students)
    if students:
        console.print("Schüler in dieser Klasse:")
        for s in students:
            console.print(f"  - {escape(s.get_details())}")


@cmd_class.command("update")
@click.argument("class_id", type=int)
@click.option("--name", default=None, help="Neuer Klassenname.")
@click.pass_obj
def class_update(session: Session, class_id: int, name: Optional[str]):
    """Benennt eine Klasse um."""
    classroom = _find_class(session, class_id)
    if name is None:
        console.print("[dim]Keine Änderungen.[/dim]")
        return
    classroom.class_name = _check_text(name, "Klassenname")
    session.save()
    console.print("[green]✓[/green] Klassenname geändert.")


@cmd_class.command("delete")
@click.argument("class_id", type=int)
@click.pass_obj
def class_delete(session: Session, class_id: int):
    """Löscht eine Klasse."""
    if not session.records.classrooms.delete_by_id(class_id):
        _abort("Klasse nicht gefunden.")
    session.save()
    console.print("[green]✓[/green] Klasse gelöscht.")


@cmd_class.command("assign-teacher")
@click.argument("class_id", type=int)
@click.argument("teacher_id", type=int)
@click.pass_obj
def class_assign_teacher(session: Session, class_id: int, teacher_id: int):
    """Weist einer Klasse eine Lehrkraft zu (ersetzt eine bisherige)."""
    classroom = _find_class(session, class_id)
    if teacher_id not in session.records.teachers:
        _abort("Lehrkraft nicht gefunden.")
    classroom.set_teacher(teacher_id)
    session.save()
    console.print("[green]✓[/green] Lehrkraft zugewiesen.")


@cmd_class.command("clear-teacher")
@click.argument("class_id", type=int)
@click.pass_obj
def class_clear_teacher(session: Session, class_id: int):
    """Entfernt die Lehrkraft-Zuordnung einer Klasse."""
    classroom = _find_class(session, class_id)
    classroom.set_teacher(None)
    session.save()
    console.print("[green]✓[/green] Lehrkraft-Zuordnung entfernt.")


@cmd_class.command("add-student")
@click.argument("class_id", type=int)
@click.argument("student_id", type=int)
@click.pass_obj
def class_add_student(session: Session, class_id: int, student_id: int):
    """Nimmt einen Schüler in eine Klasse auf."""
    classroom = _find_class(session, class_id)
    if student_id not in session.records.students:
        _abort("Schüler nicht gefunden.")
    if not classroom.add_student(student_id):
        _abort("Schüler ist bereits in dieser Klasse.")
    session.save()
    console.print("[green]✓[/green] Schüler aufgenommen.")


@cmd_class.command("remove-student")
@click.argument("class_id", type=int)
@click.argument("student_id", type=int)
@click.pass_obj
def class_remove_student(session: Session, class_id: int, student_id: int):
    """Entfernt einen Schüler aus einer Klasse (unbekannte ID: keine Änderung)."""
    classroom = _find_class(session, class_id)
    classroom.remove_student(student_id)
    session.save()
    console.print("[green]✓[/green] Schüler aus der Klasse entfernt.")


@cmd_class.command("list")
@click.pass_obj
def class_list(session: Session):
    """Listet alle Klassen."""
    records = session.records
    classrooms = records.classrooms.list_all()
    if not classrooms:
        console.print("[dim]Keine Klassen vorhanden.[/dim]")
        return
    for c in classrooms:
        console.print(escape(records.class_info(c)))


# ─── MENU ─────────────────────────────────────────────────────────────────────

@click.command("menu")
@click.pass_obj
def cmd_menu(session: Session):
    """Interaktives Menü; speichert beim Beenden."""
    from menu import run_menu

    records = session.records
    console.print(Panel(
        f"[bold]{escape(session.config.school_name)}[/bold]\n\n{escape(records.summary())}",
        title="Schulverwaltung",
        border_style="cyan",
    ))
    run_menu(records, session.config.validation, console)
    if session.save():
        console.print("[green]✓[/green] Daten gespeichert. Auf Wiedersehen!")


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen oder anlegen."""


@cmd_config.command("show")
@click.pass_obj
def config_show(session: Session):
    """Zeigt die aktive Konfiguration an."""
    cfg = session.config
    table = Table(title=escape(cfg.school_name), box=box.ROUNDED)
    table.add_column("Parameter", style="bold")
    table.add_column("Wert")
    table.add_row("Datenverzeichnis", str(cfg.storage.data_dir))
    table.add_row("Schüler-Datei", str(cfg.storage.students_path))
    table.add_row("Lehrkraft-Datei", str(cfg.storage.teachers_path))
    table.add_row("Klassen-Datei", str(cfg.storage.classrooms_path))
    table.add_row("Platzhalter 'keine Lehrkraft'", escape(cfg.storage.no_teacher_sentinel))
    table.add_row("Alter", f"{cfg.validation.min_age}–{cfg.validation.max_age}")
    console.print(table)


@cmd_config.command("init")
@click.option("--force", is_flag=True, default=False, help="Bestehende Datei überschreiben.")
@click.pass_obj
def config_init(session: Session, force: bool):
    """Schreibt die aktive Konfiguration als YAML-Datei."""
    mgr = session.manager
    if not mgr.first_run_check() and not force:
        _abort(f"Konfiguration existiert bereits: {mgr.path} (--force zum Überschreiben)")
    path = mgr.save(session.config)
    console.print(f"[green]✓[/green] Konfiguration gespeichert: {path}")


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--data-dir", type=click.Path(file_okay=False, path_type=Path),
              default=None, help="Verzeichnis der Datendateien.")
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path),
              default=None, help="Pfad zur YAML-Konfiguration.")
@click.option("--verbose", "-v", is_flag=True, default=False,
              help="Ausführliche Log-Ausgabe.")
@click.pass_context
def cli(ctx: click.Context, data_dir: Optional[Path], config_path: Optional[Path],
        verbose: bool):
    """Schulverwaltung: Schüler, Lehrkräfte und Klassen.

    Starten Sie mit: python main.py menu
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    mgr = ConfigManager(config_path)
    try:
        config = mgr.load()
    except ValueError as e:
        _abort(escape(str(e)))
    if data_dir is not None:
        storage = config.storage.model_copy(update={"data_dir": data_dir})
        config = config.model_copy(update={"storage": storage})
    ctx.obj = Session(mgr, config)


def main():
    """Einstiegspunkt. Ohne Argumente startet das interaktive Menü."""
    if len(sys.argv) == 1:
        sys.argv.append("menu")
    cli()


# Befehle registrieren
cli.add_command(cmd_student)
cli.add_command(cmd_teacher)
cli.add_command(cmd_class)
cli.add_command(cmd_menu)
cli.add_command(cmd_config)


if __name__ == "__main__":
    main()
