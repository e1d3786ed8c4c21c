"""Interaktives Menü (Schüler / Lehrkräfte / Klassen).

Arbeitet direkt auf den Repositories eines SchoolRecords-Objekts; Speichern
übernimmt der Aufrufer nach dem Verlassen des Menüs.
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import IntPrompt, Prompt

from config.schema import ValidationConfig
from models.classroom import Classroom
from models.errors import DuplicateIdError
from models.school_records import SchoolRecords
from models.student import Student
from models.teacher import Teacher
from models.validation import validate_age, validate_id, validate_name


class Menu:
    def __init__(self, records: SchoolRecords, rules: ValidationConfig,
                 console: Console) -> None:
        self.records = records
        self.rules = rules
        self.console = console

    # ─── Eingabe ───

    def _ask_id(self, label: str) -> int:
        # IntPrompt fragt bei Nicht-Zahlen selbst erneut nach
        return IntPrompt.ask(label, console=self.console)

    def _ask_text(self, label: str) -> Optional[str]:
        value = Prompt.ask(label, default="", show_default=False,
                           console=self.console).strip()
        if not validate_name(value):
            self._error(f"Ungültige Eingabe: {label} darf nicht leer sein.")
            return None
        return value

    def _ask_optional(self, label: str) -> str:
        return Prompt.ask(f"{label} (Enter = unverändert)", default="",
                          show_default=False, console=self.console).strip()

    def _ok(self, msg: str) -> None:
        self.console.print(f"[green]✓[/green] {msg}")

    def _error(self, msg: str) -> None:
        self.console.print(f"[red]{msg}[/red]")

    # ─── Hauptmenü ───

    def run(self) -> None:
        while True:
            self.console.print()
            self.console.print(Panel("[bold]Hauptmenü[/bold]", border_style="cyan"))
            self.console.print("  [bold]1.[/bold] Schüler verwalten")
            self.console.print("  [bold]2.[/bold] Lehrkräfte verwalten")
            self.console.print("  [bold]3.[/bold] Klassen verwalten")
            self.console.print("  [bold]4.[/bold] Speichern & Beenden")

            choice = Prompt.ask("\nAuswahl", default="4", console=self.console)
            if choice == "1":
                self._students_menu()
            elif choice == "2":
                self._teachers_menu()
            elif choice == "3":
                self._classes_menu()
            elif choice == "4":
                break
            else:
                self._error("Ungültige Auswahl.")

    # ─── Schüler ───

    def _students_menu(self) -> None:
        self.console.print("\n[1] Anlegen  [2] Anzeigen  [3] Ändern  "
                           "[4] Löschen  [5] Alle auflisten  [0] Zurück")
        sub = Prompt.ask("Auswahl", default="0", console=self.console)
        repo = self.records.students
        if sub == "1":
            sid = self._ask_id("Schüler-ID")
            if not validate_id(sid, self.rules):
                self._error("Ungültige ID.")
                return
            if sid in repo:
                self._error("Schüler mit dieser ID existiert bereits.")
                return
            name = self._ask_text("Name")
            if name is None:
                return
            age = IntPrompt.ask("Alter", console=self.console)
            if not validate_age(age, self.rules):
                self._error(f"Ungültiges Alter: erlaubt sind "
                            f"{self.rules.min_age}–{self.rules.max_age}.")
                return
            course = self._ask_text("Kurs")
            if course is None:
                return
            repo.insert(Student(id=sid, name=name, age=age, course=course))
            self._ok("Schüler angelegt.")
        elif sub == "2":
            student = repo.find_by_id(self._ask_id("Schüler-ID"))
            if student is None:
                self._error("Schüler nicht gefunden.")
            else:
                self.console.print(escape(student.get_details()))
        elif sub == "3":
            student = repo.find_by_id(self._ask_id("Schüler-ID"))
            if student is None:
                self._error("Schüler nicht gefunden.")
                return
            self.console.print(f"Aktuell: {escape(student.get_details())}")
            name = self._ask_optional("Neuer Name")
            if name:
                student.name = name
            age = self._ask_optional("Neues Alter")
            if age:
                try:
                    new_age = int(age)
                except ValueError:
                    self._error("Ungültiges Alter. Alter bleibt unverändert.")
                else:
                    if validate_age(new_age, self.rules):
                        student.age = new_age
                    else:
                        self._error("Ungültiges Alter. Alter bleibt unverändert.")
            course = self._ask_optional("Neuer Kurs")
            if course:
                student.course = course
            self._ok("Schüler geändert.")
        elif sub == "4":
            if repo.delete_by_id(self._ask_id("Schüler-ID")):
                self._ok("Schüler gelöscht.")
            else:
                self._error("Schüler nicht gefunden.")
        elif sub == "5":
            self._list(repo.list_all(), "Keine Schüler vorhanden.")

    # ─── Lehrkräfte ───

    def _teachers_menu(self) -> None:
        self.console.print("\n[1] Anlegen  [2] Anzeigen  [3] Ändern  "
                           "[4] Löschen  [5] Alle auflisten  [0] Zurück")
        sub = Prompt.ask("Auswahl", default="0", console=self.console)
        repo = self.records.teachers
        if sub == "1":
            tid = self._ask_id("Lehrkraft-ID")
            if not validate_id(tid, self.rules):
                self._error("Ungültige ID.")
                return
            name = self._ask_text("Name")
            subject = self._ask_text("Fach") if name is not None else None
            if name is None or subject is None:
                return
            try:
                repo.insert(Teacher(id=tid, name=name, subject=subject))
            except DuplicateIdError:
                self._error("Lehrkraft mit dieser ID existiert bereits.")
                return
            self._ok("Lehrkraft angelegt.")
        elif sub == "2":
            teacher = repo.find_by_id(self._ask_id("Lehrkraft-ID"))
            if teacher is None:
                self._error("Lehrkraft nicht gefunden.")
            else:
                self.console.print(escape(teacher.get_details()))
        elif sub == "3":
            teacher = repo.find_by_id(self._ask_id("Lehrkraft-ID"))
            if teacher is None:
                self._error("Lehrkraft nicht gefunden.")
                return
            self.console.print(f"Aktuell: {escape(teacher.get_details())}")
            name = self._ask_optional("Neuer Name")
            if name:
                teacher.name = name
            subject = self._ask_optional("Neues Fach")
            if subject:
                teacher.subject = subject
            self._ok("Lehrkraft geändert.")
        elif sub == "4":
            if repo.delete_by_id(self._ask_id("Lehrkraft-ID")):
                self._ok("Lehrkraft gelöscht.")
            else:
                self._error("Lehrkraft nicht gefunden.")
        elif sub == "5":
            self._list(repo.list_all(), "Keine Lehrkräfte vorhanden.")

    # ─── Klassen ───

    def _classes_menu(self) -> None:
        self.console.print("\n[1] Anlegen  [2] Anzeigen  [3] Umbenennen  [4] Löschen\n"
                           "[5] Lehrkraft zuweisen  [6] Schüler aufnehmen  "
                           "[7] Schüler entfernen  [8] Alle auflisten  [0] Zurück")
        sub = Prompt.ask("Auswahl", default="0", console=self.console)
        records = self.records
        repo = records.classrooms
        if sub == "1":
            cid = self._ask_id("Klassen-ID")
            if not validate_id(cid, self.rules):
                self._error("Ungültige ID.")
                return
            if cid in repo:
                self._error("Klasse mit dieser ID existiert bereits.")
                return
            name = self._ask_text("Klassenname (z.B. Math 101)")
            if name is None:
                return
            repo.insert(Classroom(id=cid, class_name=name))
            self._ok("Klasse angelegt.")
        elif sub == "4":
            if repo.delete_by_id(self._ask_id("Klassen-ID")):
                self._ok("Klasse gelöscht.")
            else:
                self._error("Klasse nicht gefunden.")
        elif sub == "8":
            if not len(repo):
                self.console.print("[dim]Keine Klassen vorhanden.[/dim]")
            for c in repo:
                self.console.print(escape(records.class_info(c)))
        elif sub in ("2", "3", "5", "6", "7"):
            classroom = repo.find_by_id(self._ask_id("Klassen-ID"))
            if classroom is None:
                self._error("Klasse nicht gefunden.")
                return
            self._class_action(sub, classroom)

    def _class_action(self, sub: str, classroom: Classroom) -> None:
        records = self.records
        if sub == "2":
            self.console.print(escape(records.class_info(classroom)))
            teacher = classroom.resolve_teacher(records.teachers)
            if teacher is not None:
                self.console.print(f"Lehrkraft: {escape(teacher.get_details())}")
            for s in classroom.resolve_students(records.students):
                self.console.print(f"  - {escape(s.get_details())}")
        elif sub == "3":
            name = self._ask_optional("Neuer Klassenname")
            if name:
                classroom.class_name = name
                self._ok("Klassenname geändert.")
            else:
                self.console.print("[dim]Keine Änderungen.[/dim]")
        elif sub == "5":
            tid = self._ask_id("Lehrkraft-ID")
            if tid not in records.teachers:
                self._error("Lehrkraft nicht gefunden.")
                return
            classroom.set_teacher(tid)
            self._ok("Lehrkraft zugewiesen.")
        elif sub == "6":
            sid = self._ask_id("Schüler-ID")
            if sid not in records.students:
                self._error("Schüler nicht gefunden.")
            elif not classroom.add_student(sid):
                self._error("Schüler ist bereits in dieser Klasse.")
            else:
                self._ok("Schüler aufgenommen.")
        elif sub == "7":
            classroom.remove_student(self._ask_id("Schüler-ID"))
            self._ok("Schüler aus der Klasse entfernt.")

    def _list(self, entities: list, empty_message: str) -> None:
        if not entities:
            self.console.print(f"[dim]{empty_message}[/dim]")
        for entity in entities:
            self.console.print(escape(entity.get_details()))


def run_menu(records: SchoolRecords, rules: ValidationConfig,
             console: Optional[Console] = None) -> None:
    Menu(records, rules, console or Console()).run()
