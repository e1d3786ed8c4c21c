from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator


# ─── DATEIABLAGE ───

class StorageConfig(BaseModel):
    """Wo und wie die drei Datendateien abgelegt werden."""
    # Verzeichnis der Datendateien (Standard: aktuelles Arbeitsverzeichnis)
    data_dir: Path = Field(Path("."),
        description="Verzeichnis der Datendateien")
    # Dateiname für Schüler (id,name,age,course)
    students_file: str = Field("students.txt",
        description="Datei für Schüler")
    # Dateiname für Lehrkräfte (id,name,subject)
    teachers_file: str = Field("teachers.txt",
        description="Datei für Lehrkräfte")
    # Dateiname für Klassen (id,className,teacherId|null,studentCount,ids...)
    classrooms_file: str = Field("classrooms.txt",
        description="Datei für Klassen")
    # Platzhalter in der Lehrkraft-Spalte, wenn keine Lehrkraft zugewiesen ist
    no_teacher_sentinel: str = Field("null",
        description="Platzhalter für 'keine Lehrkraft'")
    # Zeichenkodierung der Dateien
    encoding: str = Field("utf-8")

    @field_validator("no_teacher_sentinel")
    @classmethod
    def _sentinel_not_numeric(cls, v: str) -> str:
        if not v or v.strip().lstrip("-").isdigit():
            raise ValueError(
                f"Platzhalter '{v}' darf nicht leer oder eine Zahl sein")
        return v

    @property
    def students_path(self) -> Path:
        return self.data_dir / self.students_file

    @property
    def teachers_path(self) -> Path:
        return self.data_dir / self.teachers_file

    @property
    def classrooms_path(self) -> Path:
        return self.data_dir / self.classrooms_file


# ─── EINGABEPRÜFUNG ───

class ValidationConfig(BaseModel):
    """Regeln für Benutzereingaben (nur Kommandozeile)."""
    # Mindestalter eines Schülers
    min_age: int = Field(16, ge=0)
    # Höchstalter eines Schülers
    max_age: int = Field(100, ge=1)
    # Kleinste erlaubte ID
    min_id: int = Field(1)

    @model_validator(mode='after')
    def _check_age_bounds(self):
        if self.min_age > self.max_age:
            raise ValueError(
                f"min_age ({self.min_age}) > max_age ({self.max_age})")
        return self


# ─── GESAMT-CONFIG ───

class AppConfig(BaseModel):
    """Gesamtkonfiguration der Schulverwaltung."""
    # Name der Schule (nur Anzeige)
    school_name: str = Field("Muster-College",
        description="Name der Schule")
    # Dateiablage
    storage: StorageConfig = Field(default_factory=StorageConfig)
    # Eingabeprüfung
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
