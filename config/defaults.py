from pathlib import Path
from typing import Optional

from config.schema import AppConfig, StorageConfig, ValidationConfig


def default_storage(data_dir: Optional[Path] = None) -> StorageConfig:
    """Standard-Ablage: students.txt / teachers.txt / classrooms.txt im Arbeitsverzeichnis."""
    return StorageConfig(data_dir=Path(data_dir) if data_dir else Path("."))


def default_app_config() -> AppConfig:
    """Vollständige Default-Konfiguration.

    Altersgrenzen 16–100 und IDs ab 1 entsprechen den Regeln der
    bisherigen Eingabemaske.
    """
    return AppConfig(
        school_name="Muster-College",
        storage=default_storage(),
        validation=ValidationConfig(min_age=16, max_age=100, min_id=1),
    )
