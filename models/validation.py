"""Feldprüfungen für Benutzereingaben.

Werden nur von der Kommandozeile benutzt; Repository und Dateiformat
übernehmen Werte so, wie sie übergeben werden.
"""

from typing import Optional

from config.schema import ValidationConfig


def validate_name(text: Optional[str]) -> bool:
    """Name, Kurs, Fach, Klassenname: nicht leer nach strip()."""
    return text is not None and bool(text.strip())


def validate_age(age: int, rules: Optional[ValidationConfig] = None) -> bool:
    rules = rules or ValidationConfig()
    return rules.min_age <= age <= rules.max_age


def validate_id(entity_id: int, rules: Optional[ValidationConfig] = None) -> bool:
    rules = rules or ValidationConfig()
    return entity_id >= rules.min_id
