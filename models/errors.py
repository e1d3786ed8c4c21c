"""Fehlerarten der Datenhaltung (Repository + Dateiformat)."""


class RecordError(ValueError):
    """Basisklasse aller Datensatz-Fehler."""


class DuplicateIdError(RecordError):
    """Einfügen mit bereits vergebener ID. Es wird kein Datensatz angelegt."""

    def __init__(self, kind: str, entity_id: int) -> None:
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} mit ID {entity_id} existiert bereits.")


class MalformedRecordError(RecordError):
    """Eine einzelne Zeile einer Datendatei ist nicht lesbar.

    Wird nur beim Dekodieren einer Zeile ausgelöst und vom Loader abgefangen:
    die Zeile wird übersprungen, der Ladevorgang läuft weiter.
    """

    def __init__(self, message: str, line_number: int = 0) -> None:
        self.line_number = line_number
        super().__init__(message)
