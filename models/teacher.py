"""Datenmodell für eine Lehrkraft (Pydantic v2)."""

from pydantic import BaseModel, ConfigDict, Field


class Teacher(BaseModel):
    """Repräsentiert eine einzelne Lehrkraft."""

    model_config = ConfigDict(validate_assignment=True)

    id: int = Field(frozen=True)
    name: str                      # "Mr. X"
    subject: str                   # Unterrichtetes Fach, Freitext

    def get_details(self) -> str:
        return f"Teacher [ID={self.id}, Name={self.name}, Subject={self.subject}]"

    def __str__(self) -> str:
        return self.get_details()
