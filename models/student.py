"""Datenmodell für einen Schüler (Pydantic v2)."""

from pydantic import BaseModel, ConfigDict, Field


class Student(BaseModel):
    """Ein eingeschriebener Schüler."""

    model_config = ConfigDict(validate_assignment=True)

    id: int = Field(frozen=True)   # Vom Aufrufer vergeben, nach dem Einfügen fix
    name: str
    age: int
    course: str                    # Freitext, z.B. "CS"

    def get_details(self) -> str:
        return (
            f"Student [ID={self.id}, Name={self.name}, "
            f"Age={self.age}, Course={self.course}]"
        )

    def __str__(self) -> str:
        return self.get_details()
