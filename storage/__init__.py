from storage.text_store import (
    LoadReport,
    SaveReport,
    TextStore,
    decode_student,
    decode_teacher,
    encode_classroom,
    encode_student,
    encode_teacher,
)

__all__ = [
    "LoadReport",
    "SaveReport",
    "TextStore",
    "decode_student",
    "decode_teacher",
    "encode_classroom",
    "encode_student",
    "encode_teacher",
]
