from models.student import Student
from models.teacher import Teacher
from models.classroom import Classroom
from models.repository import Repository
from models.school_records import SchoolRecords
from models.errors import DuplicateIdError, MalformedRecordError, RecordError

__all__ = [
    "Student",
    "Teacher",
    "Classroom",
    "Repository",
    "SchoolRecords",
    "DuplicateIdError",
    "MalformedRecordError",
    "RecordError",
]
