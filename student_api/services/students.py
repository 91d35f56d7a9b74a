import logging
from typing import Sequence

from student_api.core.errors import DuplicateRecord, NotFound
from student_api.db.models import Student
from student_api.schemas import StudentCreate, StudentFields, StudentUpdate
from student_api.services.repository import StudentRepository

logger = logging.getLogger(__name__)

# every field a PUT overwrites; id is never among them
MUTABLE_FIELDS = ("name", "email", "course", "age", "phone_number", "enrolled")


def _copy_fields(target: Student, source: StudentFields) -> None:
    for name in MUTABLE_FIELDS:
        setattr(target, name, getattr(source, name))


class StudentService:
    def __init__(self, repository: StudentRepository):
        self._repo = repository

    async def list_students(self) -> Sequence[Student]:
        return await self._repo.find_all()

    async def get_student(self, student_id: int) -> Student:
        student = await self._repo.find_by_id(student_id)
        if student is None:
            raise NotFound(f"Student {student_id} not found")
        return student

    async def create_student(self, data: StudentCreate) -> Student:
        if await self._repo.find_by_id(data.id) is not None:
            raise DuplicateRecord(f"Student {data.id} already exists")
        student = Student(id=data.id)
        _copy_fields(student, data)
        created = await self._repo.save(student)
        logger.info("Created student %s", created.id)
        return created

    async def update_student(self, student_id: int, data: StudentUpdate) -> Student:
        """Overwrite every mutable field of an existing record. Last writer wins."""
        student = await self.get_student(student_id)
        _copy_fields(student, data)
        updated = await self._repo.save(student)
        logger.info("Updated student %s", student_id)
        return updated

    async def delete_student(self, student_id: int) -> None:
        await self._repo.delete_by_id(student_id)
        logger.info("Deleted student %s", student_id)
