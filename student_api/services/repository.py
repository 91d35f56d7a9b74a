"""Persistence boundary for student records.

``StudentRepository`` is the capability set the record service depends on;
``SqlStudentRepository`` backs it with an async SQLAlchemy session. Every
write commits on its own, so each record change is atomic and there are no
multi-record transactions.
"""
from __future__ import annotations

import logging
from typing import Protocol, Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from student_api.core.errors import DuplicateRecord, StorageError
from student_api.db.models import Student

logger = logging.getLogger(__name__)


class StudentRepository(Protocol):
    async def find_all(self) -> Sequence[Student]: ...

    async def find_by_id(self, student_id: int) -> Student | None: ...

    async def save(self, student: Student) -> Student: ...

    async def delete_by_id(self, student_id: int) -> None: ...


class SqlStudentRepository:
    def __init__(self, session: AsyncSession):
        self._session = session

    async def find_all(self) -> Sequence[Student]:
        try:
            res = await self._session.execute(select(Student).order_by(Student.id))
        except SQLAlchemyError as e:
            logger.error("find_all failed: %s", e)
            raise StorageError() from e
        return res.scalars().all()

    async def find_by_id(self, student_id: int) -> Student | None:
        try:
            return await self._session.get(Student, student_id)
        except SQLAlchemyError as e:
            logger.error("find_by_id(%s) failed: %s", student_id, e)
            raise StorageError() from e

    async def save(self, student: Student) -> Student:
        self._session.add(student)
        try:
            await self._session.commit()
        except IntegrityError as e:
            await self._session.rollback()
            raise DuplicateRecord("A student with this id or email already exists") from e
        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.error("save(id=%s) failed: %s", student.id, e)
            raise StorageError() from e
        return student

    async def delete_by_id(self, student_id: int) -> None:
        try:
            await self._session.execute(delete(Student).where(Student.id == student_id))
            await self._session.commit()
        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.error("delete_by_id(%s) failed: %s", student_id, e)
            raise StorageError() from e
