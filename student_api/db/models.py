# student_api/db/models.py
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import String, Integer, Boolean


class Base(DeclarativeBase):
    pass


class Student(Base):
    __tablename__ = "students"

    # assigned by the client, never generated
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    course: Mapped[str | None] = mapped_column(String(255), default=None)
    age: Mapped[int | None] = mapped_column(Integer, default=None)
    phone_number: Mapped[str | None] = mapped_column(String(32), default=None)
    enrolled: Mapped[bool] = mapped_column(Boolean, default=True)

    def __repr__(self) -> str:
        return f"Student(id={self.id!r}, name={self.name!r}, email={self.email!r})"


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(128))
    enabled: Mapped[bool] = mapped_column(Boolean, default=True)
