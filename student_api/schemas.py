from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

# INTEGER columns hold signed 64-bit values
SQL_INT_MIN = -(2**63)
SQL_INT_MAX = 2**63 - 1

SqlInt = Annotated[int, Field(ge=SQL_INT_MIN, le=SQL_INT_MAX)]


class StudentFields(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    name: str
    email: EmailStr
    course: str | None = None
    age: SqlInt | None = None
    phone_number: str | None = Field(None, alias="phoneNumber")
    enrolled: bool = True

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Student name is required")
        return v


class StudentCreate(StudentFields):
    id: SqlInt


class StudentUpdate(StudentFields):
    # any id in the body is ignored; the path decides which record changes
    pass


class StudentOut(StudentFields):
    id: int
    # read back from the database as stored, no re-validation of old rows
    email: str


class LoginInput(BaseModel):
    username: str
    password: str


class TokenOut(BaseModel):
    token: str
