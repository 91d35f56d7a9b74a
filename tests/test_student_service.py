import pytest

from student_api.core.errors import DuplicateRecord, NotFound
from student_api.db.models import Student
from student_api.schemas import StudentCreate, StudentUpdate
from student_api.services.students import StudentService


class InMemoryStudentRepository:
    def __init__(self):
        self.rows: dict[int, Student] = {}
        self.saves = 0

    async def find_all(self):
        return [self.rows[k] for k in sorted(self.rows)]

    async def find_by_id(self, student_id):
        return self.rows.get(student_id)

    async def save(self, student):
        self.saves += 1
        self.rows[student.id] = student
        return student

    async def delete_by_id(self, student_id):
        self.rows.pop(student_id, None)


@pytest.fixture
def repo():
    return InMemoryStudentRepository()


@pytest.fixture
def service(repo):
    return StudentService(repo)


@pytest.mark.asyncio
async def test_create_then_get_round_trip(service):
    data = StudentCreate(id=1, name="Bob", email="b@x.com", course="Math", age=20, phoneNumber="555")
    await service.create_student(data)

    got = await service.get_student(1)
    assert (got.id, got.name, got.email, got.course, got.age, got.phone_number) == (
        1, "Bob", "b@x.com", "Math", 20, "555",
    )
    assert got.enrolled is True


@pytest.mark.asyncio
async def test_create_existing_id_does_not_overwrite(service):
    await service.create_student(StudentCreate(id=1, name="Bob", email="b@x.com"))
    with pytest.raises(DuplicateRecord):
        await service.create_student(StudentCreate(id=1, name="Eve", email="e@x.com"))
    assert (await service.get_student(1)).name == "Bob"


@pytest.mark.asyncio
async def test_get_missing_raises_not_found(service):
    with pytest.raises(NotFound):
        await service.get_student(42)


@pytest.mark.asyncio
async def test_update_overwrites_every_mutable_field(service):
    await service.create_student(
        StudentCreate(id=1, name="Bob", email="b@x.com", course="Math", age=20, phoneNumber="555")
    )
    updated = await service.update_student(1, StudentUpdate(name="Robert", email="r@x.com", enrolled=False))

    assert updated.id == 1
    assert updated.name == "Robert"
    assert updated.email == "r@x.com"
    # fields missing from the body are cleared, not merged
    assert updated.course is None
    assert updated.age is None
    assert updated.phone_number is None
    assert updated.enrolled is False


@pytest.mark.asyncio
async def test_update_missing_raises_and_creates_nothing(service, repo):
    with pytest.raises(NotFound):
        await service.update_student(7, StudentUpdate(name="Ghost", email="g@x.com"))
    assert repo.rows == {}
    assert repo.saves == 0


@pytest.mark.asyncio
async def test_delete_is_idempotent(service, repo):
    await service.create_student(StudentCreate(id=1, name="Bob", email="b@x.com"))
    await service.delete_student(1)
    await service.delete_student(1)
    assert repo.rows == {}


@pytest.mark.asyncio
async def test_list_is_ordered_by_id(service):
    for i, name in ((3, "C"), (1, "A"), (2, "B")):
        await service.create_student(StudentCreate(id=i, name=name, email=f"{name.lower()}@x.com"))
    assert [s.id for s in await service.list_students()] == [1, 2, 3]
