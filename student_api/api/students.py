from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from student_api.api.deps import current_subject, get_student_service
from student_api.schemas import SQL_INT_MAX, SQL_INT_MIN, StudentCreate, StudentOut, StudentUpdate
from student_api.services.students import StudentService

# every route here sits behind the bearer token check
router = APIRouter(dependencies=[Depends(current_subject)])

StudentId = Annotated[int, Path(ge=SQL_INT_MIN, le=SQL_INT_MAX)]


@router.get("", response_model=list[StudentOut])
async def list_students(service: StudentService = Depends(get_student_service)):
    return await service.list_students()


@router.get("/{student_id}", response_model=StudentOut)
async def get_student(student_id: StudentId, service: StudentService = Depends(get_student_service)):
    return await service.get_student(student_id)


@router.post("", response_model=StudentOut, status_code=status.HTTP_201_CREATED)
async def create_student(body: StudentCreate, service: StudentService = Depends(get_student_service)):
    return await service.create_student(body)


@router.put("/{student_id}", response_model=StudentOut)
async def update_student(
    student_id: StudentId,
    body: StudentUpdate,
    service: StudentService = Depends(get_student_service),
):
    return await service.update_student(student_id, body)


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_student(student_id: StudentId, service: StudentService = Depends(get_student_service)):
    await service.delete_student(student_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
