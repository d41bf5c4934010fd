from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from app.database import get_db
from app.models.common import DeleteMultipleRequest, DeleteMultipleResponse
from app.models.homework import GradeUpdate
from app.services.homework_service import HomeworkService
from app.utils.uploads import UploadSink, get_upload_sink

router = APIRouter()


@router.get("/student/{student_id}")
async def get_homework_by_student(student_id: str, db=Depends(get_db)):
    return await HomeworkService.get_by_student(db, student_id)


@router.get("/group/{group_id}")
async def get_homework_by_group(group_id: str, db=Depends(get_db)):
    return await HomeworkService.get_by_group(db, group_id)


# 📤 Новое задание с файлами
@router.post("/")
async def add_homework_item(
    dueDate: date = Form(..., description="Срок сдачи"),
    student_id: Optional[str] = Form(None),
    group_id: Optional[str] = Form(None),
    day: Optional[str] = Form(None),
    files: List[UploadFile] = File(default=[], description="Материалы задания"),
    db=Depends(get_db),
    sink: UploadSink = Depends(get_upload_sink),
):
    return await HomeworkService.add_item(db, sink, student_id, group_id, day, dueDate, files)


# 📤 Ответ студента
@router.post("/uploadAnswer")
async def upload_answer(
    homework_id: str = Form(...),
    student_id: str = Form(...),
    files: List[UploadFile] = File(default=[]),
    db=Depends(get_db),
    sink: UploadSink = Depends(get_upload_sink),
):
    return await HomeworkService.upload_answer(db, sink, homework_id, student_id, files)


@router.post("/deleteMultiple", response_model=DeleteMultipleResponse)
async def delete_multiple_homework(data: DeleteMultipleRequest, db=Depends(get_db)):
    return await HomeworkService.delete_many(db, data.ids)


# ✏️ Общая оценка за задание
@router.put("/{homework_id}")
async def update_grade(homework_id: str, data: Optional[GradeUpdate] = None, db=Depends(get_db)):
    return await HomeworkService.update_grade(db, homework_id, data.grade if data else None)


# ✏️ Оценка конкретного студента (групповое задание)
@router.put("/{homework_id}/{student_id}")
async def update_student_grade(
    homework_id: str, student_id: str, data: Optional[GradeUpdate] = None, db=Depends(get_db)
):
    return await HomeworkService.update_student_grade(db, homework_id, student_id, data.grade if data else None)


@router.delete("/{homework_id}")
async def delete_homework_item(homework_id: str, db=Depends(get_db)):
    return await HomeworkService.delete_item(db, homework_id)
