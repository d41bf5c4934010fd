from fastapi import APIRouter, Depends
from app.database import get_db
from app.models.common import DeleteMultipleRequest, DeleteMultipleResponse
from app.models.schedule import AttendanceUpdate, GroupAttendanceUpdate, ScheduleCreate, ScheduleUpdate
from app.services.schedule_service import ScheduleService

router = APIRouter()


# 📘 Расписание студента
@router.get("/student/{student_id}")
async def get_schedule_by_student(student_id: str, db=Depends(get_db)):
    return await ScheduleService.get_by_student(db, student_id)


# 📘 Расписание группы
@router.get("/group/{group_id}")
async def get_schedule_by_group(group_id: str, db=Depends(get_db)):
    return await ScheduleService.get_by_group(db, group_id)


@router.get("/group/{group_id}/with-students")
async def get_group_schedule_with_students(group_id: str, db=Depends(get_db)):
    return await ScheduleService.get_group_with_students(db, group_id)


# ➕ Новое занятие
@router.post("/", status_code=201)
async def add_schedule_item(item: ScheduleCreate, db=Depends(get_db)):
    """
    Ошибки:
    - 400: продолжительность меньше 30 минут или не указан ни student_id, ни group_id.
    """
    return await ScheduleService.add_item(db, item)


# ❌ Массовое удаление
@router.post("/deleteMultiple", response_model=DeleteMultipleResponse)
async def delete_multiple_schedule_items(data: DeleteMultipleRequest, db=Depends(get_db)):
    return await ScheduleService.delete_many(db, data.ids)


# ✅ Посещаемость: для индивидуального занятия - bool, для группы - по studentId
@router.put("/{item_id}/updateAttendance")
async def update_attendance(item_id: str, data: AttendanceUpdate, db=Depends(get_db)):
    return await ScheduleService.update_attendance(db, item_id, data)


# ✅ Посещаемость всей группы (полная замена)
@router.put("/{item_id}/updateGroupAttendance")
async def update_group_attendance(item_id: str, data: GroupAttendanceUpdate, db=Depends(get_db)):
    return await ScheduleService.update_group_attendance(db, item_id, data)


@router.put("/{item_id}")
async def update_schedule_item(item_id: str, data: ScheduleUpdate, db=Depends(get_db)):
    return await ScheduleService.update_item(db, item_id, data)


@router.delete("/{item_id}")
async def delete_schedule_item(item_id: str, db=Depends(get_db)):
    return await ScheduleService.delete_item(db, item_id)
