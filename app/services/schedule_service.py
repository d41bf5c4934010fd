import logging
from datetime import datetime

from app.models.schedule import AttendanceUpdate, GroupAttendanceUpdate, ScheduleCreate, ScheduleUpdate
from app.services import crud
from app.services.targets import attendance_update, group_attendance_update
from app.utils.common import parse_object_id, serialize_doc, short_day_of_week, to_datetime
from app.utils.errors import NotFoundError, ValidationError, store_errors

logger = logging.getLogger(__name__)

MIN_DURATION = 30
SCHEDULE_SORT = [("date", 1), ("time", 1)]
NOT_FOUND = "Занятие не найдено"


def _check_duration(duration: int):
    if duration < MIN_DURATION:
        raise ValidationError(f"Продолжительность должна быть не менее {MIN_DURATION} минут")


class ScheduleService:

    @staticmethod
    async def get_by_student(db, student_id: str):
        return await crud.find_sorted(
            db.schedule, {"student_id": student_id}, SCHEDULE_SORT, "Ошибка при получении расписания"
        )

    @staticmethod
    async def get_by_group(db, group_id: str):
        return await crud.find_sorted(
            db.schedule, {"group_id": group_id}, SCHEDULE_SORT, "Ошибка при получении расписания"
        )

    @staticmethod
    async def get_group_with_students(db, group_id: str):
        """Расписание группы вместе со списком её студентов"""
        oid = parse_object_id(group_id)
        if oid is None:
            raise NotFoundError("Группа не найдена")

        with store_errors("Ошибка при получении группы"):
            group = await db.groups.find_one({"_id": oid})
            if not group:
                raise NotFoundError("Группа не найдена")

            student_ids = [parse_object_id(str(s)) for s in group.get("students", [])]
            students = await db.students.find(
                {"_id": {"$in": [s for s in student_ids if s is not None]}}
            ).to_list(None)

        schedules = await ScheduleService.get_by_group(db, group_id)
        return {
            "schedules": schedules,
            "students": [serialize_doc(s) for s in students],
        }

    @staticmethod
    async def add_item(db, item: ScheduleCreate):
        _check_duration(item.duration)
        if not item.student_id and not item.group_id:
            raise ValidationError("Необходимо указать либо student_id, либо group_id")

        now = datetime.now()
        doc = {
            "day": item.day,
            "date": to_datetime(item.date),
            "time": item.time,
            "duration": item.duration,
            "subject": item.subject,
            "description": item.description or "",
            # индивидуальное занятие сразу отмечаем как непосещённое,
            # у группы словарь появится при первой отметке
            "attendance": False if item.student_id else None,
            "createdAt": now,
            "updatedAt": now,
        }
        if item.student_id:
            doc["student_id"] = item.student_id
        if item.group_id:
            doc["group_id"] = item.group_id

        with store_errors("Ошибка при добавлении занятия в расписание"):
            result = await db.schedule.insert_one(doc)
        doc["_id"] = result.inserted_id

        logger.info("Добавлено занятие %s (%s)", result.inserted_id, item.student_id or item.group_id)
        return serialize_doc(doc)

    @staticmethod
    async def update_attendance(db, item_id: str, data: AttendanceUpdate):
        error = "Ошибка при обновлении посещаемости"
        doc = await crud.get_by_id(db.schedule, item_id, NOT_FOUND, error)
        update = attendance_update(doc, data.attendance, data.studentId)
        updated = await crud.update_by_id(db.schedule, doc["_id"], update, NOT_FOUND, error)
        logger.info("Посещаемость занятия %s обновлена", item_id)
        return updated

    @staticmethod
    async def update_group_attendance(db, item_id: str, data: GroupAttendanceUpdate):
        error = "Ошибка при обновлении посещаемости группы"
        doc = await crud.get_by_id(db.schedule, item_id, NOT_FOUND, error)
        update = group_attendance_update(doc, data.attendance)
        updated = await crud.update_by_id(db.schedule, doc["_id"], update, NOT_FOUND, error)
        logger.info("Посещаемость группы для занятия %s перезаписана (%d студентов)", item_id, len(data.attendance))
        return updated

    @staticmethod
    async def update_item(db, item_id: str, data: ScheduleUpdate):
        _check_duration(data.duration)

        fields = {
            "day": short_day_of_week(data.date),
            "date": to_datetime(data.date),
            "time": data.time,
            "duration": data.duration,
            "subject": data.subject,
            "updatedAt": datetime.now(),
        }
        if data.description is not None:
            fields["description"] = data.description

        return await crud.update_by_id(
            db.schedule, item_id, {"$set": fields}, NOT_FOUND, "Ошибка при обновлении записи в расписании"
        )

    @staticmethod
    async def delete_item(db, item_id: str):
        deleted = await crud.delete_by_id(db.schedule, item_id, NOT_FOUND, "Ошибка при удалении записи из расписания")
        return {"message": "Занятие успешно удалено", "deletedItem": deleted}

    @staticmethod
    async def delete_many(db, ids):
        deleted_count = await crud.delete_many_by_ids(db.schedule, ids)
        return {"message": "Записи успешно удалены", "deletedCount": deleted_count}
