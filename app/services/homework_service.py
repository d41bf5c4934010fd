import logging
from datetime import date, datetime
from typing import List, Optional

from fastapi import UploadFile

from app.services import crud
from app.services.targets import grade_update, student_grade_update
from app.utils.common import serialize_doc, to_datetime
from app.utils.errors import ValidationError, store_errors
from app.utils.uploads import UploadSink

logger = logging.getLogger(__name__)

HOMEWORK_SORT = [("dueDate", 1)]
NOT_FOUND = "Домашнее задание не найдено"


class HomeworkService:

    @staticmethod
    async def get_by_student(db, student_id: str):
        return await crud.find_sorted(
            db.homework, {"student_id": student_id}, HOMEWORK_SORT, "Ошибка при получении домашних заданий"
        )

    @staticmethod
    async def get_by_group(db, group_id: str):
        return await crud.find_sorted(
            db.homework, {"group_id": group_id}, HOMEWORK_SORT, "Ошибка при получении домашних заданий"
        )

    @staticmethod
    async def add_item(
        db,
        sink: UploadSink,
        student_id: Optional[str],
        group_id: Optional[str],
        day: Optional[str],
        due_date: date,
        files: List[UploadFile] | None,
    ):
        if not student_id and not group_id:
            raise ValidationError("Необходимо указать student_id или group_id")

        doc = {
            "day": day,
            "dueDate": to_datetime(due_date),
            "files": await sink.save(files),
            "answer": [],
            "uploadedAt": datetime.now(),
        }
        if student_id:
            doc["student_id"] = student_id
        if group_id:
            doc["group_id"] = group_id

        with store_errors("Ошибка при добавлении домашнего задания"):
            result = await db.homework.insert_one(doc)
        doc["_id"] = result.inserted_id

        logger.info("Добавлено домашнее задание %s (%s)", result.inserted_id, student_id or group_id)
        return serialize_doc(doc)

    @staticmethod
    async def upload_answer(db, sink: UploadSink, homework_id: str, student_id: str, files: List[UploadFile] | None):
        """Дописывает ответы студента в конец answer, ничего не перезаписывая"""
        error = "Ошибка при обновлении домашнего задания"
        # проверяем id до записи файлов на диск
        await crud.get_by_id(db.homework, homework_id, NOT_FOUND, error)

        stored = await sink.save(files)
        answers = [{"student_id": student_id, "file": name} for name in stored]
        update = {
            "$push": {"answer": {"$each": answers}},
            "$set": {"sentAt": datetime.now()},
        }
        updated = await crud.update_by_id(db.homework, homework_id, update, NOT_FOUND, error)
        logger.info("Студент %s отправил ответ к заданию %s (%d файлов)", student_id, homework_id, len(answers))
        return updated

    @staticmethod
    async def update_grade(db, homework_id: str, grade=None):
        return await crud.update_by_id(
            db.homework, homework_id, grade_update(grade), NOT_FOUND, "Ошибка при обновлении оценки"
        )

    @staticmethod
    async def update_student_grade(db, homework_id: str, student_id: str, grade=None):
        return await crud.update_by_id(
            db.homework,
            homework_id,
            student_grade_update(student_id, grade),
            NOT_FOUND,
            "Ошибка при обновлении оценки студента",
        )

    @staticmethod
    async def delete_item(db, homework_id: str):
        deleted = await crud.delete_by_id(db.homework, homework_id, NOT_FOUND, "Ошибка при удалении домашнего задания")
        return {"message": "Домашнее задание успешно удалено", "deletedItem": deleted}

    @staticmethod
    async def delete_many(db, ids):
        deleted_count = await crud.delete_many_by_ids(db.homework, ids)
        return {"message": "Записи успешно удалены", "deletedCount": deleted_count}
