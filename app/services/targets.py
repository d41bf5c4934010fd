"""
Посещаемость и оценки хранятся по-разному в зависимости от того,
для кого запись: для одного студента или для группы.

Индивидуальная запись: attendance - bool/None, grade - скаляр.
Групповая запись: attendance - {student_id: bool}, grades - {student_id: оценка}.

Функции ниже не ходят в базу: по уже загруженной записи они строят
документ обновления для find_one_and_update.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Union

from app.utils.errors import ValidationError


@dataclass(frozen=True)
class Individual:
    student_id: str


@dataclass(frozen=True)
class Group:
    group_id: str


RecordTarget = Union[Individual, Group]


def target_of(doc: dict) -> RecordTarget:
    # при создании можно передать оба id, тогда запись считается индивидуальной
    if doc.get("student_id"):
        return Individual(str(doc["student_id"]))
    if doc.get("group_id"):
        return Group(str(doc["group_id"]))
    raise ValidationError("Запись не привязана ни к студенту, ни к группе")


def _student_key(student_id: str) -> str:
    # id становится частью пути attendance.<id> / grades.<id>
    if "." in student_id or student_id.startswith("$"):
        raise ValidationError(f"Некорректный studentId: {student_id}")
    return student_id


def _unknown_target(target) -> ValidationError:
    return ValidationError(f"Неизвестный тип записи: {type(target).__name__}")


def attendance_update(
    doc: dict,
    attendance: Optional[bool],
    student_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> dict:
    target = target_of(doc)
    now = now or datetime.now()

    if isinstance(target, Individual):
        return {"$set": {"attendance": attendance, "updatedAt": now}}

    if isinstance(target, Group):
        if not student_id:
            raise ValidationError("Для групповых занятий необходимо указать studentId")
        student_id = _student_key(student_id)
        # пока никто не отмечен, attendance пустое - создаём словарь целиком
        if not isinstance(doc.get("attendance"), dict):
            return {"$set": {"attendance": {student_id: attendance}, "updatedAt": now}}
        return {"$set": {f"attendance.{student_id}": attendance, "updatedAt": now}}

    raise _unknown_target(target)


def group_attendance_update(
    doc: dict,
    attendance: Dict[str, bool],
    now: Optional[datetime] = None,
) -> dict:
    """Полная замена посещаемости группы, без слияния с прежними ключами"""
    target = target_of(doc)

    if isinstance(target, Individual):
        raise ValidationError("Это индивидуальное занятие. Используйте другой метод")

    if isinstance(target, Group):
        mapping = {_student_key(k): v for k, v in attendance.items()}
        return {"$set": {"attendance": mapping, "updatedAt": now or datetime.now()}}

    raise _unknown_target(target)


def grade_update(grade: Any = None) -> dict:
    if grade is None:
        return {"$unset": {"grade": ""}}
    return {"$set": {"grade": grade}}


def student_grade_update(student_id: str, grade: Any = None) -> dict:
    student_id = _student_key(student_id)
    # снятая оценка - это отсутствующий ключ, а не null
    if grade is None:
        return {"$unset": {f"grades.{student_id}": ""}}
    return {"$set": {f"grades.{student_id}": grade}}
