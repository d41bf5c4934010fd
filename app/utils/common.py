from datetime import date, datetime

from bson import ObjectId

SHORT_DAYS = ["пн", "вт", "ср", "чт", "пт", "сб", "вс"]


def serialize_doc(doc):
    """Преобразует ObjectId в str для JSON-совместимости"""
    if not doc:
        return doc
    doc["_id"] = str(doc["_id"])
    return doc


def parse_object_id(value: str) -> ObjectId | None:
    """ObjectId из строки или None, если строка не похожа на id"""
    if not value or not ObjectId.is_valid(value):
        return None
    return ObjectId(value)


def to_datetime(value: date | datetime | None) -> datetime | None:
    # в BSON нет отдельного типа для даты
    if value is None or isinstance(value, datetime):
        return value
    return datetime.combine(value, datetime.min.time())


def short_day_of_week(value: date | datetime | None) -> str:
    """Короткое название дня недели: пн, вт, ... вс"""
    if not value:
        return ""
    return SHORT_DAYS[value.weekday()]
