"""Общие операции над коллекциями schedule и homework"""
import logging
from typing import List

from pymongo import ReturnDocument

from app.utils.common import parse_object_id, serialize_doc
from app.utils.errors import NotFoundError, ValidationError, store_errors

logger = logging.getLogger(__name__)


async def find_sorted(collection, query: dict, sort: list, error_message: str) -> list:
    with store_errors(error_message):
        docs = await collection.find(query).sort(sort).to_list(None)
    return [serialize_doc(d) for d in docs]


async def get_by_id(collection, record_id: str, not_found_message: str, error_message: str) -> dict:
    oid = parse_object_id(record_id)
    if oid is None:
        raise NotFoundError(not_found_message)
    with store_errors(error_message):
        doc = await collection.find_one({"_id": oid})
    if not doc:
        raise NotFoundError(not_found_message)
    return doc


async def update_by_id(collection, record_id, update: dict, not_found_message: str, error_message: str) -> dict:
    oid = parse_object_id(str(record_id))
    if oid is None:
        raise NotFoundError(not_found_message)
    with store_errors(error_message):
        doc = await collection.find_one_and_update(
            {"_id": oid}, update, return_document=ReturnDocument.AFTER
        )
    if not doc:
        raise NotFoundError(not_found_message)
    return serialize_doc(doc)


async def delete_by_id(collection, record_id: str, not_found_message: str, error_message: str) -> dict:
    oid = parse_object_id(record_id)
    if oid is None:
        raise NotFoundError(not_found_message)
    with store_errors(error_message):
        doc = await collection.find_one_and_delete({"_id": oid})
    if not doc:
        raise NotFoundError(not_found_message)
    logger.info("Удалена запись %s из %s", record_id, collection.name)
    return serialize_doc(doc)


async def delete_many_by_ids(collection, ids: List[str] | None) -> int:
    """
    Удаляет все найденные записи из списка.
    Ошибка только если не удалено ни одной: частичное совпадение - это успех.
    """
    if not ids or not isinstance(ids, list):
        raise ValidationError("Неверный формат данных: ожидается массив ID")

    oids = [parse_object_id(i) for i in ids]
    if any(oid is None for oid in oids):
        raise ValidationError("Неверный формат данных: ожидается массив ID")

    with store_errors("Ошибка при удалении записей"):
        result = await collection.delete_many({"_id": {"$in": oids}})

    if result.deleted_count == 0:
        raise NotFoundError("Записи не найдены или уже удалены")

    logger.info("Удалено записей из %s: %d из %d", collection.name, result.deleted_count, len(ids))
    return result.deleted_count
