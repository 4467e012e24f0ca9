from collections.abc import Mapping
from typing import Any, Iterable, TypeVar

T = TypeVar("T")


def entity_id(entity: Any) -> str:
    if isinstance(entity, Mapping):
        return entity["id"]
    return entity.id


def merge_entities(current: Iterable[T], incoming: Iterable[T]) -> list[T]:
    """
    Id-keyed merge where incoming wins.

    Existing ids keep their position (with the incoming value); ids seen only
    in `incoming` are appended in their incoming order.
    """
    merged: dict[str, T] = {}
    for item in current:
        merged[entity_id(item)] = item
    for item in incoming:
        merged[entity_id(item)] = item
    return list(merged.values())
