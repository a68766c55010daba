from __future__ import annotations

import math
from dataclasses import dataclass
from types import UnionType
from typing import Any, Literal, Sequence, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel

from backend.internal_core.contracts import InvalidArgument, PageResponse

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


def build_page_response(
    content: Sequence[T],
    page: int,
    size: int,
    total_elements: int,
) -> PageResponse[T]:
    items = list(content)
    if page < 0:
        raise InvalidArgument(f"page must be >= 0, got {page}")
    if total_elements < 0:
        raise InvalidArgument(f"total_elements must be >= 0, got {total_elements}")
    if size < 0:
        raise InvalidArgument(f"size must be >= 0, got {size}")
    if size == 0 and total_elements > 0:
        raise InvalidArgument(f"size must be > 0 when total_elements > 0, got {size}")
    if len(items) > size:
        raise InvalidArgument(f"content has {len(items)} items, more than page size {size}")
    if len(items) > total_elements:
        raise InvalidArgument(f"content has {len(items)} items, more than total_elements {total_elements}")

    total_pages = math.ceil(total_elements / size) if size > 0 else 0
    if total_pages == 0:
        last = page == 0
    else:
        last = page == total_pages - 1

    return PageResponse[Any](
        content=items,
        page=page,
        size=size,
        total_elements=total_elements,
        total_pages=total_pages,
        first=page == 0,
        last=last,
        empty=len(items) == 0,
        number_of_elements=len(items),
    )


def paginate(items: Sequence[T], page: int, size: int) -> PageResponse[T]:
    if size <= 0:
        raise InvalidArgument(f"size must be > 0, got {size}")
    if page < 0:
        raise InvalidArgument(f"page must be >= 0, got {page}")
    offset = page * size
    return build_page_response(items[offset : offset + size], page, size, len(items))


@dataclass(frozen=True)
class SortDirective:
    property: str
    descending: bool = False


def parse_sort(sort: str | None, default_property: str = "id") -> SortDirective:
    """Parse "disclosureCode,desc" style directives.

    Blank input sorts by ``default_property`` ascending; any direction other
    than "desc" means ascending.
    """
    raw = (sort or "").strip()
    if not raw:
        return SortDirective(property=default_property)
    parts = [part.strip() for part in raw.split(",")]
    prop = parts[0] or default_property
    descending = len(parts) > 1 and parts[1].lower() == "desc"
    return SortDirective(property=prop, descending=descending)


def _is_orderable(annotation: Any) -> bool:
    if get_origin(annotation) in (Union, UnionType):
        return all(_is_orderable(arg) for arg in get_args(annotation) if arg is not type(None))
    if get_origin(annotation) is not None:
        return get_origin(annotation) is Literal
    return not (isinstance(annotation, type) and issubclass(annotation, (BaseModel, list, tuple, dict, set)))


def _resolve_attribute(model_cls: type[BaseModel], prop: str) -> str:
    fields = model_cls.model_fields
    name = prop if prop in fields else next(
        (field for field, info in fields.items() if info.alias == prop), None
    )
    if name is None:
        raise InvalidArgument(f"Unknown sort property for {model_cls.__name__}: {prop}")
    if not _is_orderable(fields[name].annotation):
        raise InvalidArgument(f"Cannot sort by {prop}")
    return name


def sort_items(
    items: Sequence[M],
    directive: SortDirective,
    model_cls: type[BaseModel] | None = None,
) -> list[M]:
    if model_cls is None:
        if not items:
            return []
        model_cls = type(items[0])
    attr = _resolve_attribute(model_cls, directive.property)
    present = [item for item in items if getattr(item, attr) is not None]
    missing = [item for item in items if getattr(item, attr) is None]
    try:
        present.sort(key=lambda item: getattr(item, attr), reverse=directive.descending)
    except TypeError as exc:
        # e.g. naive and aware datetimes in the same column
        raise InvalidArgument(f"Cannot sort by {directive.property}") from exc
    # Absent values trail in both directions.
    return present + missing
