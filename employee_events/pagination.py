"""
Page model and its JSON codec.

Pages cross service boundaries as plain JSON objects::

    {
      "content": [...],
      "number": 0,
      "size": 50,
      "totalElements": 123,
      "totalPages": 3,
      "last": false,
      ...
    }

Only ``content``, ``number``, ``size`` and ``totalElements`` are read back by
``decode_page``. Sort metadata is written for clients that display it but it is
never reconstructed: a decoded page always has an empty ``sort``.
"""
import math
from enum import Enum
from typing import Any, Callable, Generic, TypeVar

import orjson
from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")
U = TypeVar("U")

CONTENT = "content"
NUMBER = "number"
SIZE = "size"
TOTAL_ELEMENTS = "totalElements"


class PageTypeMismatchError(TypeError):
    """Raised when a JSON value cannot be decoded into a page."""


class Direction(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


class SortOrder(BaseModel):
    model_config = ConfigDict(frozen=True)

    property: str
    direction: Direction = Direction.ASC


class PageRequest(BaseModel):
    """Zero-based page request."""
    model_config = ConfigDict(frozen=True)

    number: int = Field(default=0, ge=0)
    size: int = Field(default=50, ge=1)
    sort: tuple[SortOrder, ...] = ()

    @property
    def offset(self) -> int:
        return self.number * self.size


class Page(BaseModel, Generic[T]):
    """One slice of an ordered result set."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    content: list[T] = Field(default_factory=list)
    number: int = 0
    size: int = 0
    total_elements: int = 0
    sort: tuple[SortOrder, ...] = ()

    @classmethod
    def of(cls, content: list[T], request: PageRequest, total_elements: int) -> "Page[T]":
        return cls(
            content=content,
            number=request.number,
            size=request.size,
            total_elements=total_elements,
            sort=request.sort,
        )

    @property
    def total_pages(self) -> int:
        # size 0 means unpaged: everything fits on a single page
        if self.size == 0:
            return 1
        return math.ceil(self.total_elements / self.size)

    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @property
    def is_first(self) -> bool:
        return self.number == 0

    @property
    def is_last(self) -> bool:
        return self.number + 1 >= self.total_pages

    def map(self, fn: Callable[[T], U]) -> "Page[U]":
        return Page(
            content=[fn(item) for item in self.content],
            number=self.number,
            size=self.size,
            total_elements=self.total_elements,
            sort=self.sort,
        )


def _encode_sort(sort: tuple[SortOrder, ...]) -> dict[str, Any]:
    return {
        "empty": not sort,
        "sorted": bool(sort),
        "unsorted": not sort,
        "orders": [{"property": o.property, "direction": o.direction.value} for o in sort],
    }


def _encode_element(item: Any) -> Any:
    if isinstance(item, BaseModel):
        return item.model_dump(mode="json", by_alias=True)
    return item


def encode_page(page: Page[Any], encode_element: Callable[[Any], Any] | None = None) -> dict[str, Any]:
    """
    Convert a page into its JSON-ready dict form.

    Args:
        page: Page to encode
        encode_element: Converts one content item to a JSON value
            (defaults to pydantic ``model_dump`` for models, identity otherwise)

    Returns:
        Dict holding the page fields in their wire names
    """
    encode = encode_element or _encode_element
    sort = _encode_sort(page.sort)
    return {
        CONTENT: [encode(item) for item in page.content],
        NUMBER: page.number,
        SIZE: page.size,
        TOTAL_ELEMENTS: page.total_elements,
        "totalPages": page.total_pages,
        "last": page.is_last,
        "first": page.is_first,
        "numberOfElements": page.number_of_elements,
        "sort": sort,
        "pageable": {
            "pageNumber": page.number,
            "pageSize": page.size,
            "offset": page.number * page.size,
            "paged": page.size > 0,
            "unpaged": page.size == 0,
            "sort": sort,
        },
    }


def dumps_page(page: Page[Any], encode_element: Callable[[Any], Any] | None = None) -> bytes:
    """Serialize a page to JSON bytes."""
    return orjson.dumps(encode_page(page, encode_element))


def _read_int(data: dict[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise PageTypeMismatchError(f"Page field '{key}' must be an integer, got {type(value).__name__}")
    return value


def decode_page(data: bytes | str | Any, decode_element: Callable[[Any], T]) -> Page[T]:
    """
    Rebuild a page from its JSON form.

    Args:
        data: JSON document (bytes or str) or an already parsed JSON value
        decode_element: Converts one JSON item of ``content`` into ``T``

    Returns:
        Page holding the decoded content; its ``sort`` is always empty

    Raises:
        PageTypeMismatchError: If the value is not a JSON object, ``content``
            is not an array, or a numeric field is not an integer
        orjson.JSONDecodeError: If ``data`` is not valid JSON
    """
    if isinstance(data, (bytes, bytearray, memoryview, str)):
        data = orjson.loads(data)

    if not isinstance(data, dict):
        raise PageTypeMismatchError(f"Cannot decode a page from a JSON {type(data).__name__}")

    raw_content = data.get(CONTENT)
    if raw_content is None:
        raw_content = []
    elif not isinstance(raw_content, list):
        raise PageTypeMismatchError(f"Page field '{CONTENT}' must be an array, got {type(raw_content).__name__}")

    return Page(
        content=[decode_element(item) for item in raw_content],
        number=_read_int(data, NUMBER),
        size=_read_int(data, SIZE),
        total_elements=_read_int(data, TOTAL_ELEMENTS),
    )
