"""Data models shared by the resource modules."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Mapping


@dataclass
class Page:
    """One page of a paginated search."""

    current_page: int | None = None
    total_pages: int | None = None
    total_items: int | None = None
    items: list[Any] = field(default_factory=list)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    @classmethod
    def from_response(
        cls,
        data: Mapping[str, Any],
        build: Callable[[Mapping[str, Any]], Any],
        key: str = "items",
    ) -> "Page":
        raw_items = data.get(key)
        if raw_items is None:
            raw_items = data.get("items") or []
        return cls(
            current_page=data.get("current_page"),
            total_pages=data.get("total_pages"),
            total_items=data.get("total_items"),
            items=[build(item) for item in raw_items],
        )
