from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class PaginationState:
    page: int = 1
    page_size: int = 10
    total_items: int = 0

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError("page_size must be >= 1")
        self.page = max(1, self.page)
        self.total_items = max(0, self.total_items)

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.page_size)

    def clamp(self, page: int) -> int:
        return min(max(1, page), max(1, self.total_pages))

    def item_range(self) -> tuple[int, int]:
        if self.total_items == 0:
            return (0, 0)
        first = (self.page - 1) * self.page_size + 1
        last = min(self.page * self.page_size, self.total_items)
        return (first, last)

    def items_on_page(self, page: int | None = None) -> int:
        target = self.page if page is None else page
        if target < 1 or target > self.total_pages:
            return 0
        return min(self.page_size, self.total_items - (target - 1) * self.page_size)

    def page_window(self) -> list[int | None]:
        """Page buttons to render; ``None`` marks an ellipsis."""
        window: list[int | None] = []
        for number in range(1, self.total_pages + 1):
            if number in (1, self.total_pages) or self.page - 1 <= number <= self.page + 1:
                window.append(number)
            elif number in (self.page - 2, self.page + 2):
                window.append(None)
        return window


def goto_page(state: PaginationState, page: int) -> PaginationState:
    state.page = state.clamp(page)
    return state
