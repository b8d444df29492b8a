"""
Rotation state for cycling a text source through a list of strings.

- Items keep their insertion order.
- The index wraps modulo the number of items.
- An empty list never updates anything.
"""

import re
from typing import Callable, Iterable, List, Optional

_LINE_SPLIT_RE = re.compile(r"\r\n|\r|\n")


def parse_text_list(text_data: Optional[str]) -> List[str]:
    """Split a multiline settings value into items, dropping empty lines."""
    if not text_data:
        return []
    return [line for line in _LINE_SPLIT_RE.split(text_data) if line]


class Rotator:
    def __init__(self, items: Optional[Iterable[str]] = None):
        self._items: List[str] = list(items or [])
        self._index = 0

    @property
    def index(self) -> int:
        return self._index

    def __len__(self) -> int:
        return len(self._items)

    def set_items(self, items: Iterable[str]):
        self._items = list(items)
        self.reset()

    def reset(self):
        self._index = 0

    def current(self) -> Optional[str]:
        if not self._items:
            return None
        return self._items[self._index]

    def advance(self) -> Optional[str]:
        # Returns None for an empty list; index stays put.
        if not self._items:
            return None
        text = self._items[self._index]
        self._index = (self._index + 1) % len(self._items)
        return text

    def step(self, apply: Callable[[str], bool]) -> Optional[str]:
        """
        Push the current item through ``apply`` and advance on success.

        Returns the applied text, or None when the list is empty or ``apply``
        reported failure. A failed apply leaves the index unchanged.
        """
        text = self.current()
        if text is None:
            return None
        if not apply(text):
            return None
        self.advance()
        return text
