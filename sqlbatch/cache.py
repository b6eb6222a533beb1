"""Per-assembly cache of rendered scalar literals.

A multi-row insert frequently repeats the same scalar in a column (status flags,
tenant ids, ...). Rendering each occurrence through the platform is wasted work,
so the assembler memoizes rendered literals per column for the duration of a
single assembly call.
"""

from typing import Any, Optional

__all__ = ("ValueCache",)


class ValueCache:
    """Column-scoped memo of rendered scalar literals.

    Entries are keyed by the value's type and its string form so that ``1``
    and ``"1"`` never share a literal. A cache is meant to live for one
    assembly call and is never shared between builders.
    """

    __slots__ = ("_entries", "hits", "misses")

    def __init__(self) -> None:
        self._entries: dict[str, dict[tuple[type, str], str]] = {}
        self.hits = 0
        self.misses = 0

    @staticmethod
    def _key(value: Any) -> tuple[type, str]:
        return (type(value), str(value))

    def get(self, column: str, value: Any) -> Optional[str]:
        """Look up the rendered literal for ``value`` in ``column``.

        Returns:
            The cached SQL fragment, or ``None`` on a miss.
        """
        fragment = self._entries.get(column, {}).get(self._key(value))
        if fragment is None:
            self.misses += 1
        else:
            self.hits += 1
        return fragment

    def put(self, column: str, value: Any, fragment: str) -> None:
        self._entries.setdefault(column, {})[self._key(value)] = fragment

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, tuple) or len(item) != 2:  # noqa: PLR2004
            return False
        column, value = item
        return self._key(value) in self._entries.get(column, {})

    def __len__(self) -> int:
        return sum(len(column_entries) for column_entries in self._entries.values())

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0
