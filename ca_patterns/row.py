from __future__ import annotations

from collections.abc import Iterable, Iterator

FILLED = "#"
EMPTY = "."

SURVIVE_SUMS = frozenset({2, 4})
BIRTH_SUMS = frozenset({2, 3})


class Row:
    """One configuration of filled cells on the integer line.

    Filled positions are kept in a set, so stepping costs scale with the
    number of filled cells rather than the width of the line. ``min`` and
    ``max`` are both 0 for an empty row.
    """

    __slots__ = ("_values", "_min", "_max")

    def __init__(self, positions: Iterable[int] = ()) -> None:
        self._values: set[int] = set()
        self._min = 0
        self._max = 0
        for pos in positions:
            self._insert(pos)

    @classmethod
    def from_string(cls, text: str, filled: str = FILLED) -> Row:
        """Build a row from text, e.g. ``"..##.##"`` fills 2, 3, 5 and 6."""
        return cls(i for i, ch in enumerate(text) if ch == filled)

    def _insert(self, value: int) -> None:
        if not self._values:
            self._min = value
            self._max = value
        elif value < self._min:
            self._min = value
        elif value > self._max:
            self._max = value
        self._values.add(value)

    @property
    def filled(self) -> frozenset[int]:
        return frozenset(self._values)

    @property
    def min(self) -> int:
        return self._min

    @property
    def max(self) -> int:
        return self._max

    def __len__(self) -> int:
        return len(self._values)

    def __bool__(self) -> bool:
        return bool(self._values)

    def __contains__(self, pos: object) -> bool:
        return pos in self._values

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._values))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Row):
            return NotImplemented
        return self._values == other._values

    def __hash__(self) -> int:
        return hash(frozenset(self._values))

    def __repr__(self) -> str:
        if not self._values:
            return "Row()"
        return f"Row({self.to_string()!r}, min={self.min})"

    def neighbor_sum(self, pos: int) -> int:
        """Count filled cells up to two positions away, excluding ``pos``."""
        values = self._values
        return sum(1 for n in (pos - 2, pos - 1, pos + 1, pos + 2) if n in values)

    def survives(self, pos: int) -> bool:
        return self.neighbor_sum(pos) in SURVIVE_SUMS

    def is_born(self, pos: int) -> bool:
        return self.neighbor_sum(pos) in BIRTH_SUMS

    def step(self) -> Row:
        """Return the next configuration.

        Only ``[min - 1, max + 1]`` is swept: a cell two or more positions
        outside the filled span has at most one filled neighbor.
        """
        nxt = Row()
        if not self._values:
            return nxt
        for pos in range(self.min - 1, self.max + 2):
            alive = self.survives(pos) if pos in self._values else self.is_born(pos)
            if alive:
                nxt._insert(pos)
        return nxt

    def eq_shift(self, other: Row, offset: int) -> bool:
        """True if every filled cell shifted by ``offset`` is filled in ``other``.

        One-directional: callers compare cardinalities first when they need
        an exact match.
        """
        values = other._values
        return all(x + offset in values for x in self._values)

    def glides_onto(self, other: Row) -> bool:
        return (
            len(self._values) == len(other._values)
            and self.min != other.min
            and self.eq_shift(other, other.min - self.min)
        )

    def to_string(self, filled: str = FILLED, empty: str = EMPTY) -> str:
        if not self._values:
            return ""
        return "".join(
            filled if pos in self._values else empty for pos in range(self.min, self.max + 1)
        )
