"""Board model for the Yinsh rules engine.

The board is an immutable snapshot of which element sits on which point.
It is indexed two ways:
- A map from coordinate to element, for point lookup
- Per-player sets of ring and marker coordinates, for enumeration

Both indexes are built together whenever a new Board is created, so they
can never disagree. Every "mutation" returns a new Board.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .constants import ElementKind, Player
from .geometry import Coord


@dataclass(frozen=True)
class Element:
    """A piece on the board: a ring or a marker owned by a player."""

    kind: ElementKind
    owner: Player

    @classmethod
    def ring(cls, owner: Player) -> Element:
        return cls(ElementKind.RING, owner)

    @classmethod
    def marker(cls, owner: Player) -> Element:
        return cls(ElementKind.MARKER, owner)

    def is_ring(self) -> bool:
        return self.kind == ElementKind.RING

    def is_marker(self) -> bool:
        return self.kind == ElementKind.MARKER

    def flipped(self) -> Element:
        """Return the same kind of element owned by the opponent."""
        return Element(self.kind, self.owner.other)

    def __str__(self) -> str:
        return f"{self.kind.value.capitalize()}({self.owner.value})"


class Board:
    """Immutable placement of rings and markers.

    Attributes are private; use element_at(), rings(), markers() and
    elements() to read, and place()/remove()/replace() to derive new
    boards.
    """

    __slots__ = ("_elements", "_index")

    def __init__(self, elements: Optional[Mapping[Coord, Element]] = None):
        """Build a board from a coordinate -> element mapping.

        Args:
            elements: Initial placement. The mapping is copied.
        """
        self._elements: dict[Coord, Element] = dict(elements or {})

        index: dict[Element, set[Coord]] = {
            Element(kind, owner): set()
            for kind in ElementKind
            for owner in Player
        }
        for coord, element in self._elements.items():
            index[element].add(coord)
        self._index: dict[Element, frozenset[Coord]] = {
            element: frozenset(coords) for element, coords in index.items()
        }

    @classmethod
    def empty(cls) -> Board:
        """Create a board with nothing on it."""
        return cls()

    @classmethod
    def from_elements(cls, elements: Mapping[Coord, Element]) -> Board:
        """Create a board from a coordinate -> element mapping."""
        return cls(elements)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def element_at(self, coord: Coord) -> Optional[Element]:
        """Return the element at coord, or None if the point is free."""
        return self._elements.get(coord)

    def is_free(self, coord: Coord) -> bool:
        """Check if nothing sits at coord.

        Board membership is not checked; off-board points are "free".
        """
        return coord not in self._elements

    def rings(self, player: Player) -> frozenset[Coord]:
        """Return the coordinates of a player's rings."""
        return self._index[Element.ring(player)]

    def markers(self, player: Player) -> frozenset[Coord]:
        """Return the coordinates of a player's markers."""
        return self._index[Element.marker(player)]

    def all_rings(self) -> frozenset[Coord]:
        return self.rings(Player.BLACK) | self.rings(Player.WHITE)

    def all_markers(self) -> frozenset[Coord]:
        return self.markers(Player.BLACK) | self.markers(Player.WHITE)

    def ring_count(self) -> int:
        """Return the total number of rings on the board."""
        return len(self.rings(Player.BLACK)) + len(self.rings(Player.WHITE))

    def elements(self) -> dict[Coord, Element]:
        """Return a copy of the coordinate -> element map."""
        return dict(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __contains__(self, coord: object) -> bool:
        return coord in self._elements

    # -------------------------------------------------------------------------
    # Derived boards
    # -------------------------------------------------------------------------

    def place(self, coord: Coord, element: Element) -> Board:
        """Return a new board with element added at coord.

        Raises:
            ValueError: If coord is already occupied.
        """
        if coord in self._elements:
            raise ValueError(
                f"Cannot place {element} at {coord}: "
                f"occupied by {self._elements[coord]}"
            )
        elements = dict(self._elements)
        elements[coord] = element
        return Board(elements)

    def remove(self, coord: Coord) -> Board:
        """Return a new board with the element at coord taken away.

        Raises:
            KeyError: If nothing sits at coord.
        """
        if coord not in self._elements:
            raise KeyError(f"No element at {coord}")
        elements = dict(self._elements)
        del elements[coord]
        return Board(elements)

    def replace(self, coord: Coord, element: Element) -> Board:
        """Return a new board with the element at coord swapped for another.

        Raises:
            KeyError: If nothing sits at coord.
        """
        return self.remove(coord).place(coord, element)

    # -------------------------------------------------------------------------
    # Comparison and representation
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._elements == other._elements

    def __hash__(self) -> int:
        return hash(frozenset(self._elements.items()))

    def __repr__(self) -> str:
        items = ", ".join(
            f"{coord}: {element}" for coord, element in sorted(self._elements.items())
        )
        return f"Board({{{items}}})"
