"""Run detection: five same-owner markers in a row.

A run is five markers consecutive along one lattice axis. When more than
five markers are in line, only five of them form the run; which five is
decided by a fixed rule (see run_coordinates), not by the player.
"""

from __future__ import annotations

from itertools import islice, takewhile
from typing import Collection, Sequence, TypeVar

from core.constants import Direction, RUN_AXES, RUN_LENGTH
from core.geometry import Coord, adjacent, opposite

T = TypeVar("T")


def zip_alternate(first: Sequence[T], second: Sequence[T]) -> list[T]:
    """Merge two sequences by taking items alternately, first one first.

    When one sequence runs out, the rest of the other is appended.
    """
    merged: list[T] = []
    for i in range(max(len(first), len(second))):
        if i < len(first):
            merged.append(first[i])
        if i < len(second):
            merged.append(second[i])
    return merged


def _contiguous(markers: Collection[Coord], start: Coord, direction: Direction) -> list[Coord]:
    """Return start and the markers directly following it along direction."""
    return list(takewhile(lambda c: c in markers, adjacent(start, direction)))


def run_coordinates_along(
    markers: Collection[Coord], point: Coord, direction: Direction
) -> list[Coord]:
    """Return up to RUN_LENGTH markers in line with point along one axis.

    Markers on the direction side of point are collected first (point
    included), then those on the opposite side; the two are interleaved
    starting with the direction side and cut to RUN_LENGTH. A result of
    exactly RUN_LENGTH coordinates means point is part of a run on this
    axis.

    Returns:
        The selected coordinates, or an empty list if point is not a marker.
    """
    if point not in markers:
        return []
    forward = _contiguous(markers, point, direction)
    backward = _contiguous(markers, point, opposite(direction))[1:]
    return list(islice(zip_alternate(forward, backward), RUN_LENGTH))


def part_of_run(markers: Collection[Coord], point: Coord) -> bool:
    """Check if point belongs to RUN_LENGTH markers in a row on some axis."""
    return any(
        len(run_coordinates_along(markers, point, direction)) == RUN_LENGTH
        for direction in RUN_AXES
    )


def run_coordinates(markers: Collection[Coord], point: Coord) -> list[Coord]:
    """Return the five markers that form the run through point.

    Axes are tried in RUN_AXES order and the first complete run wins.

    Returns:
        RUN_LENGTH coordinates, or an empty list if point is in no run.
    """
    for direction in RUN_AXES:
        coords = run_coordinates_along(markers, point, direction)
        if len(coords) == RUN_LENGTH:
            return coords
    return []


def has_run(markers: Collection[Coord]) -> bool:
    """Check if any marker in the collection is part of a run."""
    marker_set = frozenset(markers)
    return any(part_of_run(marker_set, m) for m in marker_set)
