"""Saving and loading the view and state tree of a plant."""

from __future__ import annotations

import random
import struct
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Iterable, Optional, Union

import numpy as np

from plantgrow.growth import GrowthState, PlantConfig, StateTree

_HEADER = struct.Struct("<16ffi")
_RECORD = struct.Struct("<4f3i")

PathType = Union[str, PathLike]


@dataclass
class SavedState:
    """View matrix, current time and state tree read from a file."""

    view: np.ndarray
    time_cur: float
    states: list[GrowthState] = field(default_factory=list)

    def to_tree(
        self, config: Optional[PlantConfig] = None, rng: Optional[random.Random] = None
    ) -> StateTree:
        return StateTree.from_states(self.states, config, rng)


def save_state(path: PathType, view, time_cur: float, tree: Iterable[GrowthState]) -> None:
    """Write the view matrix, time and every node of ``tree`` to ``path``."""
    nodes = list(tree)
    if not nodes:
        raise ValueError("state tree has no root")
    matrix = np.asarray(view, dtype=float)
    if matrix.shape != (4, 4):
        raise ValueError("expected a 4x4 view matrix")
    with open(path, "wb") as out:
        out.write(_HEADER.pack(*matrix.flatten(order="F"), time_cur, len(nodes) - 1))
        for node in nodes:
            out.write(
                _RECORD.pack(
                    node.size, node.deg, node.azimuth, node.mytime,
                    node.rule, node.child, node.sibling,
                )
            )


def load_state(path: PathType) -> SavedState:
    """Read a file written by :func:`save_state`.

    A file that lacks the record of the last node gets a fresh node in
    its place.
    """
    raw = Path(path).read_bytes()
    if len(raw) < _HEADER.size:
        raise ValueError("state file too short")
    values = _HEADER.unpack_from(raw, 0)
    view = np.array(values[:16], dtype=float).reshape((4, 4), order="F")
    time_cur, last = values[16], values[17]
    if last < 0:
        raise ValueError("state file has a negative node count")

    available = (len(raw) - _HEADER.size) // _RECORD.size
    count = min(available, last + 1)
    if count < last:
        raise ValueError("state file is truncated")
    body = raw[_HEADER.size:_HEADER.size + count * _RECORD.size]
    states = [GrowthState(*record) for record in _RECORD.iter_unpack(body)]
    if count == last:
        states.append(GrowthState())
    return SavedState(view, time_cur, states)