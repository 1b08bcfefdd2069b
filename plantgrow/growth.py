"""Growth curves, random parameters and the persistent state tree of a plant."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Iterable, Iterator, NamedTuple, Optional

NONE = -1
"""Index that marks a missing child or sibling in the state tree."""


def growth(mytime: float, sigmoid: bool = False) -> float:
    """Growth factor of a component that has existed for ``mytime``."""
    if sigmoid:
        exponent = 3 - mytime
        if exponent > 700:
            return 0.0
        return 1 / (1 + math.exp(exponent))
    if mytime <= 0:
        return 0.0
    return max(math.log(mytime * 4) / 4, 0.0)


def uniform(mu: float, sigma: float, rng: Optional[random.Random] = None) -> float:
    """Uniform value of width ``sigma`` centred on ``mu``."""
    source = rng if rng is not None else random
    return mu - sigma / 2 + source.random() * sigma


def gaussian(m: float, s: float, rng: Optional[random.Random] = None) -> float:
    """Normally distributed value with mean ``m`` and deviation ``s``."""
    source = rng if rng is not None else random
    return source.gauss(m, s)


_DISTRIBUTIONS = {"uniform": uniform, "gaussian": gaussian}


@dataclass(frozen=True)
class PlantConfig:
    """Tunable parameters of the plant, its growth and the viewer."""

    spin: float = 0.0025
    speed: float = 0.005
    init_size: float = 0.4
    time_incr: float = 0.00005
    tree_depth: int = 1
    sigmoid_growth: bool = False
    stochastic: bool = False
    state_size: int = 10000
    cone_approx: int = 3
    rand_dist: str = "uniform"
    green_leaves: bool = False
    azim_spin: float = 5
    turn_spin: float = 0
    branch_per_apex: int = 2
    leaf_outward_angle: float = 38
    leaf_to_twig_ratio: float = 50
    big_azim_spin: float = 55
    big_turn_spin: float = 0
    big_branch_per_apex: int = 2
    big_leaf_outward_angle: float = 65
    start: tuple[float, float, float] = (0.0, 5.0, -5.0)
    green: tuple[float, float, float] = (0.0, 1.0, 0.0)
    grey: tuple[float, float, float, float] = (0.25, 0.45, 0.35, 1.0)
    color_tip: tuple[float, float, float] = (0.0, 1.0, 0.0)
    color_diff: tuple[float, float, float] = (0.6, -0.7, 0.0)

    def __post_init__(self) -> None:
        if self.rand_dist not in _DISTRIBUTIONS:
            raise ValueError(f"unknown distribution {self.rand_dist!r}")
        if self.state_size < 1:
            raise ValueError("state_size must be at least 1")


@dataclass
class GrowthState:
    """Parameters fixed for one node of the plant once it first appears."""

    size: float = 0.0
    deg: float = 0.0
    azimuth: float = 0.0
    mytime: float = 0.0
    rule: int = 0
    child: int = NONE
    sibling: int = NONE


class StateStep(NamedTuple):
    """Result of looking up or creating a node in the state tree."""

    index: int
    rule: int
    size: float
    deg: float
    azimuth: float
    mytime: float


class StateTreeFull(Exception):
    """Raised when the state tree has no room for another node."""


@dataclass
class StateTree:
    """All nodes of a plant, with the root node at index 0."""

    config: PlantConfig = field(default_factory=PlantConfig)
    rng: random.Random = field(default_factory=random.Random)
    states: list[GrowthState] = field(default_factory=lambda: [GrowthState()])

    def __post_init__(self) -> None:
        if not self.states:
            self.states = [GrowthState()]

    @classmethod
    def from_states(
        cls,
        states: Iterable[GrowthState],
        config: Optional[PlantConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> "StateTree":
        return cls(
            config=config or PlantConfig(),
            rng=rng or random.Random(),
            states=list(states),
        )

    def __len__(self) -> int:
        return len(self.states)

    def __getitem__(self, index: int) -> GrowthState:
        return self.states[index]

    def __iter__(self) -> Iterator[GrowthState]:
        return iter(self.states)

    @property
    def next_free(self) -> int:
        """Index of the most recently created node."""
        return len(self.states) - 1

    def reset(self) -> None:
        """Forget every node except a fresh root."""
        self.states = [GrowthState()]

    def _sample(self, mu: float, sigma: float) -> float:
        return _DISTRIBUTIONS[self.config.rand_dist](mu, sigma, self.rng)

    def next_state(
        self, index: int, size: float, deg: float, azimuth: float, mytime: float
    ) -> StateStep:
        """Look up node ``index``, or create one when it is ``NONE``.

        An existing node supplies its size, angle and azimuth and adds its
        time offset to ``mytime``. The caller links a new node into the tree.
        """
        if index != NONE:
            node = self.states[index]
            return StateStep(
                index, node.rule, node.size, node.deg, node.azimuth,
                mytime + node.mytime,
            )

        if len(self.states) >= self.config.state_size:
            raise StateTreeFull(f"state tree holds at most {self.config.state_size} nodes")

        if self.config.stochastic:
            node = GrowthState(
                size=self._sample(size, size / 3),
                deg=self._sample(deg, 20),
                azimuth=self._sample(azimuth, 180),
                mytime=self._sample(-0.25, 0.5),
                rule=int(self._sample(2.5, 2)),
            )
            mytime = node.mytime
        else:
            node = GrowthState(size=size, deg=deg, azimuth=azimuth, mytime=0.0, rule=2)

        self.states.append(node)
        return StateStep(
            len(self.states) - 1, node.rule, node.size, node.deg, node.azimuth, mytime
        )