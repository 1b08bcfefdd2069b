"""Turning the state tree of a plant into coloured cone meshes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from plantgrow.geometry import Primitive, cone
from plantgrow.growth import NONE, GrowthState, PlantConfig, StateTree, growth
from plantgrow.transform import MatrixStack

Color = tuple[float, float, float]


@dataclass
class ColoredMesh:
    """One cone of the plant, with its colour and modelview matrix."""

    part: str
    color: Color
    matrix: np.ndarray
    primitives: list[Primitive] = field(default_factory=list)

    def world_vertices(self) -> np.ndarray:
        """All vertices of the mesh transformed by its matrix, as an (n, 3) array."""
        points = [vertex for primitive in self.primitives for vertex in primitive.vertices]
        if not points:
            return np.empty((0, 3))
        homogeneous = np.column_stack([np.array(points, dtype=float), np.ones(len(points))])
        transformed = homogeneous @ self.matrix.T
        return transformed[:, :3]


class PlantBuilder:
    """Walks the state tree of a plant and records the cones that make it up.

    Nodes are created in the tree the first time they are reached, so
    repeated builds of the same plant reuse the same parameters.
    """

    def __init__(
        self, tree: Optional[StateTree] = None, config: Optional[PlantConfig] = None
    ) -> None:
        if tree is None:
            tree = StateTree(config=config or PlantConfig())
        self.tree = tree
        self.config = tree.config
        self.stack = MatrixStack()
        self.meshes: list[ColoredMesh] = []
        self.root = 0

    def _growth(self, mytime: float) -> float:
        return growth(mytime, self.config.sigmoid_growth)

    def _grow_color(self, factor: float) -> Color:
        tip, diff = self.config.color_tip, self.config.color_diff
        return tuple(t + factor * d for t, d in zip(tip, diff))

    def _emit(self, part: str, color: Color, rad: float, rad2: float, height: float) -> None:
        self.meshes.append(
            ColoredMesh(
                part,
                tuple(color),
                self.stack.matrix.copy(),
                cone(rad, rad2, height, False, self.config.cone_approx),
            )
        )

    def build(self, time_cur: float, base_matrix=None) -> list[ColoredMesh]:
        """Return the meshes of the plant at time ``time_cur``."""
        cfg = self.config
        self.meshes = []
        self.stack = MatrixStack(base_matrix)
        size_bot = cfg.init_size * self._growth(time_cur)
        self.stack.rotate(-90, 1, 0, 0)
        self.stack.translate(*cfg.start)
        draw = self.draw_big_twig if cfg.tree_depth == 2 else self.draw_twig
        self.root = draw(time_cur, size_bot, cfg.init_size, 0.0, 0.0, self.root)
        return self.meshes

    def draw_leaf(
        self, mytime: float, size_bot: float, deg: float, azimuth: float, index: int
    ) -> int:
        """Draw one leaf and return the index of its node in the tree."""
        if size_bot <= 0 or mytime < 0:
            return index
        cfg = self.config
        step = self.tree.next_state(
            index, cfg.init_size * cfg.leaf_to_twig_ratio, deg, azimuth, mytime
        )
        factor = self._growth(step.mytime)
        size = step.size * factor
        deg = step.deg * factor

        if step.rule == 2:
            with self.stack.saved():
                self.stack.rotate(cfg.turn_spin, 0, 1, 0)
                self.stack.rotate(step.azimuth, 0, 0, 1)
                self.stack.rotate(deg, 0, 1, 0)
                color = cfg.green if cfg.green_leaves else self._grow_color(factor)
                self._emit("leaf", color, size_bot, 0.02 * size_bot, size * size_bot)
        elif cfg.tree_depth == 20:
            node = self.tree[step.index]
            with self.stack.saved():
                if step.rule == 1:
                    node.child = self.draw_twig(
                        step.mytime - 0.5, size_bot, size_bot, deg, step.azimuth, node.child
                    )
                else:
                    node.child = self.draw_big_twig(
                        step.mytime - 0.5, size_bot, cfg.init_size, deg, step.azimuth,
                        node.child,
                    )
        return step.index

    def _link_siblings(self, node: GrowthState, count: int, azimuth: float, spin: float, draw):
        """Call ``draw`` for each sibling slot after ``node``; return the final azimuth."""
        link: Optional[GrowthState] = node
        for _ in range(count):
            target = link.sibling if link is not None else NONE
            created = draw(azimuth, target)
            if link is not None:
                link.sibling = created
            link = self.tree[created] if created != NONE else None
            azimuth += spin
        return azimuth

    def draw_twig(
        self,
        mytime: float,
        size_bot: float,
        size: float,
        deg: float,
        azimuth: float,
        index: int,
    ) -> int:
        """Draw a chain of twig segments with their leaves.

        Returns the index of the first segment's node.
        """
        cfg = self.config
        first = index
        parent: Optional[GrowthState] = None
        while mytime >= 0:
            step = self.tree.next_state(index, size, deg, azimuth, mytime)
            node = self.tree[step.index]
            if parent is None:
                first = step.index
            else:
                parent.child = step.index
            size, azimuth, mytime = step.size, step.azimuth, step.mytime

            rule = step.rule * cfg.branch_per_apex
            spin = int(360 / rule) if rule > 0 else 0
            factor = self._growth(mytime - 0.5)
            size_top = cfg.init_size * factor
            deg = step.deg * factor

            self.stack.rotate(azimuth, 0, 0, 1)
            self.stack.rotate(deg, 0, 1, 0)
            self._emit("twig", self._grow_color(factor), size_bot, size_top, size_bot * 10)
            self.stack.translate(0, 0, size_bot * 10)

            leaf_time = mytime

            def leaf(leaf_azimuth: float, target: int) -> int:
                return self.draw_leaf(
                    leaf_time, size_top, cfg.leaf_outward_angle, leaf_azimuth, target
                )

            azimuth = self._link_siblings(node, rule, azimuth, spin, leaf)

            self.stack.rotate(-deg + cfg.turn_spin, 0, 1, 0)
            self.stack.rotate(-azimuth + cfg.azim_spin, 0, 0, 1)

            parent = node
            index = node.child
            mytime -= 0.5
            size_bot = size_top
        return first

    def draw_big_twig(
        self,
        mytime: float,
        size_bot: float,
        size: float,
        deg: float,
        azimuth: float,
        index: int,
    ) -> int:
        """Draw a chain of large branch segments, each carrying twigs.

        Returns the index of the first segment's node.
        """
        cfg = self.config
        first = index
        parent: Optional[GrowthState] = None
        while mytime >= 0:
            step = self.tree.next_state(index, size, deg, azimuth, mytime)
            node = self.tree[step.index]
            if parent is None:
                first = step.index
            else:
                parent.child = step.index
            size, deg, azimuth, mytime = step.size, step.deg, step.azimuth, step.mytime

            rule = step.rule * cfg.big_branch_per_apex
            spin = float(int(360 / rule)) if rule > 0 else 0.0
            factor = self._growth(mytime - 0.5)
            size_top = cfg.init_size * factor

            self.stack.rotate(azimuth, 0, 0, 1)
            self.stack.rotate(deg, 0, 1, 0)
            self._emit("twig", self._grow_color(factor), size_bot, size_top, size_bot * 10)
            self.stack.translate(0, 0, size_bot * 10)

            twig_time = mytime

            def twig(twig_azimuth: float, target: int) -> int:
                with self.stack.saved():
                    return self.draw_twig(
                        twig_time, size_top, cfg.init_size, cfg.big_leaf_outward_angle,
                        twig_azimuth, target,
                    )

            azimuth = self._link_siblings(node, rule, azimuth, spin, twig)

            self.stack.rotate(-deg + cfg.big_turn_spin, 0, 1, 0)
            self.stack.rotate(-azimuth + cfg.big_azim_spin, 0, 0, 1)

            parent = node
            index = node.child
            mytime -= 0.5
            size_bot = size_top
        return first