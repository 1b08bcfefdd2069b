import random

import pytest

from plantgrow.growth import (
    NONE,
    GrowthState,
    PlantConfig,
    StateTree,
    StateTreeFull,
    gaussian,
    growth,
    uniform,
)


class _FixedRandom:
    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


@pytest.mark.parametrize("t", [-3.0, 0.0, 0.1, 0.25])
def test_log_growth_is_zero_before_quarter(t):
    assert growth(t) == 0.0


def test_log_growth_increases():
    values = [growth(t) for t in (0.5, 1.0, 2.0, 4.0, 8.0)]
    assert values == sorted(values)
    assert values[0] > 0.0


def test_sigmoid_midpoint_and_bounds():
    assert growth(3.0, True) == pytest.approx(0.5)
    assert growth(-1000.0, True) == 0.0
    assert 0.99 < growth(20.0, True) <= 1.0


def test_uniform_bounds_with_fixed_draws():
    assert uniform(1.0, 2.0, _FixedRandom(0.0)) == pytest.approx(1.0 - 2.0 / 2)
    assert uniform(1.0, 2.0, _FixedRandom(1.0)) == pytest.approx(1.0 + 2.0 / 2)


def test_uniform_stays_in_range():
    rng = random.Random(3)
    draws = [uniform(5.0, 4.0, rng) for _ in range(200)]
    assert all(3.0 <= d <= 7.0 for d in draws)


def test_gaussian_reproducible_and_degenerate():
    assert gaussian(0.0, 1.0, random.Random(5)) == gaussian(0.0, 1.0, random.Random(5))
    assert gaussian(2.0, 0.0, random.Random(1)) == 2.0


def test_config_rejects_unknown_distribution():
    with pytest.raises(ValueError):
        PlantConfig(rand_dist="poisson")


def test_new_tree_has_empty_root():
    tree = StateTree()
    assert len(tree) == 1
    assert tree[0] == GrowthState()
    assert tree[0].child == NONE
    assert tree.next_free == 0


def test_creates_deterministic_node():
    tree = StateTree()
    step = tree.next_state(NONE, 1.0, 2.0, 3.0, 4.0)
    assert step.index == 1
    assert (step.rule, step.size, step.deg, step.azimuth, step.mytime) == (
        2, 1.0, 2.0, 3.0, 4.0,
    )
    assert tree[1] == GrowthState(1.0, 2.0, 3.0, 0.0, 2, NONE, NONE)


def test_existing_node_overrides_parameters():
    tree = StateTree()
    tree.next_state(NONE, 1.0, 2.0, 3.0, 4.0)
    step = tree.next_state(1, 9.0, 9.0, 9.0, 0.5)
    assert (step.index, step.size, step.deg, step.azimuth) == (1, 1.0, 2.0, 3.0)
    assert step.mytime == 0.5
    assert len(tree) == 2


def test_root_lookup_gives_rule_zero():
    step = StateTree().next_state(0, 1.0, 1.0, 1.0, 2.0)
    assert step.rule == 0
    assert step.mytime == 2.0


def test_tree_full():
    tree = StateTree(config=PlantConfig(state_size=3))
    tree.next_state(NONE, 1.0, 0.0, 0.0, 0.0)
    tree.next_state(NONE, 1.0, 0.0, 0.0, 0.0)
    with pytest.raises(StateTreeFull):
        tree.next_state(NONE, 1.0, 0.0, 0.0, 0.0)


def test_reset_clears_nodes():
    tree = StateTree()
    tree.next_state(NONE, 1.0, 0.0, 0.0, 0.0)
    tree.reset()
    assert len(tree) == 1
    assert tree.next_free == 0


def test_stochastic_nodes_within_ranges():
    tree = StateTree(config=PlantConfig(stochastic=True), rng=random.Random(7))
    for _ in range(100):
        step = tree.next_state(NONE, 3.0, 10.0, 0.0, 5.0)
        assert step.rule in (1, 2, 3)
        assert 2.5 <= step.size <= 3.5
        assert 0.0 <= step.deg <= 20.0
        assert -0.5 <= step.mytime <= 0.0
        assert step.mytime == tree[step.index].mytime


def test_stochastic_is_reproducible_with_seed():
    config = PlantConfig(stochastic=True, rand_dist="gaussian")
    first = StateTree(config=config, rng=random.Random(11))
    second = StateTree(config=config, rng=random.Random(11))
    a = [first.next_state(NONE, 1.0, 5.0, 0.0, 0.0) for _ in range(5)]
    b = [second.next_state(NONE, 1.0, 5.0, 0.0, 0.0) for _ in range(5)]
    assert a == b


def test_from_states_keeps_nodes():
    nodes = [GrowthState(), GrowthState(size=1.5, rule=2)]
    tree = StateTree.from_states(nodes)
    assert tree.next_free == 1
    assert tree.next_state(1, 0.0, 0.0, 0.0, 0.0).size == 1.5