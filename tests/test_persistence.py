import struct

import numpy as np
import pytest

from plantgrow.growth import GrowthState, StateTree
from plantgrow.persistence import SavedState, load_state, save_state
from plantgrow.transform import translation


def _tree():
    return StateTree.from_states(
        [
            GrowthState(child=1),
            GrowthState(size=0.5, deg=2.0, azimuth=90.0, mytime=-0.25, rule=2, sibling=2),
            GrowthState(size=20.0, deg=38.0, azimuth=180.0, rule=2),
        ]
    )


def test_round_trip(tmp_path):
    path = tmp_path / "out.state"
    view = translation(1.0, 2.0, -15.0)
    tree = _tree()
    save_state(path, view, 2.5, tree)
    loaded = load_state(path)
    assert isinstance(loaded, SavedState)
    assert np.allclose(loaded.view, view)
    assert loaded.time_cur == 2.5
    assert loaded.states == tree.states


def test_view_is_column_major(tmp_path):
    path = tmp_path / "out.state"
    save_state(path, translation(1.0, 2.0, 3.0), 1.0, _tree())
    floats = struct.unpack_from("<16f", path.read_bytes())
    assert floats[12:15] == (1.0, 2.0, 3.0)


def test_file_size(tmp_path):
    path = tmp_path / "out.state"
    tree = _tree()
    save_state(path, np.eye(4), 1.0, tree)
    assert path.stat().st_size == 72 + 28 * len(tree)


def test_missing_last_record(tmp_path):
    path = tmp_path / "out.state"
    tree = _tree()
    save_state(path, np.eye(4), 1.0, tree)
    data = path.read_bytes()
    path.write_bytes(data[:-28])
    loaded = load_state(path)
    assert len(loaded.states) == len(tree)
    assert loaded.states[:-1] == tree.states[:-1]
    assert loaded.states[-1] == GrowthState()


def test_truncated_file(tmp_path):
    path = tmp_path / "out.state"
    save_state(path, np.eye(4), 1.0, _tree())
    path.write_bytes(path.read_bytes()[:-56])
    with pytest.raises(ValueError):
        load_state(path)


def test_short_header(tmp_path):
    path = tmp_path / "out.state"
    path.write_bytes(b"\x00" * 10)
    with pytest.raises(ValueError):
        load_state(path)


def test_bad_view_shape(tmp_path):
    with pytest.raises(ValueError):
        save_state(tmp_path / "out.state", np.eye(3), 1.0, _tree())


def test_to_tree(tmp_path):
    path = tmp_path / "out.state"
    tree = _tree()
    save_state(path, np.eye(4), 1.0, tree)
    rebuilt = load_state(path).to_tree()
    assert len(rebuilt) == len(tree)
    assert rebuilt[1].sibling == tree[1].sibling