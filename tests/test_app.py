import random
from pathlib import Path

import numpy as np
import pytest

from plantgrow.app import PlantWindow, frame_filename, main
from plantgrow.bitmap import read_bmp


def test_frame_filename_format():
    assert frame_filename(0) == "frame00000.bmp"
    assert frame_filename(42) == "frame00042.bmp"


def test_frame_filenames_sort_in_order():
    names = [frame_filename(i) for i in (3, 10, 250)]
    assert names == sorted(names)


def test_main_reports_missing_state_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.state")]) == 1
    assert "cannot load" in capsys.readouterr().err


def test_advance_builds_meshes_and_steps_time():
    window = PlantWindow(rng=random.Random(1))
    window._handle_key("g")
    before = window.navigator.time_cur
    _view, meshes = window._advance()
    assert window.navigator.time_cur == pytest.approx(before + window.config.time_incr)
    assert meshes
    assert {mesh.part for mesh in meshes} <= {"twig", "leaf"}


def test_capture_key_returns_command():
    window = PlantWindow()
    assert window._handle_key("c") == "capture"
    assert window._handle_key("f") is None


def test_save_and_load_round_trip(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    window = PlantWindow(rng=random.Random(2))
    window._handle_key("f")
    window._advance()
    assert window._handle_key("S") == "save"
    assert Path("out.state").exists()

    restored = PlantWindow(state_file="out.state")
    assert np.allclose(restored.navigator.start, window.navigator.curview, atol=1e-6)
    assert np.allclose(restored.navigator.curview, restored.navigator.start)
    assert len(restored.tree) == len(window.tree)
    assert restored.navigator.time_cur == pytest.approx(window.navigator.time_cur)


def test_load_key_restores_saved_state(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    window = PlantWindow()
    window._advance()
    window._handle_key("S")
    nodes = len(window.tree)
    window.tree.reset()
    assert window._handle_key("L") == "load"
    assert len(window.tree) == nodes


def test_write_frame_numbers_files(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    window = PlantWindow(width=4, height=2)
    pixels = bytes(range(24))
    first = window._write_frame(pixels)
    second = window._write_frame(pixels)
    assert first.name == frame_filename(0)
    assert second.name == frame_filename(1)
    width, height, data = read_bmp(first)
    assert (width, height, data) == (4, 2, pixels)