import time

import pytest

from nbodysim.output import (
    append_profile,
    append_snapshot,
    append_timing,
    reset_file,
    wall_time,
)
from nbodysim.particles import Body, triangle_bodies


def test_wall_time_tracks_clock():
    first = wall_time()
    second = wall_time()
    assert second >= first
    assert abs(first - time.time()) < 5


def test_reset_file_creates_and_truncates(tmp_path):
    path = tmp_path / "data.csv"
    reset_file(path)
    assert path.read_text() == ""
    path.write_text("old content\n")
    reset_file(path)
    assert path.read_text() == ""


def test_snapshot_round_trip(tmp_path):
    path = tmp_path / "data.csv"
    bodies = triangle_bodies() + [Body(1.0, vel=[0.125, -2.5], pos=[-3.75, 8.0])]
    append_snapshot(path, bodies)
    blocks = path.read_text().split("\n\n")
    assert blocks[1] == ""
    rows = blocks[0].splitlines()
    assert len(rows) == len(bodies)
    for row, body in zip(rows, bodies):
        x, y, vx, vy = (float(v) for v in row.split(","))
        assert (x, y) == pytest.approx(tuple(body.pos), abs=1e-6)
        assert (vx, vy) == pytest.approx(tuple(body.vel), abs=1e-6)


def test_snapshots_append(tmp_path):
    path = tmp_path / "data.csv"
    reset_file(path)
    append_snapshot(path, triangle_bodies())
    append_snapshot(path, triangle_bodies())
    text = path.read_text()
    assert text.count("\n\n") == 2
    assert len([line for line in text.splitlines() if line]) == 6


def test_timing_line_format(tmp_path):
    path = tmp_path / "times.csv"
    append_timing(path, 1.5, 10, 3)
    assert path.read_text() == "[t=10,n=3] Elapsed time : 1.500000\n"


def test_timing_lowercase_and_appends(tmp_path):
    path = tmp_path / "times.csv"
    append_timing(path, 0.5, 100, 5, capitalized=True)
    append_timing(path, 0.5, 100, 5, capitalized=False)
    first, second = path.read_text().splitlines()
    assert "Elapsed time" in first
    assert "elapsed time" in second
    assert first.lower() == second.lower()


@pytest.mark.parametrize("operation, label", [(1, "calculate_force"), (0, "insert")])
def test_profile_lines(tmp_path, operation, label):
    path = tmp_path / "profile.csv"
    append_profile(path, 0.25, operation)
    line = path.read_text()
    assert line.endswith("\n")
    name, value = line.strip().split(": ")
    assert name == label
    assert float(value) == pytest.approx(0.25)


def test_missing_directory_raises(tmp_path):
    with pytest.raises(OSError):
        append_timing(tmp_path / "missing" / "times.csv", 1.0, 1, 1)