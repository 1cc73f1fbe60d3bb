import pytest

from nbodysim.direct_parallel import main, partition, simulate_parallel
from nbodysim.particles import Body, earth_sun_bodies, random_bodies, triangle_bodies


def test_partition_even_split_with_remainder_last():
    assert partition(10, 4) == [(0, 2), (2, 4), (4, 6), (6, 10)]


def test_partition_fewer_bodies_than_workers():
    assert partition(3, 4) == [(0, 0), (0, 0), (0, 0), (0, 3)]


@pytest.mark.parametrize("n_bodies", [0, 1, 5, 17, 100])
@pytest.mark.parametrize("workers", [1, 2, 3, 4, 8])
def test_partition_covers_all_bodies_contiguously(n_bodies, workers):
    ranges = partition(n_bodies, workers)
    assert len(ranges) == workers
    covered = [i for start, end in ranges for i in range(start, end)]
    assert covered == list(range(n_bodies))


@pytest.mark.parametrize("args", [(5, 0), (5, -1), (-1, 2)])
def test_partition_rejects_bad_arguments(args):
    with pytest.raises(ValueError):
        partition(*args)


@pytest.mark.parametrize("workers", [2, 4, 7, 10])
def test_result_does_not_depend_on_worker_count(workers):
    reference = random_bodies(7)
    simulate_parallel(reference, 5, num_workers=1)
    assert reference[0].pos[0] > 0.0

    bodies = random_bodies(7)
    simulate_parallel(bodies, 5, num_workers=workers)
    assert [b.pos for b in bodies] == [b.pos for b in reference]
    assert [b.vel for b in bodies] == [b.vel for b in reference]


def test_symmetric_pair_stays_symmetric():
    bodies = [Body(1.0, pos=[-1.0, 0.0]), Body(1.0, pos=[1.0, 0.0])]
    simulate_parallel(bodies, 3, num_workers=2, g=1.0)
    assert bodies[0].pos[0] == -bodies[1].pos[0]
    assert bodies[0].vel[0] == -bodies[1].vel[0]
    assert bodies[0].pos[0] > -1.0


def test_momentum_is_conserved():
    bodies = earth_sun_bodies()
    initial_px = sum(b.mass * b.vel[0] for b in bodies)
    simulate_parallel(bodies, 5)
    px = sum(b.mass * b.vel[0] for b in bodies)
    py = sum(b.mass * b.vel[1] for b in bodies)
    assert px == pytest.approx(initial_px, rel=1e-9)
    assert abs(py) < 1e10


def test_snapshot_records_state_before_first_step(tmp_path):
    path = tmp_path / "snap.csv"
    simulate_parallel(triangle_bodies(), 2, snapshot_path=str(path))
    text = path.read_text()
    assert text.split("\n")[0] == "10.000000,10.000000,0.000000,0.000000"
    assert text.count("\n\n") == 1


def test_worker_failure_is_raised():
    bodies = [Body(0.0, pos=[0.0, 0.0]), Body(1.0, pos=[5.0, 0.0])]
    with pytest.raises(ZeroDivisionError):
        simulate_parallel(bodies, 2, num_workers=2)


def test_main_runs_triangle(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["-S", "triangle", "-t", "2"]) == 0
    times = (tmp_path / "pthread-parallel-times.csv").read_text()
    assert times.startswith("[t=2,n=3] Elapsed time : ")
    data = (tmp_path / "data.csv").read_text()
    assert data.startswith("10.000000,10.000000,0.000000,0.000000\n")


def test_main_default_is_earth_sun(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["-t", "1"]) == 0
    times = (tmp_path / "pthread-parallel-times.csv").read_text()
    assert times.startswith("[t=1,n=2]")


def test_main_rejects_zero_canvas(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["-C", "0-5"]) == -1
    assert "width and height" in capsys.readouterr().err


def test_main_accepts_canvas(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["-C", "3-4", "-t", "1"]) == 0
    assert (tmp_path / "pthread-parallel-times.csv").read_text().startswith("[t=1,n=2]")


def test_main_invalid_name(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["-S", "nowhere"]) == 1
    assert "Invalid simulation name" in capsys.readouterr().out