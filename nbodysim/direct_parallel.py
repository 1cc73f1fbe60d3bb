"""All-pairs simulation split across worker threads synchronised by a barrier."""

from __future__ import annotations

import sys
import threading
from collections.abc import Callable, Sequence

from .output import append_snapshot, append_timing, reset_file, wall_time
from .particles import Body
from .serial import (
    DELTA_T,
    FILENAME,
    SNAPSHOT_EVERY,
    _advanced,
    _ExitRequest,
    _load_bodies,
    _net_force,
    _parse_options,
)

G = 6.67259e-11
NUM_THREADS = 4
TIMERFILE = "pthread-parallel-times.csv"

_Update = tuple[list[float], list[float]]


def partition(n_bodies: int, num_workers: int = NUM_THREADS) -> list[tuple[int, int]]:
    """Half-open index ranges per worker; the last worker takes the remainder."""
    if num_workers < 1:
        raise ValueError("at least one worker is required")
    if n_bodies < 0:
        raise ValueError("number of bodies must not be negative")
    share = n_bodies // num_workers
    return [
        (tid * share, n_bodies if tid == num_workers - 1 else (tid + 1) * share)
        for tid in range(num_workers)
    ]


def _run_workers(
    bodies: list[Body],
    n_step: int,
    num_workers: int,
    advance: Callable[[int, int], list[_Update]],
    on_step: Callable[[int], None] | None = None,
) -> None:
    """Run ``n_step`` synchronised steps; each worker updates its own slice.

    Every worker first computes the new state of its slice from the shared
    bodies, then all wait at a barrier before writing the results back.
    """
    ranges = partition(len(bodies), num_workers)
    barrier = threading.Barrier(len(ranges))
    errors: list[BaseException] = []

    def work(tid: int, start: int, end: int) -> None:
        try:
            for t in range(n_step):
                updates = advance(start, end)
                if tid == 0 and on_step is not None:
                    on_step(t)
                barrier.wait()
                for body, (vel, pos) in zip(bodies[start:end], updates):
                    body.vel, body.pos = vel, pos
                barrier.wait()
        except threading.BrokenBarrierError:
            pass
        except BaseException as exc:  # re-raised in the calling thread
            errors.append(exc)
            barrier.abort()

    threads = [
        threading.Thread(target=work, args=(tid, start, end), name=f"nbody-worker-{tid}")
        for tid, (start, end) in enumerate(ranges)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    if errors:
        raise errors[0]


def simulate_parallel(
    bodies: list[Body],
    n_step: int,
    num_workers: int = NUM_THREADS,
    g: float = G,
    dt: float = DELTA_T,
    snapshot_path: str | None = None,
) -> list[Body]:
    """Run ``n_step`` steps where every body sees the state of the previous step.

    A snapshot of the state before the step is appended every millionth step.
    """

    def advance(start: int, end: int) -> list[_Update]:
        return [
            _advanced(body, _net_force(bodies, index, g), dt)
            for index, body in enumerate(bodies[start:end], start)
        ]

    def on_step(t: int) -> None:
        if t % SNAPSHOT_EVERY == 0:
            append_snapshot(snapshot_path, bodies)

    _run_workers(bodies, n_step, num_workers, advance, on_step if snapshot_path else None)
    return bodies


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point of the threaded all-pairs simulation."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        options = _parse_options(args, "nbodysim-parallel", "earth_sun", canvas=True)
    except _ExitRequest as request:
        return request.code

    bodies = _load_bodies(options.name, options.n_bodies)
    if bodies is None:
        return 1

    reset_file(FILENAME)
    start = wall_time()
    simulate_parallel(bodies, options.n_step, snapshot_path=FILENAME)
    elapsed = wall_time() - start
    append_timing(TIMERFILE, elapsed, options.n_step, len(bodies))
    return 0


if __name__ == "__main__":
    sys.exit(main())