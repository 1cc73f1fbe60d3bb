"""Threaded Barnes-Hut simulation over a quadtree rebuilt every step."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from .direct_parallel import NUM_THREADS, _run_workers
from .output import append_timing, reset_file, wall_time
from .particles import Body
from .serial import DELTA_T, FILENAME, _advanced, _ExitRequest, _load_bodies, _parse_options
from .tree import Node

THETA = 0.5
G = 6.674e-11
TIMERFILE = "pthread-bh-times.csv"


def bounding_box(bodies: Sequence[Body]) -> tuple[float, float, float, float]:
    """Smallest box holding every body, as (min_x, min_y, max_x, max_y)."""
    if not bodies:
        raise ValueError("cannot bound an empty set of bodies")
    xs = [body.pos[0] for body in bodies]
    ys = [body.pos[1] for body in bodies]
    return min(xs), min(ys), max(xs), max(ys)


def _build(bodies: Sequence[Body]) -> Node:
    min_x, min_y, max_x, max_y = bounding_box(bodies)
    root = Node(min_x=min_x, min_y=min_y, max_x=max_x, max_y=max_y)
    for body in bodies:
        root.insert(body)
    return root


def simulate_barnes_hut(
    bodies: list[Body],
    n_step: int,
    num_workers: int = NUM_THREADS,
    theta: float = THETA,
    g: float = G,
    dt: float = DELTA_T,
) -> list[Body]:
    """Run ``n_step`` steps, approximating distant groups of bodies by their mass."""
    if not bodies:
        raise ValueError("cannot simulate without bodies")

    def advance(start: int, end: int) -> list[tuple[list[float], list[float]]]:
        if start == end:
            return []
        root = _build(bodies)
        return [
            _advanced(body, root.calculate_force(body, theta, g), dt)
            for body in bodies[start:end]
        ]

    _run_workers(bodies, n_step, num_workers, advance)
    return bodies


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point of the Barnes-Hut simulation."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        options = _parse_options(args, "nbodysim-barnes-hut", "earth_sun", canvas=True)
    except _ExitRequest as request:
        return request.code

    bodies = _load_bodies(options.name, options.n_bodies, scattered=True)
    if bodies is None:
        return 1

    reset_file(FILENAME)
    start = wall_time()
    simulate_barnes_hut(bodies, options.n_step)
    elapsed = wall_time() - start
    append_timing(TIMERFILE, elapsed, options.n_step, len(bodies))
    return 0


if __name__ == "__main__":
    sys.exit(main())