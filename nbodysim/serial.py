"""Sequential all-pairs simulation that updates each body in turn."""

from __future__ import annotations

import getopt
import re
import sys
from collections.abc import Sequence
from dataclasses import dataclass

from .output import append_snapshot, append_timing, reset_file, wall_time
from .particles import (
    Body,
    SimulationError,
    compute_acceleration,
    compute_force,
    init_simulation,
)

G = 6.67259e-11
DELTA_T = 0.1
FILENAME = "data.csv"
TIMERFILE = "serial-nbodies-times.csv"
SNAPSHOT_EVERY = 1_000_000
DEFAULT_STEPS = 10000

_INIT_ERROR = "Error initializing simulation"
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


class _ExitRequest(Exception):
    """Raised while reading the command line when the program should stop."""

    def __init__(self, code: int) -> None:
        super().__init__(code)
        self.code = code


@dataclass
class _Options:
    n_step: int = DEFAULT_STEPS
    n_bodies: int = 0
    name: str = "default"


def _atoi(text: str) -> int:
    """Leading integer of ``text``, or 0 when there is none."""
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _parse_options(argv: Sequence[str], prog: str, default_name: str, canvas: bool) -> _Options:
    """Read ``-t``, ``-n``, ``-S`` and, with ``canvas``, ``-C width-height``."""
    optstring = "t:n:S:C:" if canvas else "t:S:n:"
    try:
        pairs, _ = getopt.gnu_getopt(list(argv), optstring)
    except getopt.GetoptError as err:
        print(f"{prog}: {err}", file=sys.stderr)
        print(f"Usage: {prog} [-t n_step] [-n n_bodies] [-S simulation_name]")
        raise _ExitRequest(1) from err

    options = _Options(name=default_name)
    for flag, value in pairs:
        if flag == "-t":
            options.n_step = _atoi(value)
        elif flag == "-n":
            options.n_bodies = _atoi(value)
        elif flag == "-S":
            options.name = value
        elif flag == "-C":
            parts = [part for part in value.split("-") if part]
            width = _atoi(parts[0]) if parts else 0
            height = _atoi(parts[1]) if len(parts) > 1 else 0
            if not (width and height):
                print("width and height are required", file=sys.stderr)
                raise _ExitRequest(-1)
    return options


def _load_bodies(name: str, n_bodies: int, scattered: bool = False) -> list[Body] | None:
    """Build the named preset, reporting on stdout and returning None on failure."""
    try:
        return init_simulation(name, n_bodies, scattered)
    except SimulationError as err:
        print(err)
        if str(err) != _INIT_ERROR:
            print(_INIT_ERROR)
        return None


def _net_force(bodies: Sequence[Body], index: int, g: float) -> tuple[float, float]:
    """Sum of the forces every other body exerts on ``bodies[index]``."""
    body = bodies[index]
    fx = fy = 0.0
    for other_index, other in enumerate(bodies):
        if other_index != index:
            dfx, dfy = compute_force(body, other, g)
            fx += dfx
            fy += dfy
    return fx, fy


def _advanced(body: Body, force: Sequence[float], dt: float) -> tuple[list[float], list[float]]:
    """Velocity and position of ``body`` after one explicit Euler step under ``force``."""
    ax, ay = compute_acceleration(body, force)
    vel = [body.vel[0] + ax * dt, body.vel[1] + ay * dt]
    pos = [body.pos[0] + vel[0] * dt, body.pos[1] + vel[1] * dt]
    return vel, pos


def step(bodies: list[Body], g: float = G, dt: float = DELTA_T) -> list[Body]:
    """Advance every body once; later bodies see the already updated earlier ones."""
    for index, body in enumerate(bodies):
        body.vel, body.pos = _advanced(body, _net_force(bodies, index, g), dt)
    return bodies


def simulate(
    bodies: list[Body],
    n_step: int,
    g: float = G,
    dt: float = DELTA_T,
    snapshot_path: str | None = None,
) -> list[Body]:
    """Run ``n_step`` steps, appending a snapshot after every millionth step."""
    for t in range(n_step):
        step(bodies, g, dt)
        if snapshot_path is not None and t % SNAPSHOT_EVERY == 0:
            append_snapshot(snapshot_path, bodies)
    return bodies


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point of the sequential simulation."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        options = _parse_options(args, "nbodysim-serial", "default", canvas=False)
    except _ExitRequest as request:
        return request.code

    bodies = _load_bodies(options.name, options.n_bodies)
    if bodies is None:
        return 1

    reset_file(FILENAME)
    start = wall_time()
    simulate(bodies, options.n_step, snapshot_path=FILENAME)
    elapsed = wall_time() - start
    append_timing(TIMERFILE, elapsed, options.n_step, len(bodies), capitalized=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())