"""Wall-clock timing and the append-only text files the simulations write."""

from __future__ import annotations

import os
import time
from collections.abc import Iterable
from typing import Union

from .particles import Body

PathLike = Union[str, "os.PathLike[str]"]


def wall_time() -> float:
    """Seconds since the epoch with sub-second resolution."""
    return time.time()


def reset_file(path: PathLike) -> None:
    """Create ``path`` or truncate it to empty."""
    with open(path, "w", encoding="utf-8"):
        pass


def append_snapshot(path: PathLike, bodies: Iterable[Body]) -> None:
    """Append one ``x,y,vx,vy`` line per body, then a blank line."""
    with open(path, "a", encoding="utf-8") as fp:
        for body in bodies:
            fp.write(f"{body.pos[0]:f},{body.pos[1]:f},{body.vel[0]:f},{body.vel[1]:f}\n")
        fp.write("\n")


def append_timing(
    path: PathLike, elapsed: float, steps: int, n_bodies: int, capitalized: bool = True
) -> None:
    """Append the elapsed time of a run of ``steps`` steps over ``n_bodies`` bodies."""
    label = "Elapsed" if capitalized else "elapsed"
    with open(path, "a", encoding="utf-8") as fp:
        fp.write(f"[t={int(steps)},n={int(n_bodies)}] {label} time : {elapsed:f}\n")


def append_profile(path: PathLike, elapsed: float, operation: bool) -> None:
    """Append a profiling line: force calculation when ``operation`` is true, else insertion."""
    label = "calculate_force" if operation else "insert"
    with open(path, "a", encoding="utf-8") as fp:
        fp.write(f"{label}: {elapsed:f}\n")