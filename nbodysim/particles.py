"""Bodies, the preset initial configurations and the pairwise gravity law."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

_SEPARATOR = "|----------------------------------------------------|"


class SimulationError(Exception):
    """Raised when a simulation cannot be set up."""


def _pair() -> list[float]:
    return [0.0, 0.0]


@dataclass
class Body:
    """A point mass with a 2-D velocity and position."""

    mass: float = 0.0
    vel: list[float] = field(default_factory=_pair)
    pos: list[float] = field(default_factory=_pair)

    def __post_init__(self) -> None:
        self.mass = float(self.mass)
        self.vel = [float(v) for v in self.vel]
        self.pos = [float(p) for p in self.pos]
        if len(self.vel) != 2 or len(self.pos) != 2:
            raise ValueError("velocity and position must have two components")

    def copy(self) -> Body:
        """Return an independent copy of this body."""
        return Body(self.mass, list(self.vel), list(self.pos))


def triangle_bodies() -> list[Body]:
    """Two light bodies and a heavy one forming a triangle, all at rest."""
    return [
        Body(5.9e3, pos=[10, 10]),
        Body(5.9e3, pos=[90, 10]),
        Body(5.9e10, pos=[50, 50]),
    ]


def square_bodies() -> list[Body]:
    """Four light bodies at the corners of a square around a heavier centre."""
    corners = [(10, 10), (10, 90), (90, 90), (90, 10)]
    bodies = [Body(5.9, vel=[2e-4, 0], pos=list(corner)) for corner in corners]
    bodies.append(Body(5.9e2, pos=[50, 50]))
    return bodies


def earth_sun_bodies() -> list[Body]:
    """A sun at the origin and a planet orbiting it."""
    return [
        Body(2e30, pos=[0, 0]),
        Body(5e20, vel=[-2.9785e4, 0], pos=[0, 7e10]),
    ]


def _check_count(n_bodies: int) -> int:
    n_bodies = int(n_bodies)
    if n_bodies < 0:
        raise SimulationError("number of bodies must not be negative")
    return n_bodies


def random_bodies(n_bodies: int) -> list[Body]:
    """Bodies on the diagonal: body i has mass i+1 and sits at (i, i)."""
    return [
        Body(i + 1, pos=[i, i]) for i in range(_check_count(n_bodies))
    ]


def scattered_bodies(n_bodies: int) -> list[Body]:
    """Bodies spread on alternate sides of the origin with growing mass."""
    bodies = []
    for i in range(_check_count(n_bodies)):
        sign = -1 if i % 2 == 0 else 1
        bodies.append(Body(10 * i + 1, pos=[sign * 40 * i + 1, sign * 400 * i + 1]))
    return bodies


def init_simulation(name: str, n_bodies: int = 0, scattered: bool = False) -> list[Body]:
    """Build the named preset; ``random`` uses ``n_bodies`` bodies.

    With ``scattered`` the ``random`` preset spreads bodies around the origin
    instead of placing them on the diagonal.
    """
    presets = {
        "triangle": triangle_bodies,
        "square": square_bodies,
        "earth_sun": earth_sun_bodies,
    }
    if name in presets:
        bodies = presets[name]()
    elif name == "random":
        bodies = scattered_bodies(n_bodies) if scattered else random_bodies(n_bodies)
    else:
        raise SimulationError("Invalid simulation name")
    if not bodies:
        raise SimulationError("Error initializing simulation")
    return bodies


def compute_force(body1: Body, body2: Body, g: float) -> tuple[float, float]:
    """Force that ``body2`` exerts on ``body1``; distances below 1 count as 1."""
    dx = body1.pos[0] - body2.pos[0]
    dy = body1.pos[1] - body2.pos[1]
    distance = max(math.sqrt(dx * dx + dy * dy), 1.0)
    scale = g * body1.mass * body2.mass / (distance * distance * distance)
    return (-scale * dx, -scale * dy)


def compute_acceleration(body: Body, force: Sequence[float]) -> tuple[float, float]:
    """Acceleration of ``body`` under ``force``."""
    return (force[0] / body.mass, force[1] / body.mass)


def format_bodies(bodies: Iterable[Body]) -> str:
    """Human-readable listing of the bodies' mass, velocity and position."""
    parts = []
    for index, body in enumerate(bodies):
        parts.append(
            f"Body {index}\n"
            f"Mass: {body.mass:f}\n"
            f"Velocity: {body.vel[0]:f} {body.vel[1]:f}\n"
            f"Position: {body.pos[0]:f} {body.pos[1]:f}\n"
            f"{_SEPARATOR}\n\n"
        )
    return "".join(parts)