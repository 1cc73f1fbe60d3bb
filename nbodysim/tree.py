"""Barnes-Hut quadtree: construction, force approximation and debug dumps."""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from .particles import Body, compute_force

_QUADRANTS = ("ne", "se", "nw", "sw")

_RED = "\033[0;31m"
_GREEN = "\033[0;32m"
_MAGENTA = "\033[0;35m"
_CYAN = "\033[0;36m"
_RESET = "\033[0m"


def _pair() -> list[float]:
    return [0.0, 0.0]


def _ref(obj: object) -> str:
    return "(nil)" if obj is None else f"{id(obj):#x}"


@dataclass(eq=False)
class Node:
    """A quadtree cell holding either one body or up to four sub-cells."""

    com: list[float] = field(default_factory=_pair)
    mass: float = 0.0
    min_x: float = 0.0
    min_y: float = 0.0
    max_x: float = 0.0
    max_y: float = 0.0
    body: Body | None = None
    ne: Node | None = None
    se: Node | None = None
    nw: Node | None = None
    sw: Node | None = None

    def is_leaf(self) -> bool:
        """True when the node has no sub-cells."""
        return self.ne is None and self.se is None and self.nw is None and self.sw is None

    def children(self) -> list[Node]:
        """Existing sub-cells in the order ne, se, nw, sw."""
        return [child for child in (self.ne, self.se, self.nw, self.sw) if child is not None]

    def ratio(self, body: Body) -> float:
        """Cell size over the distance from ``body`` to the centre of mass."""
        s = max(abs(self.max_x - self.min_x), abs(self.max_y - self.min_y))
        d = math.hypot(self.com[0] - body.pos[0], self.com[1] - body.pos[1])
        if d == 0:
            return math.inf if s > 0 else math.nan
        return s / d

    def _centre(self) -> tuple[float, float]:
        return (self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2

    def _child(self, quadrant: str, cx: float, cy: float) -> Node:
        """Return the sub-cell for ``quadrant``, creating it with its bounds if absent."""
        existing = getattr(self, quadrant)
        if existing is not None:
            return existing
        if quadrant == "ne":
            child = Node(min_x=cx, min_y=cy, max_x=self.max_x, max_y=self.max_y)
        elif quadrant == "se":
            # The parent's upper bound is narrowed; the new cell's stays at zero.
            child = Node(min_x=cx, min_y=self.min_y, max_x=self.max_x)
            self.max_y = cy
        elif quadrant == "nw":
            child = Node(min_x=self.min_x, min_y=cy, max_x=cx, max_y=self.max_y)
        else:
            child = Node(min_x=self.min_x, min_y=self.min_y, max_x=cx, max_y=cy)
        setattr(self, quadrant, child)
        return child

    def _quadrant_by_com(self, body: Body) -> str | None:
        x, y = body.pos
        if x >= self.com[0] and y >= self.com[1]:
            return "ne"
        if x >= self.com[0] and y < self.com[1]:
            return "se"
        if x < self.com[0] and y >= self.com[1]:
            return "nw"
        if x < self.com[0] and y < self.com[1]:
            return "sw"
        return None

    def _merge_pair(self, old: Body, new: Body) -> None:
        self.body = None
        self.mass = old.mass + new.mass
        self.com = [
            (old.mass * old.pos[0] + new.mass * new.pos[0]) / self.mass,
            (old.mass * old.pos[1] + new.mass * new.pos[1]) / self.mass,
        ]

    def insert_in_place(self, body: Body) -> None:
        """Place ``body`` directly in the sub-cell picked by the centre of mass."""
        quadrant = self._quadrant_by_com(body)
        if quadrant is None:
            return
        cx, cy = self._centre()
        self._child(quadrant, cx, cy).body = body

    def insert(self, body: Body) -> None:
        """Insert ``body``, splitting cells at their geometric centre."""
        node = self
        while True:
            if node.is_leaf():
                if node.body is None:
                    node.body = body
                    return
                old = node.body
                node._merge_pair(old, body)
                node.insert_in_place(body)
                node.insert_in_place(old)
                return

            node.mass += body.mass
            node.com = [
                (node.com[0] * node.mass + body.pos[0] * body.mass) / (node.mass + body.mass),
                (node.com[1] * node.mass + body.pos[1] * body.mass) / (node.mass + body.mass),
            ]
            cx, cy = node._centre()
            x, y = body.pos
            if x >= cx and y >= cy:
                quadrant = "ne"
            elif x >= cx and x < cy:
                quadrant = "se"
            elif x < cx and x >= cy:
                quadrant = "nw"
            elif x < cx and y < cy:
                quadrant = "sw"
            else:
                return
            node = node._child(quadrant, cx, cy)

    def insert_classic(self, body: Body) -> None:
        """Insert ``body`` choosing sub-cells by the running centre of mass."""
        node = self
        while True:
            if node.is_leaf():
                if node.body is None:
                    node.body = body
                    return
                old = node.body
                node._merge_pair(old, body)
                node.min_x, node.max_x = sorted((old.pos[0], body.pos[0]))
                node.min_y, node.max_y = sorted((old.pos[1], body.pos[1]))
                return

            if node.mass == 0:
                node.mass = body.mass
            else:
                node.mass += body.mass
                node.com = [
                    (node.com[0] * node.mass + body.pos[0] * body.mass) / (node.mass + body.mass),
                    (node.com[1] * node.mass + body.pos[1] * body.mass) / (node.mass + body.mass),
                ]
                node.min_x = min(node.min_x, body.pos[0])
                node.max_x = max(node.max_x, body.pos[0])
                node.min_y = min(node.min_y, body.pos[1])
                node.max_y = max(node.max_y, body.pos[1])

            quadrant = node._quadrant_by_com(body)
            if quadrant is None:
                return
            child = getattr(node, quadrant)
            if child is None:
                child = Node()
                setattr(node, quadrant, child)
            node = child

    def calculate_force(self, body: Body, theta: float, g: float) -> tuple[float, float]:
        """Total force on ``body`` from this cell, approximating far cells by their mass."""
        fx = fy = 0.0
        stack = [self]
        while stack:
            node = stack.pop()
            if node.is_leaf():
                if node.body is None or node.body is body:
                    continue
                dfx, dfy = compute_force(body, node.body, g)
            elif node.ratio(body) <= theta:
                dfx, dfy = compute_force(body, Body(node.mass, pos=list(node.com)), g)
            else:
                stack.extend(reversed(node.children()))
                continue
            fx += dfx
            fy += dfy
        return fx, fy

    def count_nodes(self) -> int:
        """Count the nodes plus every empty child slot below them."""
        return 1 + sum(
            1 if child is None else child.count_nodes()
            for child in (self.ne, self.nw, self.se, self.sw)
        )

    def walk(self) -> Iterator[Node]:
        """Yield this node and its descendants in pre-order (ne, se, nw, sw)."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children()))

    def format(self) -> str:
        """Coloured description of this node for debugging."""
        header = (
            f" Node: {_ref(self)} , Total Mass: {self.mass:f}, "
            f"Center of Mass : ({self.com[0]:f},{self.com[1]:f}) {_RESET} \n"
        )
        kids = (
            f"{_MAGENTA} Children : {_ref(self.ne)}, {_ref(self.se)}, "
            f"{_ref(self.nw)}, {_ref(self.sw)} {_RESET} \n"
        )
        bounds = (
            f"{_CYAN} minX: {self.min_x:f}, minY: {self.min_y:f},\n"
            f" maxX: {self.max_x:f}, maxY: {self.max_y:f} {_RESET} \n"
        )
        if self.is_leaf():
            return _RED + header + kids + bounds + f" Body: {_ref(self.body)}\n\n"
        return _GREEN + header + kids + f" Body: {_ref(self.body)}\n" + bounds + "\n"


def build_tree(bodies: Sequence[Body]) -> Node:
    """Build a tree over ``bodies`` whose root spans their bounding box."""
    if not bodies:
        raise ValueError("cannot build a tree without bodies")
    xs = [b.pos[0] for b in bodies]
    ys = [b.pos[1] for b in bodies]
    root = Node(min_x=min(xs), min_y=min(ys), max_x=max(xs), max_y=max(ys))
    for body in bodies:
        root.insert(body)
    return root


def format_tree(root: Node | None) -> str:
    """Descriptions of every node in pre-order; empty for no tree."""
    if root is None:
        return ""
    return "".join(node.format() for node in root.walk())