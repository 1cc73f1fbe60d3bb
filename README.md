# nbodysim

Small two-dimensional gravitational N-body simulations with three ways of
computing the forces:

- **serial** (`nbodysim.serial`) – direct summation over every pair of
  bodies, updating the bodies one after another, so later bodies see the
  already moved earlier ones;
- **parallel** (`nbodysim.direct_parallel`) – the same direct summation,
  with the bodies split among worker threads (4 by default) that advance in
  lock step, so every body sees the state of the previous step;
- **Barnes-Hut** (`nbodysim.barnes_hut`) – forces approximated through a
  quadtree (`nbodysim.tree`) rebuilt every step, with the opening angle
  `theta` (0.5 by default) deciding when a whole cell is treated as one body.

All three use the same explicit integration: velocities are advanced from the
accumulated force, then positions from the new velocities, with a time step
of `0.1`. Distances below 1 are clamped to 1 when computing forces. The
direct methods use `G = 6.67259e-11`, Barnes-Hut uses `G = 6.674e-11`.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Built-in scenarios

Built by `nbodysim.particles.init_simulation(name, n_bodies, scattered)`:

| name        | bodies | description                                          |
|-------------|--------|------------------------------------------------------|
| `triangle`  | 3      | two light bodies at rest near one heavy body         |
| `square`    | 5      | four light bodies on the corners of a square, one heavier body in the middle |
| `earth_sun` | 2      | a planet orbiting a star                             |
| `random`    | `n_bodies` | body `i` has mass `i+1` at `(i, i)`; with `scattered`, bodies of growing mass on alternate sides of the origin |

An unknown name, or a scenario with no bodies, raises
`nbodysim.particles.SimulationError`.

## Command line

```
nbodysim-serial -S triangle -t 10000
nbodysim-parallel -S square -t 5000
nbodysim-barnes-hut -S random -n 200 -t 100
```

Options shared by the commands:

- `-t N` – number of time steps (default 10000);
- `-n N` – number of bodies, used by the `random` scenario;
- `-S NAME` – scenario name from the table above.

`nbodysim-parallel` and `nbodysim-barnes-hut` also accept `-C WIDTH-HEIGHT`;
both numbers must be non-zero, otherwise the command stops with an error. The
values are only checked, not used. Their default scenario is `earth_sun`;
`nbodysim-barnes-hut` uses the scattered layout for `random`. The serial
command has no usable default scenario, so pass `-S` to it. An unknown option
prints a usage line and exits with status 1; so does a scenario that cannot
be built.

Every command truncates `data.csv` in the current directory and appends the
elapsed wall-clock time of the run, as `[t=STEPS,n=BODIES] Elapsed time : SECONDS`,
to a timing file in the current directory:

| command               | timing file                  |
|-----------------------|------------------------------|
| `nbodysim-serial`     | `serial-nbodies-times.csv` (with lower-case `elapsed`) |
| `nbodysim-parallel`   | `pthread-parallel-times.csv` |
| `nbodysim-barnes-hut` | `pthread-bh-times.csv`       |

`nbodysim-serial` and `nbodysim-parallel` append a snapshot of the bodies to
`data.csv` on the first step and every millionth step after it: one
`x,y,vx,vy` line per body followed by a blank line. The serial snapshot is
taken after the step, the parallel one before it. `nbodysim-barnes-hut`
leaves `data.csv` empty.

## Library use

```python
from nbodysim.particles import init_simulation, format_bodies
from nbodysim.serial import simulate, step

bodies = init_simulation("triangle", 0, False)
for _ in range(100):
    step(bodies, 6.67259e-11, 0.1)
simulate(bodies, 100)
print(format_bodies(bodies))
```

The threaded runners take the number of workers:

```python
from nbodysim.direct_parallel import partition, simulate_parallel
from nbodysim.barnes_hut import simulate_barnes_hut
from nbodysim.particles import square_bodies

print(partition(10, 4))   # [(0, 2), (2, 4), (4, 6), (6, 10)]
simulate_parallel(square_bodies(), 50, num_workers=2)
simulate_barnes_hut(square_bodies(), 50, num_workers=2, theta=0.5)
```

The Barnes-Hut tree can be built and inspected on its own:

```python
from nbodysim.particles import square_bodies
from nbodysim.tree import build_tree, format_tree

bodies = square_bodies()
root = build_tree(bodies)
print(root.count_nodes())
print(root.calculate_force(bodies[0], 0.5, 6.674e-11))
print(format_tree(root))
```

`nbodysim.output` holds the file helpers the commands use (`reset_file`,
`append_snapshot`, `append_timing`, `append_profile`, `wall_time`).

## What it does not do

There is no visualisation: the package writes plain text files and does not
plot or animate the bodies. Runs are two-dimensional only, and the commands
do not read initial conditions from a file; only the built-in scenarios are
available.