"""Two-dimensional gravitational N-body simulations: serial and threaded direct summation, and Barnes-Hut."""

__version__ = "0.1.0"