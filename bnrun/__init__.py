"""bnrun — declarative script runner with recursive plan expansion."""

__version__ = "0.1.0"
