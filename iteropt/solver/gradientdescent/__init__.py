"""Gradient descent solvers."""

from .steepestdescent import SteepestDescent

__all__ = ["SteepestDescent"]
