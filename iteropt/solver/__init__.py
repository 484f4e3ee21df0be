"""Concrete solvers."""

from .gradientdescent import SteepestDescent
from .linesearch import BacktrackingLineSearch, HagerZhangLineSearch, LineSearch

__all__ = [
    "BacktrackingLineSearch",
    "HagerZhangLineSearch",
    "LineSearch",
    "SteepestDescent",
]
