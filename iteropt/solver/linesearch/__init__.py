"""Line search solvers."""

from .backtracking import BacktrackingLineSearch
from .base import LineSearch
from .hagerzhang import HagerZhangLineSearch

__all__ = ["BacktrackingLineSearch", "HagerZhangLineSearch", "LineSearch"]
