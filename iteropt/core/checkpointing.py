"""Saving and restoring ``(solver, state)`` pairs during a run."""

from __future__ import annotations

import os
import pickle
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from ..logging import get_logger
from .errors import ExecutionAbort
from .solver import Solver
from .state import IterState

logger = get_logger(__name__)


@dataclass(frozen=True)
class CheckpointingFrequency:
    """How often a checkpoint is written.

    ``every == 0`` means never; ``every == 1`` means after each iteration.
    """

    every: int = 0

    def __post_init__(self) -> None:
        if self.every < 0:
            raise ValueError(f"every must be non-negative, got {self.every}")

    @classmethod
    def never(cls) -> "CheckpointingFrequency":
        return cls(0)

    @classmethod
    def always(cls) -> "CheckpointingFrequency":
        return cls(1)

    def is_due(self, iteration: int) -> bool:
        return self.every > 0 and iteration % self.every == 0


class Checkpoint(ABC):
    """Persistent store for a single ``(solver, state)`` snapshot."""

    frequency: CheckpointingFrequency = CheckpointingFrequency.never()

    @abstractmethod
    def save(self, solver: Solver, state: IterState) -> None:
        """Persist ``solver`` and ``state``."""

    @abstractmethod
    def load(self) -> Optional[Tuple[Solver, IterState]]:
        """Return the stored pair, or ``None`` if nothing was saved yet."""


class FileCheckpoint(Checkpoint):
    """Pickles the pair to ``directory/filename``.

    The file is written to a temporary sibling first and then moved into
    place, so a crash while saving leaves the previous checkpoint intact.
    """

    def __init__(
        self,
        directory: Union[str, Path] = ".checkpoints",
        filename: str = "checkpoint.pkl",
        frequency: CheckpointingFrequency = CheckpointingFrequency.always(),
    ) -> None:
        self.directory = Path(directory)
        self.filename = filename
        self.frequency = frequency

    @property
    def path(self) -> Path:
        return self.directory / self.filename

    def save(self, solver: Solver, state: IterState) -> None:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
            try:
                with os.fdopen(fd, "wb") as fh:
                    pickle.dump((solver, state), fh, protocol=pickle.HIGHEST_PROTOCOL)
                os.replace(tmp_name, self.path)
            finally:
                Path(tmp_name).unlink(missing_ok=True)
        except (OSError, pickle.PicklingError, TypeError, AttributeError) as exc:
            raise ExecutionAbort(f"Failed to write checkpoint {self.path}: {exc}") from exc
        logger.debug("Checkpoint written to %s at iteration %d", self.path, state.iter)

    def load(self) -> Optional[Tuple[Solver, IterState]]:
        if not self.path.exists():
            return None
        try:
            with self.path.open("rb") as fh:
                solver, state = pickle.load(fh)
        except (OSError, pickle.UnpicklingError, EOFError, ValueError) as exc:
            raise ExecutionAbort(f"Failed to read checkpoint {self.path}: {exc}") from exc
        logger.info("Resuming from checkpoint %s at iteration %d", self.path, state.iter)
        return solver, state


__all__ = ["Checkpoint", "CheckpointingFrequency", "FileCheckpoint"]
