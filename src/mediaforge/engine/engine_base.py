"""Abstract engine runner definition."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import StrEnum
from typing import Callable, Sequence

ProgressCallback = Callable[[float], None]


class EngineStatus(StrEnum):
    """Terminal states of a single engine invocation."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


@dataclass(slots=True, frozen=True)
class EngineOutcome:
    """Typed terminal event of an engine invocation."""

    status: EngineStatus
    command_line: str
    return_code: int | None = None
    diagnostic: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status is EngineStatus.SUCCEEDED


class EngineRunner(ABC):
    """Base interface for external engine runners."""

    @abstractmethod
    async def run(
        self,
        args: Sequence[str],
        *,
        timeout: float | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> EngineOutcome:
        """Run the engine once and return its terminal outcome."""
