"""Asyncio subprocess runner for ffmpeg."""

from __future__ import annotations

import asyncio
import logging
import re
import shlex
from collections import deque
from dataclasses import dataclass, field
from typing import Sequence

from .engine_base import EngineOutcome, EngineRunner, EngineStatus, ProgressCallback

logger = logging.getLogger(__name__)

_DURATION_RE = re.compile(r"Duration:\s*(\d+):(\d{2}):(\d{2}(?:\.\d+)?)")
_STREAM_LIMIT = 1024 * 1024


def parse_duration(line: str) -> float | None:
    """Return seconds from an ffmpeg ``Duration: HH:MM:SS.xx`` banner line."""
    match = _DURATION_RE.search(line)
    if not match:
        return None
    hours, minutes, seconds = match.groups()
    return int(hours) * 3600 + int(minutes) * 60 + float(seconds)


@dataclass(slots=True)
class _ProgressTracker:
    """Turns ``-progress`` key=value lines into whole percent events."""

    callback: ProgressCallback | None
    duration_seconds: float | None = None
    last_percent: int = -1

    def observe_stderr(self, line: str) -> None:
        if self.duration_seconds is None:
            self.duration_seconds = parse_duration(line)

    def observe_stdout(self, line: str) -> None:
        key, _, value = line.partition("=")
        if key == "progress" and value == "end":
            self._emit(100)
            return
        # ffmpeg reports microseconds under both keys.
        if key not in ("out_time_us", "out_time_ms") or not self.duration_seconds:
            return
        try:
            elapsed = int(value) / 1_000_000
        except ValueError:
            return
        percent = int(min(100.0, max(0.0, elapsed / self.duration_seconds * 100)))
        self._emit(percent)

    def _emit(self, percent: int) -> None:
        if percent <= self.last_percent:
            return
        self.last_percent = percent
        if self.callback is not None:
            self.callback(float(percent))


@dataclass(slots=True)
class FfmpegRunner(EngineRunner):
    """Run ffmpeg as an asyncio subprocess and report a typed outcome."""

    binary: str = "ffmpeg"
    diagnostic_lines: int = 20
    log: logging.Logger = field(default_factory=lambda: logger)

    async def run(
        self,
        args: Sequence[str],
        *,
        timeout: float | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> EngineOutcome:
        command = [self.binary, *args]
        command_line = shlex.join(command)
        self.log.info("engine.started", extra={"command_line": command_line})

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                limit=_STREAM_LIMIT,
            )
        except OSError as exc:
            self.log.error(
                "engine.launch_failed",
                extra={"command_line": command_line, "error": str(exc)},
            )
            return EngineOutcome(
                status=EngineStatus.FAILED,
                command_line=command_line,
                diagnostic=f"Failed to start {self.binary}: {exc}",
            )

        tracker = _ProgressTracker(on_progress or self._log_progress)
        stderr_tail: deque[str] = deque(maxlen=self.diagnostic_lines)

        try:
            await asyncio.wait_for(
                asyncio.gather(
                    self._read_stdout(process.stdout, tracker),
                    self._read_stderr(process.stderr, tracker, stderr_tail),
                    process.wait(),
                ),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            await self._terminate(process)
            self.log.warning(
                "engine.timed_out",
                extra={"command_line": command_line, "timeout_seconds": timeout},
            )
            return EngineOutcome(
                status=EngineStatus.TIMED_OUT,
                command_line=command_line,
                return_code=process.returncode,
                diagnostic=f"{self.binary} did not finish within {timeout:g} seconds",
            )
        except asyncio.CancelledError:
            await self._terminate(process)
            raise

        return_code = process.returncode
        if return_code == 0:
            self.log.info("engine.finished", extra={"command_line": command_line})
            return EngineOutcome(
                status=EngineStatus.SUCCEEDED,
                command_line=command_line,
                return_code=0,
            )

        diagnostic = "\n".join(stderr_tail) or f"{self.binary} exited with code {return_code}"
        self.log.error(
            "engine.failed",
            extra={"command_line": command_line, "return_code": return_code, "stderr": diagnostic},
        )
        return EngineOutcome(
            status=EngineStatus.FAILED,
            command_line=command_line,
            return_code=return_code,
            diagnostic=diagnostic,
        )

    @staticmethod
    async def _read_stdout(stream: asyncio.StreamReader | None, tracker: _ProgressTracker) -> None:
        if stream is None:
            return
        async for raw in stream:
            tracker.observe_stdout(raw.decode("utf-8", errors="replace").strip())

    @staticmethod
    async def _read_stderr(
        stream: asyncio.StreamReader | None,
        tracker: _ProgressTracker,
        tail: deque[str],
    ) -> None:
        if stream is None:
            return
        async for raw in stream:
            line = raw.decode("utf-8", errors="replace").rstrip()
            if not line:
                continue
            tracker.observe_stderr(line)
            tail.append(line)

    @staticmethod
    async def _terminate(process: asyncio.subprocess.Process) -> None:
        if process.returncode is None:
            try:
                process.kill()
            except ProcessLookupError:
                pass
        await process.wait()

    def _log_progress(self, percent: float) -> None:
        self.log.info("engine.progress", extra={"percent": round(percent)})
