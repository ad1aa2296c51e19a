"""Deterministic engine runners for unit and contract tests."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Sequence

from mediaforge.engine import EngineOutcome, EngineRunner, EngineStatus, ProgressCallback

FAKE_MP4_BYTES = b"\x00\x00\x00\x18ftypmp42\x00\x00\x00\x00mp42isom" + b"\x00" * 64
FAKE_JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00" + b"\x00" * 32 + b"\xff\xd9"


class EngineScenario(str, Enum):
    """Available behaviours for a stubbed engine invocation."""

    SUCCESS = "success"
    ERROR = "error"
    TIMEOUT = "timeout"
    NO_OUTPUT = "no_output"


@dataclass(slots=True)
class EngineCall:
    args: list[str]
    timeout: float | None
    input_path: Path
    output_path: Path
    input_existed: bool


@dataclass(slots=True)
class StubEngineRunner(EngineRunner):
    """Writes fake outputs instead of spawning ffmpeg.

    Invocations whose output ends in ``.jpg`` are treated as thumbnail
    extractions, everything else as transcodes.
    """

    transcode: EngineScenario = EngineScenario.SUCCESS
    thumbnail: EngineScenario = EngineScenario.SUCCESS
    delay_seconds: float = 0.0
    diagnostic: str = "Invalid data found when processing input"
    calls: list[EngineCall] = field(default_factory=list)

    async def run(
        self,
        args: Sequence[str],
        *,
        timeout: float | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> EngineOutcome:
        arg_list = list(args)
        input_path = Path(arg_list[arg_list.index("-i") + 1])
        output_path = Path(arg_list[-1])
        self.calls.append(
            EngineCall(
                args=arg_list,
                timeout=timeout,
                input_path=input_path,
                output_path=output_path,
                input_existed=input_path.exists(),
            )
        )
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)

        is_thumbnail = output_path.suffix == ".jpg"
        scenario = self.thumbnail if is_thumbnail else self.transcode
        command_line = " ".join(["ffmpeg", *arg_list])

        if scenario is EngineScenario.ERROR:
            return EngineOutcome(
                status=EngineStatus.FAILED,
                command_line=command_line,
                return_code=1,
                diagnostic=self.diagnostic,
            )
        if scenario is EngineScenario.TIMEOUT:
            return EngineOutcome(
                status=EngineStatus.TIMED_OUT,
                command_line=command_line,
                diagnostic=f"ffmpeg did not finish within {timeout:g} seconds",
            )
        if scenario is EngineScenario.SUCCESS:
            output_path.write_bytes(FAKE_JPEG_BYTES if is_thumbnail else FAKE_MP4_BYTES)
        if on_progress is not None:
            on_progress(100.0)
        return EngineOutcome(status=EngineStatus.SUCCEEDED, command_line=command_line, return_code=0)

    @property
    def transcode_calls(self) -> list[EngineCall]:
        return [call for call in self.calls if call.output_path.suffix != ".jpg"]

    @property
    def thumbnail_calls(self) -> list[EngineCall]:
        return [call for call in self.calls if call.output_path.suffix == ".jpg"]
