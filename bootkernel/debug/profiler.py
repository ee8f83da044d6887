"""
Profiler - global and per-phase stopwatch used while booting.

Durations that cannot be computed because a timestamp is missing are
reported as None.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any


@dataclass
class PhaseTimer:
    """Start/end timestamps of a single phase."""

    start: float | None = None
    end: float | None = None

    @property
    def duration(self) -> float | None:
        if self.start is None or self.end is None:
            return None
        return self.end - self.start


class Profiler:
    """
    Global timer plus any number of named, independently timed phases.

    Phases may overlap. Calling start/stop (or start_phase/stop_phase)
    again overwrites the previous timestamp.
    """

    def __init__(self) -> None:
        self._start: float | None = None
        self._end: float | None = None
        self._phases: dict[str, PhaseTimer] = {}

    def start(self) -> float:
        """Start the global timer."""
        self._start = time.perf_counter()
        return self._start

    def stop(self) -> float:
        """Stop the global timer."""
        self._end = time.perf_counter()
        return self._end

    def start_phase(self, phase: str) -> float:
        """Start profiling a phase."""
        timer = self._phases.setdefault(phase, PhaseTimer())
        timer.start = time.perf_counter()
        return timer.start

    def stop_phase(self, phase: str) -> float:
        """Stop profiling a phase."""
        timer = self._phases.setdefault(phase, PhaseTimer())
        timer.end = time.perf_counter()
        return timer.end

    def phase_duration(self, phase: str) -> float | None:
        """Duration of a phase, or None if it was never started or stopped."""
        timer = self._phases.get(phase)
        if timer is None:
            return None
        return timer.duration

    def overall_duration(self) -> float | None:
        """Duration clocked by the global timer, or None if incomplete."""
        if self._start is None or self._end is None:
            return None
        return self._end - self._start

    @property
    def phases(self) -> list[str]:
        """Names of recorded phases, in the order they were first seen."""
        return list(self._phases)

    def debug_info(self) -> dict[str, Any]:
        info: dict[str, Any] = {
            "start": self._start,
            "end": self._end,
            "duration": self.overall_duration(),
            "phases": {},
        }

        for phase, timer in self._phases.items():
            entry: dict[str, Any] = {}
            if timer.start is not None:
                entry["start"] = timer.start
            if timer.end is not None:
                entry["end"] = timer.end
            entry["duration"] = timer.duration
            info["phases"][phase] = entry

        return info
