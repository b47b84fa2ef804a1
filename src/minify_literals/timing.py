"""
Module: timing

Purpose:
    Timing instrumentation for minify_literals() to find slow templates and
    slow phases (parsing, minifier calls, source map generation).

Key Classes:
    - TimingLog: Collects source-level and template-level durations

Key Functions:
    - timed_phase: Context manager for timing code blocks

Dependencies:
    - time (std)
    - contextlib (std)
    - threading (std): Templates are timed from worker threads

Used By:
    - pipeline: Main orchestrator
"""

from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Generator, List, Optional, Tuple


@dataclass
class TimingLog:
    """
    Timing metrics for one minify_literals() call.

    Attributes:
        source_timings: Dict of phase_name -> duration_seconds
        template_timings: Dict of template_id -> {phase_name -> duration_seconds}

    Example:
        >>> log = TimingLog()
        >>> log.log_source("parse", 0.004)
        >>> log.log_template("html@120", "minify", 0.012)
        >>> print(log.summary())
    """
    source_timings: Dict[str, float] = field(default_factory=dict)
    template_timings: Dict[str, Dict[str, float]] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def log_source(self, phase: str, duration: float) -> None:
        """Log a source-level timing metric."""
        with self._lock:
            self.source_timings[phase] = duration

    def log_template(self, template_id: str, phase: str, duration: float) -> None:
        """Log a template-level timing metric."""
        with self._lock:
            self.template_timings.setdefault(template_id, {})[phase] = duration

    def get_template_total(self, template_id: str) -> float:
        """Get total time for a template."""
        return sum(self.template_timings.get(template_id, {}).values())

    def get_slowest_templates(self, n: int = 3) -> List[Tuple[str, float]]:
        """Get the N slowest templates with their total time."""
        totals = [
            (template_id, self.get_template_total(template_id))
            for template_id in self.template_timings
        ]
        totals.sort(key=lambda x: x[1], reverse=True)
        return totals[:n]

    def get_phase_totals(self) -> Dict[str, float]:
        """Sum template-level durations per phase ("html", "css")."""
        totals: Dict[str, float] = {}
        for phases in self.template_timings.values():
            for phase, duration in phases.items():
                totals[phase] = totals.get(phase, 0.0) + duration
        return totals

    def summary(self) -> str:
        """Generate human-readable timing summary."""
        lines = [f"=== Minification Timing Summary ({len(self.template_timings)} templates) ==="]
        for phase, duration in sorted(self.source_timings.items()):
            lines.append(f"  {phase:25s} {duration:.3f}s")
        for phase, duration in sorted(self.get_phase_totals().items()):
            lines.append(f"  {phase + ' (all templates)':25s} {duration:.3f}s")

        slowest = self.get_slowest_templates()
        if slowest:
            lines.append("Slowest templates:")
            for template_id, total in slowest:
                lines.append(f"  {template_id}: {total:.3f}s")
        return "\n".join(lines)


@contextmanager
def timed_phase(
    log: TimingLog,
    phase: str,
    template_id: Optional[str] = None,
) -> Generator[None, None, None]:
    """
    Context manager for timing a code phase.

    Args:
        log: TimingLog instance to record metrics
        phase: Name of the phase being timed
        template_id: If provided, records as template-level metric;
                    otherwise records as source-level metric

    Example:
        >>> log = TimingLog()
        >>> with timed_phase(log, "parse"):
        ...     templates = parse_literals(source)
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        if template_id:
            log.log_template(template_id, phase, elapsed)
        else:
            log.log_source(phase, elapsed)
