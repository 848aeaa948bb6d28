#!/usr/bin/env python3
"""
Performance tracking utilities for the weather server.
Tracks timing and error counts for tool calls with context manager support.
"""

import json
import logging
import os
import time
from contextlib import asynccontextmanager
from dataclasses import asdict, dataclass
from datetime import datetime

from config import Config

logger = logging.getLogger(__name__)


def default_log_file():
    return os.path.join(Config.LOG_DIR, Config.PERFORMANCE_LOG_FILE)


@dataclass
class ToolCallMetrics:
    """Container for a single tool call's metrics."""

    start_time: float
    tool: str = ""
    end_time: float = 0.0
    duration_seconds: float = 0.0
    latitude: float = None
    longitude: float = None
    days: int = None
    errors: int = 0

    def to_dict(self):
        """Convert to dictionary for JSON serialization."""
        return {
            **asdict(self),
            "start_time_iso": datetime.fromtimestamp(self.start_time).isoformat(),
            "end_time_iso": (
                datetime.fromtimestamp(self.end_time).isoformat()
                if self.end_time
                else None
            ),
            "duration_formatted": f"{self.duration_seconds:.2f}s",
        }


class PerformanceTracker:
    """Records one tool call and appends it to the performance log."""

    def __init__(self, tool="", log_file=None):
        self.metrics = ToolCallMetrics(start_time=time.time(), tool=tool)
        self._log_file = log_file or default_log_file()

    def set_request(self, lat=None, lon=None, days=None):
        """Attach the resolved request parameters."""
        self.metrics.latitude = lat
        self.metrics.longitude = lon
        self.metrics.days = days

    def add_error(self):
        """Increment error counter."""
        self.metrics.errors += 1

    def finish(self):
        """Finalize metrics and calculate duration."""
        self.metrics.end_time = time.time()
        self.metrics.duration_seconds = self.metrics.end_time - self.metrics.start_time

    def save_to_file(self):
        """Save metrics to JSONL log file."""
        try:
            directory = os.path.dirname(self._log_file)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self._log_file, "a") as f:
                f.write(json.dumps(self.metrics.to_dict()) + "\n")
        except OSError as e:
            logger.warning(f"Could not save performance metrics: {e}")


@asynccontextmanager
async def track_performance(tool="", log_file=None):
    """Async context manager for performance tracking."""
    tracker = PerformanceTracker(tool, log_file=log_file)
    try:
        yield tracker
    except BaseException:
        tracker.add_error()
        raise
    finally:
        tracker.finish()
        tracker.save_to_file()


def get_performance_stats(days=7, log_file=None):
    """Get per-tool statistics from recent logs."""
    log_file = log_file or default_log_file()

    if not os.path.exists(log_file):
        return {"error": "No performance logs found"}

    cutoff_time = time.time() - (days * 24 * 60 * 60)
    stats = {"total_calls": 0, "total_errors": 0, "avg_duration": 0.0, "tools": {}}
    durations = []

    try:
        with open(log_file, "r") as f:
            for line in f:
                try:
                    data = json.loads(line.strip())
                except json.JSONDecodeError:
                    continue
                if data.get("start_time", 0) < cutoff_time:
                    continue
                tool = stats["tools"].setdefault(
                    data.get("tool") or "unknown", {"calls": 0, "errors": 0}
                )
                tool["calls"] += 1
                tool["errors"] += data.get("errors", 0)
                stats["total_calls"] += 1
                stats["total_errors"] += data.get("errors", 0)
                durations.append(data.get("duration_seconds", 0))
    except OSError as e:
        return {"error": f"Could not read performance logs: {e}"}

    if durations:
        stats["avg_duration"] = sum(durations) / len(durations)
    return stats


def print_summary(stats):
    """Print a formatted summary of tool call statistics."""
    from rich.console import Console
    from rich.table import Table

    console = Console()
    if "error" in stats:
        console.print(f"[red]{stats['error']}[/red]")
        return

    table = Table(
        title="Tool Call Summary", show_header=True, header_style="bold magenta"
    )
    table.add_column("Tool", style="cyan", no_wrap=True)
    table.add_column("Calls", style="green")
    table.add_column("Errors", style="red")

    for name, tool in sorted(stats["tools"].items()):
        table.add_row(name, str(tool["calls"]), str(tool["errors"]))
    table.add_row("Total", str(stats["total_calls"]), str(stats["total_errors"]))
    console.print(table)
    console.print(f"Average duration: {stats['avg_duration']:.2f}s")
