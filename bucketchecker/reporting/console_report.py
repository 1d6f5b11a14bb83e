#!/usr/bin/env python3
"""
Console Report
Streams one line per probed target as results arrive, then prints a summary
of every target with an open permission (same completion order).
"""

import sys
import threading
from typing import List, Optional, TextIO

from ..scanners.probe_runner import ProbeOutcome


GREEN = '\033[32m'
YELLOW = '\033[33m'
RED = '\033[31m'
BOLD_BLUE = '\033[1;34m'
RESET = '\033[0m'

BANNER = (
    " ██▄ █ █ ▄▀▀ █▄▀ ██▀ ▀█▀ ▄▀▀ █▄█ ██▀ ▄▀▀ █▄▀ ██▀ █▀▄",
    " █▄█ ▀▄█ ▀▄▄ █ █ █▄▄  █  ▀▄▄ █ █ █▄▄ ▀▄▄ █ █ █▄▄ █▀▄",
)

SUMMARY_HEADER = "Buckets with open permissions:"


def status_tag(readable: bool, writable: bool) -> str:
    """Human-readable permission tag"""
    if readable and writable:
        return "[read] [write]"
    if readable:
        return "[read]"
    if writable:
        return "[write]"
    return "[no access]"


def _tag_color(readable: bool, writable: bool) -> str:
    if readable:
        return GREEN
    if writable:
        return YELLOW
    return RED


class ResultAggregator:
    """
    Collects probe outcomes and writes them to a stream.

    record() may be called from several threads; every line is written
    whole under a lock.
    """

    def __init__(self, stream: Optional[TextIO] = None, color: bool = True):
        self.stream = stream or sys.stdout
        self.color = color
        self.outcomes: List[ProbeOutcome] = []
        self._lock = threading.Lock()

    def _paint(self, text: str, color: str) -> str:
        if not self.color:
            return text
        return f"{color}{text}{RESET}"

    def _write(self, line: str):
        try:
            self.stream.write(line + "\n")
        except UnicodeEncodeError:
            self.stream.write(line.encode('ascii', 'ignore').decode('ascii') + "\n")
        self.stream.flush()

    def format_outcome(self, outcome: ProbeOutcome) -> str:
        tag = status_tag(outcome.readable, outcome.writable)
        tag = self._paint(tag, _tag_color(outcome.readable, outcome.writable))
        return f"{outcome.target.provider.label} | {outcome.target.bucket_name} | {tag}"

    def record(self, outcome: ProbeOutcome):
        """Store an outcome and print its status line immediately"""
        line = self.format_outcome(outcome)
        with self._lock:
            self.outcomes.append(outcome)
            self._write(line)

    def open_outcomes(self) -> List[ProbeOutcome]:
        """Outcomes with read or write access, in the order they were recorded"""
        with self._lock:
            return [o for o in self.outcomes if o.is_open]

    def summary_lines(self) -> List[str]:
        return [
            f"{o.target.provider.label} | {o.target.bucket_name} | [{', '.join(o.permissions)}]"
            for o in self.open_outcomes()
        ]

    def print_summary(self):
        lines = self.summary_lines()
        with self._lock:
            self._write("\n" + self._paint(SUMMARY_HEADER, BOLD_BLUE))
            for line in lines:
                self._write(line)

    def print_banner(self):
        with self._lock:
            for line in BANNER:
                self._write(self._paint(line, GREEN))
