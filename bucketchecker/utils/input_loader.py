#!/usr/bin/env python3
"""
Identifier Input
Reads newline-delimited bucket identifiers from a file or standard input.
"""

import sys
from pathlib import Path
from typing import Iterable, List, Optional, TextIO


def read_lines(stream: Iterable[str]) -> List[str]:
    """Non-blank lines with surrounding whitespace removed"""
    return [line.strip() for line in stream if line.strip()]


def read_identifiers(input_file: Optional[Path] = None, stdin: Optional[TextIO] = None) -> List[str]:
    """
    Load identifiers

    Args:
        input_file: File with one identifier per line; stdin is read when None
        stdin: Stream to use instead of sys.stdin

    Returns:
        Non-blank identifier lines in input order

    Raises:
        OSError: input_file cannot be opened or read
    """
    if input_file is None:
        return read_lines(stdin or sys.stdin)

    # Undecodable bytes should not kill the whole list
    with open(input_file, 'r', encoding='utf-8', errors='replace') as f:
        return read_lines(f)
