"""
Utility functions for running system commands and verifying binary availability.

This module provides helper functions to execute external commands and check if
required binaries exist in the system's PATH.

Functions:
    - run_cmd: Executes a command and returns its exit code along with its
      captured standard output and error streams.
    - run_passthrough: Executes a command with output going straight to the
      terminal and returns only its exit code.
    - missing_binaries: Returns the required binaries that are not on PATH.
"""
import shutil
import subprocess
from typing import Iterable, List, Tuple


def run_cmd(cmd: List[str]) -> Tuple[int, str, str]:
    """Run a command and return (code, stdout, stderr)."""
    p = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True)
    return p.returncode, p.stdout, p.stderr


def run_passthrough(cmd: List[str]) -> int:
    """Run a command, letting its output through, and return the exit code."""
    return subprocess.run(cmd).returncode


def missing_binaries(binaries: Iterable[str]) -> List[str]:
    """Return the binaries from ``binaries`` that cannot be found on PATH."""
    return [b for b in binaries if shutil.which(b) is None]
