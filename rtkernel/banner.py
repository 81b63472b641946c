"""Kernel start-up banner."""

from __future__ import annotations

from typing import Sequence

from rtkernel.syslog import LogPriority, SystemLog


def banner_format(kernel_name: str, target_name: str, built: str) -> str:
    """Return the banner format string; it takes the three version numbers."""
    return f"\n{kernel_name} Release %X.%X.%X for {target_name} ({built})\n"


def print_banner(log: SystemLog, kernel_name: str, target_name: str,
                 version: Sequence[int], built: str) -> None:
    """Log the banner at NOTICE priority with a (major, minor, patch) version."""
    major, minor, patch = version
    log.syslog(LogPriority.NOTICE, banner_format(kernel_name, target_name, built),
               major, minor, patch)