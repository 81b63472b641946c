"""Polled serial input holding a single received character."""

from __future__ import annotations

import threading
from typing import Any


class SerialPort:
    """Keeps the last character received until it is polled."""

    def __init__(self, hardware: Any) -> None:
        self._hardware = hardware
        self._lock = threading.Lock()
        self._rx_char: str | None = None

    def init(self) -> None:
        """Clear any pending character and start the hardware."""
        with self._lock:
            self._rx_char = None
        if self._hardware is not None:
            self._hardware.init()

    def term(self) -> None:
        """Stop the hardware and drop any pending character."""
        if self._hardware is not None:
            self._hardware.term()
        with self._lock:
            self._rx_char = None

    def receive(self) -> str | None:
        """Return the pending character and clear it, or None if there is none."""
        with self._lock:
            character, self._rx_char = self._rx_char, None
        return character

    def on_receive(self, character: str) -> None:
        """Store a character delivered by the receive interrupt."""
        with self._lock:
            self._rx_char = character