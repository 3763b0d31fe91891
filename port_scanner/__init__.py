"""TCP connect port scanner."""

from .core import (
    ALL_PORTS,
    WELL_KNOWN_PORTS,
    InvalidHostError,
    InvalidPortError,
    Scanner,
    ScannerError,
    ScannerStateError,
    is_open,
    new_scanner,
    ports_to_scan,
)

__version__ = "0.1.0"

__all__ = [
    "ALL_PORTS",
    "WELL_KNOWN_PORTS",
    "InvalidHostError",
    "InvalidPortError",
    "Scanner",
    "ScannerError",
    "ScannerStateError",
    "is_open",
    "new_scanner",
    "ports_to_scan",
]
