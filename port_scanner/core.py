# core.py
# Concurrent TCP connect scanner: validate the host, pick the ports,
# probe them on a thread pool and collect the ones that answered.

import ipaddress
import logging
import socket
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

WELL_KNOWN_PORTS = 1024   # exclusive upper bound of the default range
ALL_PORTS = 65535         # exclusive upper bound with --all
MIN_PORT, MAX_PORT = 1, 65535

CONNECT_TIMEOUT = 3.0     # seconds per connection attempt
MAX_WORKERS_DEFAULT = 200 # how many ports to test at the same time

CONSTRUCTED, SCANNING, COMPLETED = "constructed", "scanning", "completed"


class ScannerError(ValueError):
    pass


class InvalidHostError(ScannerError):
    def __init__(self, host):
        self.host = host
        super().__init__(f"{host!r} is an invalid ip address")


class InvalidPortError(ScannerError):
    def __init__(self, port):
        self.port = port
        super().__init__(f"{port!r} is not a port in {MIN_PORT}-{MAX_PORT}")


class ScannerStateError(ScannerError):
    pass


def ports_to_scan(scan_all: bool) -> list[int]:
    # half-open on purpose: 1..1023 or 1..65534
    upper = ALL_PORTS if scan_all else WELL_KNOWN_PORTS
    return list(range(1, upper))


def is_open(host: str, port: int, timeout: float = CONNECT_TIMEOUT) -> bool:
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError:
        return False


def _check_host(host) -> str:
    if not isinstance(host, str):
        raise InvalidHostError(host)
    try:
        ipaddress.ip_address(host)
    except ValueError:
        raise InvalidHostError(host) from None
    return host


def _check_ports(ports: Iterable[int]) -> list[int]:
    out, seen = [], set()
    for p in ports:
        if isinstance(p, bool) or not isinstance(p, int) or not MIN_PORT <= p <= MAX_PORT:
            raise InvalidPortError(p)
        if p not in seen:
            seen.add(p)
            out.append(p)
    return out


class Scanner:
    """One scan of one host.

    The result list is shared by every probe task and only grows through
    :meth:`add`, which holds the scanner's lock. A scanner runs once; build a
    new one to scan again.
    """

    def __init__(
        self,
        host: str,
        scan_all: bool = False,
        *,
        ports: Optional[Iterable[int]] = None,
        timeout: float = CONNECT_TIMEOUT,
        max_workers: int = MAX_WORKERS_DEFAULT,
    ):
        self._host = _check_host(host)
        self._scan_all = bool(scan_all)
        self._ports = None if ports is None else _check_ports(ports)
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout!r}")
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers!r}")
        self.timeout = timeout
        self.max_workers = max_workers

        self._lock = threading.Lock()
        self._state = CONSTRUCTED
        self.open_ports: list[int] = []

    def __repr__(self):
        return f"Scanner(host={self._host!r}, scan_all={self._scan_all}, state={self._state!r})"

    @property
    def host(self) -> str:
        return self._host

    @property
    def scan_all(self) -> bool:
        return self._scan_all

    @property
    def state(self) -> str:
        return self._state

    def ports(self) -> list[int]:
        if self._ports is not None:
            return list(self._ports)
        return ports_to_scan(self._scan_all)

    def add(self, port: int) -> None:
        with self._lock:
            self.open_ports.append(port)

    def _probe(self, port: int, cancel: Optional[threading.Event]) -> None:
        # pending probes bail out once the caller cancels
        if cancel is not None and cancel.is_set():
            return
        if is_open(self._host, port, self.timeout):
            logger.debug("%s:%d open", self._host, port)
            self.add(port)

    def scan(self, cancel: Optional[threading.Event] = None) -> list[int]:
        with self._lock:
            if self._state != CONSTRUCTED:
                raise ScannerStateError(f"scanner for {self._host!r} is already {self._state}")
            self._state = SCANNING

        ports = self.ports()
        if not ports:
            self._state = COMPLETED
            return self.open_ports

        workers = min(self.max_workers, len(ports))
        logger.debug("probing %d ports on %s with %d workers", len(ports), self._host, workers)
        try:
            # leaving the pool waits for every submitted probe
            with ThreadPoolExecutor(max_workers=workers) as ex:
                futures = [ex.submit(self._probe, p, cancel) for p in ports]
        finally:
            self._state = COMPLETED
        # probes only swallow OSError; anything else is a bug and re-raises here
        for f in futures:
            f.result()

        if cancel is not None and cancel.is_set():
            logger.info("scan of %s cancelled, %d open ports found before stopping",
                        self._host, len(self.open_ports))
        return self.open_ports


def new_scanner(host: str, scan_all: bool = False) -> Scanner:
    return Scanner(host, scan_all)
