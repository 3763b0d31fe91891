# scan_cli.py
# Command line front end for the scanner.
#   Usage (examples):
#     port-scanner scan --host 127.0.0.1
#     port-scanner s --host ::1 --all --max-workers 500
#     port-scanner scan --host 127.0.0.1 --ports 22,80,8000-8100 --timeout 0.5

import argparse
import logging
import signal
import sys
import threading
import time

from . import __version__
from .core import CONNECT_TIMEOUT, MAX_PORT, MAX_WORKERS_DEFAULT, MIN_PORT, Scanner, ScannerError

logger = logging.getLogger(__name__)


def _port(text: str) -> int:
    p = int(text)
    if not MIN_PORT <= p <= MAX_PORT:
        raise argparse.ArgumentTypeError(f"port {p} is outside {MIN_PORT}-{MAX_PORT}")
    return p


def parse_ports(s: str) -> list[int]:
    # e.g., "1-1024,8080,8443"
    out = set()
    try:
        for part in s.split(","):
            part = part.strip()
            if "-" in part:
                a, b = part.split("-", 1)
                # bounds first, so a huge range never gets expanded
                a, b = _port(a), _port(b)
                if a > b:
                    raise argparse.ArgumentTypeError(f"empty port range {part!r}")
                out.update(range(a, b + 1))
            elif part:
                out.add(_port(part))
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port list {s!r}") from None
    return sorted(out)


def positive_float(s: str) -> float:
    try:
        v = float(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {s!r}") from None
    if v <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0, got {s}")
    return v


def positive_int(s: str) -> int:
    try:
        v = int(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {s!r}") from None
    if v < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {s}")
    return v


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="port-scanner", description="A simple port-scanner.")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = ap.add_subparsers(dest="command", metavar="[subcommand]")

    sp = sub.add_parser("scan", aliases=["s"], help="Scan a host for open ports.",
                        description="Scan a host for open ports.")
    sp.add_argument("--host", required=True, help="host to scan (ip address)")
    sp.add_argument("-a", "--all", dest="scan_all", action="store_true",
                    help="scan all ports (scans the first 1024 if not enabled)")
    sp.add_argument("--ports", type=parse_ports,
                    help="explicit ports to scan, e.g. 22,80,8000-8100 (overrides --all)")
    sp.add_argument("--timeout", type=positive_float, default=CONNECT_TIMEOUT,
                    help=f"connect timeout per port in seconds (default: {CONNECT_TIMEOUT})")
    sp.add_argument("--max-workers", type=positive_int, default=MAX_WORKERS_DEFAULT,
                    help=f"how many ports to probe at the same time (default: {MAX_WORKERS_DEFAULT})")
    sp.add_argument("-v", "--verbose", action="store_true", help="log every open port as it is found")
    sp.set_defaults(func=run_scan, parser=sp)
    return ap


def run_scan(args) -> int:
    try:
        scanner = Scanner(args.host, args.scan_all, ports=args.ports,
                          timeout=args.timeout, max_workers=args.max_workers)
    except ScannerError as e:
        args.parser.error(f"failed to initialize port scanner: {e}")

    # Ctrl-C stops pending probes; whatever was found so far is still reported
    cancel = threading.Event()
    previous = signal.getsignal(signal.SIGINT)
    # handlers can only be installed from the main thread
    # and an ignored SIGINT stays ignored
    trap = previous not in (None, signal.SIG_IGN) and threading.current_thread() is threading.main_thread()
    if trap:
        signal.signal(signal.SIGINT, lambda *_: cancel.set())

    logger.info("scanning %s...", args.host)
    start = time.monotonic()
    try:
        open_ports = scanner.scan(cancel)
    finally:
        if trap:
            signal.signal(signal.SIGINT, previous)
    logger.info("scan completed in %.2fs", time.monotonic() - start)

    if cancel.is_set():
        logger.warning("scan interrupted, results are partial")
    if not open_ports:
        logger.info("%r has no exposed ports", args.host)
        return 0
    logger.info("found %d open ports", len(open_ports))
    logger.info("open-ports: %s", sorted(open_ports))
    return 0


def main(argv=None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    if args.command is None:
        ap.print_help()
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(message)s",
        stream=sys.stderr,
    )
    return args.func(args)

