import socket
import threading

import pytest


@pytest.fixture
def listener():
    """A TCP port on 127.0.0.1 that accepts connections for the test's lifetime."""
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    s.bind(("127.0.0.1", 0))
    s.listen(128)
    yield s.getsockname()[1]
    s.close()


@pytest.fixture
def listener6():
    """Same as listener, on the IPv6 loopback."""
    if not socket.has_ipv6:
        pytest.skip("no IPv6 support in this Python build")
    s = socket.socket(socket.AF_INET6, socket.SOCK_STREAM)
    s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    s.bind(("::1", 0))
    s.listen(128)
    yield s.getsockname()[1]
    s.close()


@pytest.fixture
def closed_port():
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s.bind(("127.0.0.1", 0))
    port = s.getsockname()[1]
    s.close()
    return port


@pytest.fixture
def lab_server():
    from werkzeug.serving import make_server

    from demo_lab.app import app

    server = make_server("127.0.0.1", 0, app, threaded=True)
    t = threading.Thread(target=server.serve_forever, daemon=True)
    t.start()
    yield server.server_port
    server.shutdown()
    t.join(timeout=5)
