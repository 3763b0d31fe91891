# app.py  (lab target: a known-open port to scan against)
#   python demo_lab/app.py              -> serves on 127.0.0.1:8080
#   port-scanner scan --host 127.0.0.1 --ports 8080
import argparse

from flask import Flask, jsonify

LAB_HOST = "127.0.0.1"
LAB_PORT = 8080

app = Flask(__name__)

@app.get("/")
def home():
    return """<!doctype html><html><body>
    <h1>Scan target</h1>
    <p>This port is open on purpose. Point port-scanner at it.</p>
    </body></html>"""

@app.get("/health")
def health():
    """Liveness check so a lab script can wait until the listener is up."""
    return jsonify(status="ok")


def main(argv=None):
    ap = argparse.ArgumentParser(description="Open a known port for port-scanner to find")
    ap.add_argument("--host", default=LAB_HOST, help=f"address to bind (default: {LAB_HOST})")
    ap.add_argument("--port", type=int, default=LAB_PORT, help=f"port to listen on (default: {LAB_PORT})")
    args = ap.parse_args(argv)
    app.run(host=args.host, port=args.port, debug=False)


if __name__ == "__main__":
    main()
