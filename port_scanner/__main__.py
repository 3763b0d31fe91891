import sys

from .scan_cli import main

if __name__ == "__main__":
    sys.exit(main())
