"""Entry point for running SVCS via: python -m svcs <command>"""

import sys

from .app.cli import main


if __name__ == "__main__":
    sys.exit(main())
