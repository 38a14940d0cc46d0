"""Module entrypoint for ``python -m gmux``.

Argument parsing and runtime setup happen in ``gmux.cli``.
"""

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
