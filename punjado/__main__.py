"""Module entrypoint for ``python -m punjado``.

All argument parsing and runtime setup happen in ``punjado.cli``.
"""

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
