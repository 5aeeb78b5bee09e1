"""Module entrypoint for ``python -m lazybranch``.

All argument parsing and runtime setup happen in ``lazybranch.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
