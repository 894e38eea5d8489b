"""Module entrypoint for ``python -m compendium``.

All argument parsing and program setup happen in ``compendium.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
