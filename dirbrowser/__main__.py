"""Module entrypoint for ``python -m dirbrowser``.

All argument parsing and session setup happen in ``dirbrowser.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
