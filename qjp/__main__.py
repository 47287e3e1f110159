"""Module entrypoint for ``python -m qjp``.

All argument parsing and session setup happen in ``qjp.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
