"""Module entrypoint for running tackle as ``python -m tackle``."""

from __future__ import annotations

from tackle.cli import main


if __name__ == "__main__":
    main()
