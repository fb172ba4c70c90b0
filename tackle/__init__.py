"""Top-level package for tackle.

tackle is the front-end dispatcher of a plugin-extensible package manager.
The console entry point is `tackle.cli.main`.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
