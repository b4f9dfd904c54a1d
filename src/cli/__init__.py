"""Command-line layer (Typer + Rich).

Parses arguments, calls `core.services` and renders results. No HTTP or
decoding logic lives here.
"""

__version__ = "0.1.0"
