"""Adapters: HTTP and serialization I/O for the core."""
