"""Command services: one module per group of commands."""
