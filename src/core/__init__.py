"""Core: configuration, domain models and command services.

The core never prints; the CLI decides how results are shown.
"""
