"""Domain models and errors.

Plain data (Pydantic v2) and the exception hierarchy; no HTTP, no CLI.
"""
