"""Shared helpers: terminal output and logging."""
