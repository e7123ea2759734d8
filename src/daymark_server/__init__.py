"""Daymark server - day-planning dashboard backend."""

__version__ = "0.1.0"
