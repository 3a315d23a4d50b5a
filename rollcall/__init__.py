"""Rollcall: user and role administration panel."""

__version__ = "0.1.0"
