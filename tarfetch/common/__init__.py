"""Shared constants, errors, settings and logging for tarfetch."""
