"""Fetch, decode and extract pipeline stages."""
