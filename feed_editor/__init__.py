"""Merged YouTube feed editor."""
