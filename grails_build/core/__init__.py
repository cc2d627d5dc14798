"""Ambient infrastructure: settings and logging."""
