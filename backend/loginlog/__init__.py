"""Capture log for submitted login credentials."""
