"""Logging and Actions runner helpers."""
