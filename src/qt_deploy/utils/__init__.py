"""Logging, filesystem and external command helpers."""
