"""Utility helpers for edgepurge."""
