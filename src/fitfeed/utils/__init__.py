"""Utility helpers for fitfeed."""
