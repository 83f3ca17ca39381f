"""Utility helpers for jsonmaker."""
