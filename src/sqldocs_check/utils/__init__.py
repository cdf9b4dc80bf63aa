"""Utility helpers for sqldocs-check."""
