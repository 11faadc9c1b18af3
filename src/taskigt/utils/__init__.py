"""Utility helpers for Taskigt."""
