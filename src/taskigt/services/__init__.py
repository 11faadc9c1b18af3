"""Taskigt services: editing session and document store."""
