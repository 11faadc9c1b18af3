"""Taskigt - typed outline notes in plain text.

Command-line front end, configuration and document store around the
taskigt_outline engine.
"""

__version__ = "0.1.0"
