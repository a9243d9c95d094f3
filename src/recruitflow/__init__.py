# This project was developed with assistance from AI tools.
"""Workflow and compliance rules engine for recruitment candidates."""

__version__ = "0.1.0"
