# This project was developed with assistance from AI tools.
"""Configuration and shared infrastructure."""
