# This project was developed with assistance from AI tools.
"""HTTP routers exposing the engine to API callers."""
