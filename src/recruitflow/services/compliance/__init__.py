# This project was developed with assistance from AI tools.
"""Country rules and candidate compliance evaluation."""
