# This project was developed with assistance from AI tools.
"""Engine services -- pure evaluation plus explicit candidate mutations."""
