# This project was developed with assistance from AI tools.
"""Run the API with ``python -m recruitflow``."""

import os

import uvicorn

from .main import app

if __name__ == "__main__":
    port = int(os.getenv("PORT", "8000"))
    uvicorn.run(app, host="0.0.0.0", port=port)
