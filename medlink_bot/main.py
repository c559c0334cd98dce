"""
Main application entry point for the Medlink bot.
"""

import uvicorn
from .api.app import create_app
from .config import get_settings

# Create the FastAPI application
app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "medlink_bot.main:app",
        host="0.0.0.0",
        port=get_settings().port,
    )
