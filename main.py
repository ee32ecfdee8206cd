"""Serve the users API with uvicorn."""

import uvicorn

from src.api import create_app
from src.infrastructure.database import settings

app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000, log_level=settings.log_level.lower())
