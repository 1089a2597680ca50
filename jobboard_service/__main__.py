"""Run the API with uvicorn: ``python -m jobboard_service``."""

import uvicorn

from .config import get_settings


if __name__ == "__main__":
    uvicorn.run("jobboard_service.app:app", host="0.0.0.0", port=get_settings().port)
