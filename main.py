"""
VibeCodeSpace API Server Entry Point

Use this file for deployment:
  uvicorn main:app --host 0.0.0.0 --port $PORT
"""

from api_server import configure_logging, create_app
from app.config import load_settings

settings = load_settings()
configure_logging(settings.log_level)

app = create_app(settings)


# For local development
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
