"""Entry point: `uvicorn main:app` or `python main.py`."""
from app.core.config import PORT
from app.main import app

__all__ = ["app"]


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=PORT)
