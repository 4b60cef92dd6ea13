"""DreamColor coloring book API."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse

from dreamcolor.logging_config import setup_logging

from app.config import settings
from app.routers import books, chat, health
from app.websocket.progress_endpoint import progress_websocket_endpoint

setup_logging("dreamcolor")
setup_logging("app")

app = FastAPI(
    title="DreamColor API",
    description="Generate printable AI coloring books from a theme",
    version="0.1.0"
)

# CORS middleware for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health.router)
app.include_router(books.router)
app.include_router(chat.router)

app.add_api_websocket_route("/ws/sessions/{session_id}", progress_websocket_endpoint)


@app.get("/")
async def root():
    """Serve the single-page coloring book UI."""
    return FileResponse(settings.STATIC_DIR / "index.html", media_type="text/html")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="127.0.0.1", port=8000, reload=True)
