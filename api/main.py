"""Upload Gateway: token-protected file upload and delete over HTTP."""
import logging
from pathlib import Path
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from api.config import Settings, get_settings
from api.errors import install_error_handlers
from api.routers import files, uploads
from storage.local import LocalFileStore

logger = logging.getLogger(__name__)

INDEX_PAGE = Path(__file__).parent / "index.html"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="Upload Gateway",
        description="Upload files, get public links back, delete them by name",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    install_error_handlers(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    store = LocalFileStore(settings.upload_dir, settings.base_url)
    store.ensure_dir()
    app.state.settings = settings
    app.state.store = store

    if not settings.token_key:
        logger.warning("TOKEN_KEY is not set; every authenticated request will be rejected")

    @app.get("/health")
    def health():
        return {"status": "ok", "service": "upload-gateway"}

    @app.get("/", include_in_schema=False)
    def index():
        return FileResponse(INDEX_PAGE)

    # Routers
    app.include_router(uploads.router)
    app.include_router(files.router)

    # Serve stored files
    app.mount("/upload", StaticFiles(directory=str(settings.upload_dir)), name="upload")

    return app


def run():
    import uvicorn

    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    logger.info("Serving %s on port %d", settings.upload_dir, settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
