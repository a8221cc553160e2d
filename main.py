from contextlib import asynccontextmanager
import logging
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse

from quizdeck.api.v1 import api_router
from quizdeck.core.config import settings
from quizdeck.core.database import close_db, init_db
from quizdeck.core.exceptions import register_exception_handlers
from quizdeck.core.logger import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    await init_db()
    yield
    close_db()


def mount_frontend(app: FastAPI, frontend_dir: str):
    """Serve the browser client, falling back to index.html for unknown paths."""
    root = Path(frontend_dir).resolve()
    index = root / "index.html"
    if not index.is_file():
        logger.info("No frontend found at %s, serving the API only", root)
        return

    @app.get("/{full_path:path}", include_in_schema=False)
    async def frontend(full_path: str):
        if full_path.startswith("api/"):
            raise HTTPException(status_code=404, detail="Not found.")
        candidate = (root / full_path).resolve()
        if full_path and candidate.is_file() and root in candidate.parents:
            return FileResponse(candidate)
        return FileResponse(index)


def make_app(frontend_dir: str = settings.frontend_dir):
    app = FastAPI(title="quizdeck", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(
        api_router,
    )
    # registered last so the catch-all never shadows the API
    mount_frontend(app, frontend_dir)
    return app


setup_logging(settings.log_level)
app = make_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
        proxy_headers=True,
        forwarded_allow_ips="*"
    )
