# src/pa_app/api/main.py
from fastapi import FastAPI

from pa_app.core.config import get_settings
from pa_app.core.logging import configure_logging
from pa_app.core.registry import load_module_routers
from pa_app.version import get_version


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title="Photo Archive Processor", version=get_version(), debug=settings.DEBUG
    )
    configure_logging(settings.LOG_LEVEL, json=settings.LOG_JSON)

    for r in load_module_routers():
        app.include_router(r, prefix="/api")

    @app.get("/health")
    def health():
        return {"status": "ok", "version": get_version()}

    return app


app = create_app()
