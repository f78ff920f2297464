# src/pa_app/core/registry.py
from importlib.metadata import entry_points

from fastapi import APIRouter

from pa_app.core.logging import get_logger

EP_GROUP = "pa_app.modules"

logger = get_logger("pa_app.registry")


def load_module_routers() -> list[APIRouter]:
    """Load the routers advertised under the ``pa_app.modules`` entry point group."""
    routers: list[APIRouter] = []
    for ep in sorted(entry_points(group=EP_GROUP), key=lambda e: e.name):
        router = ep.load()
        if isinstance(router, APIRouter):
            routers.append(router)
        else:
            logger.warning("Entry point %s does not load to an APIRouter, skipped", ep.name)
    return routers
