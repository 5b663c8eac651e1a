"""FastAPI dependencies shared by the routers."""

from __future__ import annotations

from fastapi import Request

from propreg.registry.memory_registry import PropertyRegistry


def get_registry(request: Request) -> PropertyRegistry:
    """Return the registry owned by the running application.

    ``create_app`` builds exactly one ``PropertyRegistry`` and stores it on
    ``app.state``; tests override this dependency or pass their own registry.
    """
    return request.app.state.registry
