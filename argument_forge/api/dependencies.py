"""API Dependencies — per-request access to the process-wide Oracle.

Invariants:
    - The Oracle is built once in the lifespan and stored on app.state
    - get_oracle builds one lazily when the lifespan did not run (e.g. bare ASGI mounts)

Design Decisions:
    - FastAPI Depends over module globals: tests swap the Oracle via dependency_overrides
"""

from fastapi import Request

from argument_forge.config import Settings, get_settings
from argument_forge.services.oracle import Oracle


def get_oracle(request: Request) -> Oracle:
    oracle = getattr(request.app.state, "oracle", None)
    if oracle is None:
        oracle = Oracle.from_settings(get_settings())
        request.app.state.oracle = oracle
    return oracle


def get_app_settings() -> Settings:
    return get_settings()
