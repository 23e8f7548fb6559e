from __future__ import annotations

import pytest

from fleetview.main import app as module_app
from fleetview.main.app import create_app


@pytest.mark.asyncio
async def test_create_app_initializes_lifespan() -> None:
    app = create_app()
    assert app.title

    paths = {route.path for route in app.routes}
    assert {"/health", "/info", "/fleet/", "/reports/runtime", "/trends/tags"} <= paths

    async with app.router.lifespan_context(app):
        assert app.state.started_at is not None

    assert isinstance(module_app.app, type(app))


def test_create_app_accepts_explicit_settings() -> None:
    from fleetview.main.config import AppSettings, ServiceSettings
    from fleetview.main.container import get_container

    settings = AppSettings(service=ServiceSettings(title="Yard Dashboard", version="9.9.9"))

    app = create_app(settings)

    assert app.title == "Yard Dashboard"
    assert app.version == "9.9.9"
    assert get_container().system_info().title == "Yard Dashboard"
