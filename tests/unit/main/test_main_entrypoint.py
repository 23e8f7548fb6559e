from __future__ import annotations

import runpy


def test_main_module_runs_uvicorn(monkeypatch):
    executed = {}

    def fake_run(app, **kwargs) -> None:
        executed["app"] = app
        executed.update(kwargs)

    monkeypatch.setattr("uvicorn.run", fake_run)

    runpy.run_module("fleetview.main.__main__", run_name="__main__")

    assert executed["app"] == "fleetview.main.app:app"
    assert executed["port"] == 8000
