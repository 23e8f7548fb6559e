from __future__ import annotations

import pytest

from fleetview.application.use_cases.runtime_report_use_cases import (
    GenerateRuntimeReportUseCase,
)


@pytest.fixture()
def engine_factory(fleet_catalog, report_options, report_cache, stub_gateway, fixed_now):
    def _build() -> GenerateRuntimeReportUseCase:
        return GenerateRuntimeReportUseCase(
            runtime_gateway=stub_gateway,
            report_cache=report_cache,
            fleet_catalog=fleet_catalog,
            options=report_options,
            clock=lambda: fixed_now,
        )

    return _build
