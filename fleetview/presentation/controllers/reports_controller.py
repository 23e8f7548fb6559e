"""
Reports Router - Presentation Layer

This module defines the FastAPI router for runtime report endpoints.
"""

from typing import List, Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query, status

from fleetview.application.dtos.report_dto import (
    RuntimeReportDTO,
    RuntimeReportRequestDTO,
)
from fleetview.application.use_cases.runtime_report_use_cases import (
    GenerateRuntimeReportUseCase,
    RecomputeTrendUseCase,
)
from fleetview.domain.entities.errors import (
    EmptySelectionError,
    InvalidRangeError,
    ReportNotAvailableError,
    UnknownEntityError,
)
from fleetview.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.post("/runtime", response_model=RuntimeReportDTO)
@inject
async def generate_runtime_report(
    request: RuntimeReportRequestDTO,
    report_use_case: GenerateRuntimeReportUseCase = Depends(
        Provide["generate_runtime_report_use_case"]
    ),
) -> RuntimeReportDTO:
    """
    Build a runtime report for a preset or custom date range.

    Cells that cannot be fetched are reported as zero and listed in
    ``failed_cells``; only invalid input fails the request.
    """
    logger.info(
        "reports.runtime.requested",
        entity_ids=request.entity_ids,
        days=request.days,
        custom=request.start is not None,
    )
    try:
        return await report_use_case.execute(request)
    except (InvalidRangeError, EmptySelectionError) as exc:
        raise HTTPException(status_code=422, detail=exc.message)
    except UnknownEntityError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message)
    except Exception as exc:
        logger.error("reports.runtime.failed", error=str(exc), exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )


@router.get("/runtime/latest", response_model=RuntimeReportDTO)
@inject
async def get_latest_runtime_report(
    selected: Optional[List[str]] = Query(
        default=None, description="Entities averaged into the trend line"
    ),
    include_trend: bool = Query(default=True, description="Attach the trend overlay"),
    recompute_use_case: RecomputeTrendUseCase = Depends(
        Provide["recompute_trend_use_case"]
    ),
) -> RuntimeReportDTO:
    """Return the latest report with the trend recomputed for a selection."""
    try:
        return await recompute_use_case.execute(selected, include_trend)
    except ReportNotAvailableError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message)
    except Exception as exc:
        logger.error("reports.latest.failed", error=str(exc), exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
