"""Procurement dashboard endpoint."""

from fastapi import APIRouter, Depends, Query

from procurement.api.dependencies import get_dashboard_use_case
from procurement.application.dto.responses import DashboardResponse, ErrorResponse
from procurement.application.use_cases.get_dashboard import GetDashboardUseCase

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get(
    "",
    response_model=DashboardResponse,
    responses={400: {"model": ErrorResponse}},
)
async def get_dashboard(
    period: str = Query(default="month", description="month or year"),
    use_case: GetDashboardUseCase = Depends(get_dashboard_use_case),
) -> DashboardResponse:
    """Order counts, spending, pending approvals, unpaid invoices and stock alerts."""
    summary = await use_case.execute(period=period)
    return use_case.to_response(summary)
