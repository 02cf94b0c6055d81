"""
Admin Report Endpoints.

Aggregated statistics over a date range (preset or custom) and their CSV/PDF
export. All endpoints require the admin role.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Response
from starlette.concurrency import run_in_threadpool

from nt_savitarna.core.export import (
    CSV_CONTENT_TYPE,
    PDF_CONTENT_TYPE,
    PdfRenderError,
    build_export_filename,
    render_csv,
    render_pdf,
)
from nt_savitarna.core.logging_config import get_logger
from nt_savitarna.core.models.domain import messages
from nt_savitarna.core.models.domain.enums import DatePreset, ExportFormat, ReportType
from nt_savitarna.core.models.io.common import ApiResponse
from nt_savitarna.core.models.io.reports import (
    ClientsReport,
    ExportRequest,
    GeographyReport,
    OrdersReport,
    ReportFilter,
    RevenueReport,
    ValuatorsReport,
)
from nt_savitarna.server.exception_handlers import ApiError, translate_db_errors
from nt_savitarna.server.services.deps import SessionDep, get_admin_user
from nt_savitarna.server.services.report_service import ReportService, export_report_service

logger = get_logger(__name__)

router = APIRouter(tags=["admin-reports"], dependencies=[Depends(get_admin_user)])


def get_report_service(session: SessionDep) -> ReportService:
    return ReportService(session)


def get_report_filter(
    preset: str = DatePreset.month.value, date_from: Optional[str] = None, date_to: Optional[str] = None
) -> ReportFilter:
    return ReportFilter(preset=preset, date_from=date_from, date_to=date_to)


ReportServiceDep = Annotated[ReportService, Depends(get_report_service)]
ReportFilterDep = Annotated[ReportFilter, Depends(get_report_filter)]

REPORT_RESPONSES = {
    400: {"description": "Malformed date or start after end"},
    401: {"description": "Not logged in"},
    403: {"description": "Not an administrator"},
}


@router.get(
    "/orders",
    response_model=ApiResponse[OrdersReport],
    summary="Orders Report",
    description="Order counts by status, service type, property type and municipality, plus a timeline.",
    responses=REPORT_RESPONSES,
)
async def orders_report(service: ReportServiceDep, report_filter: ReportFilterDep) -> ApiResponse[OrdersReport]:
    """
    Orders report.

    - **preset**: ``today``, ``week``, ``month``, ``quarter``, ``year`` or ``custom``.
    - **date_from** / **date_to**: ISO dates, used with the ``custom`` preset.
    """
    with translate_db_errors(messages.REPORT_FETCH_FAILED):
        data = await service.build(ReportType.orders, report_filter)
    return ApiResponse(data=data)


@router.get(
    "/revenue",
    response_model=ApiResponse[RevenueReport],
    summary="Revenue Report",
    description="Revenue of paid and delivered orders, average order value and a 30-day projection.",
    responses=REPORT_RESPONSES,
)
async def revenue_report(service: ReportServiceDep, report_filter: ReportFilterDep) -> ApiResponse[RevenueReport]:
    with translate_db_errors(messages.REPORT_FETCH_FAILED):
        data = await service.build(ReportType.revenue, report_filter)
    return ApiResponse(data=data)


@router.get(
    "/valuators",
    response_model=ApiResponse[ValuatorsReport],
    summary="Valuator Workload Report",
    description="Orders assigned to active valuators, ranking and a per-valuator timeline.",
    responses=REPORT_RESPONSES,
)
async def valuators_report(
    service: ReportServiceDep, report_filter: ReportFilterDep
) -> ApiResponse[ValuatorsReport]:
    with translate_db_errors(messages.REPORT_FETCH_FAILED):
        data = await service.build(ReportType.valuators, report_filter)
    return ApiResponse(data=data)


@router.get(
    "/clients",
    response_model=ApiResponse[ClientsReport],
    summary="Client Activity Report",
    description="Client totals, registrations, activity distribution and top clients.",
    responses=REPORT_RESPONSES,
)
async def clients_report(service: ReportServiceDep, report_filter: ReportFilterDep) -> ApiResponse[ClientsReport]:
    with translate_db_errors(messages.REPORT_FETCH_FAILED):
        data = await service.build(ReportType.clients, report_filter)
    return ApiResponse(data=data)


@router.get(
    "/geography",
    response_model=ApiResponse[GeographyReport],
    summary="Geography Report",
    description="Orders by municipality and city.",
    responses=REPORT_RESPONSES,
)
async def geography_report(
    service: ReportServiceDep, report_filter: ReportFilterDep
) -> ApiResponse[GeographyReport]:
    with translate_db_errors(messages.REPORT_FETCH_FAILED):
        data = await service.build(ReportType.geography, report_filter)
    return ApiResponse(data=data)


@router.post(
    "/export",
    summary="Export Report",
    description="Download a report as CSV or PDF.",
    response_description="The report file as an attachment.",
    responses={
        **REPORT_RESPONSES,
        200: {"content": {CSV_CONTENT_TYPE: {}, PDF_CONTENT_TYPE: {}}},
        500: {"description": "Export failed"},
    },
)
async def export_report(body: ExportRequest, session: SessionDep) -> Response:
    """
    Export a report.

    - **report_type**: ``orders``, ``revenue``, ``valuators``, ``clients`` or ``geography``.
    - **format**: ``csv`` or ``pdf``.
    - **filter**: Date filter as accepted by the report endpoints.
    """
    service = export_report_service(session)
    with translate_db_errors(messages.EXPORT_FAILED):
        data = await service.build(body.report_type, body.filter)

    filename = build_export_filename(body.report_type, body.format, body.filter)
    if body.format == ExportFormat.csv:
        content = render_csv(body.report_type, data, body.filter).encode("utf-8")
        media_type = CSV_CONTENT_TYPE
    else:
        try:
            content = await run_in_threadpool(render_pdf, body.report_type, data, body.filter)
        except PdfRenderError as e:
            raise ApiError(messages.EXPORT_FAILED, status_code=500) from e
        media_type = PDF_CONTENT_TYPE

    logger.info("Exported %s report as %s (%d bytes)", body.report_type.value, body.format.value, len(content))
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
