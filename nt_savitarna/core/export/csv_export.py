"""
CSV export of admin reports.

Each report is rendered as a small multi-section document: a title line with
the date range, summary lines, then one titled table per breakdown. The output
starts with a UTF-8 BOM so that spreadsheet software picks up the Lithuanian
characters correctly.
"""

from __future__ import annotations

import csv
import io
from datetime import date
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from nt_savitarna.core.models.domain.enums import ExportFormat, ReportType
from nt_savitarna.core.models.io.reports import (
    ClientsReport,
    GeographyReport,
    OrdersReport,
    ReportData,
    ReportFilter,
    RevenueReport,
    ValuatorsReport,
)
from nt_savitarna.core.reporting.date_ranges import format_filter_range
from nt_savitarna.core.reporting.formatting import format_amount

UTF8_BOM = "\ufeff"
CSV_CONTENT_TYPE = "text/csv; charset=utf-8"


def render_table(headers: Sequence[str], rows: Iterable[Sequence[object]]) -> str:
    """Render one CSV table with minimal quoting and ``\\n`` line endings."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(headers)
    writer.writerows(rows)
    return buffer.getvalue().rstrip("\n")


def _document(title: str, summary: List[str], sections: List[tuple]) -> str:
    lines = [UTF8_BOM + title, *summary, ""]
    for index, (section_title, headers, rows) in enumerate(sections):
        lines.append(section_title)
        lines.append(render_table(headers, rows))
        if index < len(sections) - 1:
            lines.append("")
    return "\n".join(lines)


def export_orders_csv(data: OrdersReport, date_range: str) -> str:
    return _document(
        f"Užsakymų statistika - {date_range}",
        [f"Viso užsakymų: {data.total}"],
        [
            ("UŽSAKYMAI PAGAL STATUSĄ", ["Statusas", "Kiekis"], [(p.name, p.value) for p in data.by_status]),
            (
                "UŽSAKYMAI PAGAL PASLAUGOS TIPĄ",
                ["Paslaugos tipas", "Kiekis"],
                [(p.name, p.value) for p in data.by_service_type],
            ),
            (
                "UŽSAKYMAI PAGAL TURTO TIPĄ",
                ["Turto tipas", "Kiekis"],
                [(p.name, p.value) for p in data.by_property_type],
            ),
            (
                "UŽSAKYMAI PAGAL SAVIVALDYBĘ",
                ["Savivaldybė", "Kiekis"],
                [(p.name, p.value) for p in data.by_municipality],
            ),
            ("UŽSAKYMAI PER LAIKOTARPĮ", ["Data", "Kiekis"], [(p.date, p.value) for p in data.timeline]),
        ],
    )


def export_revenue_csv(data: RevenueReport, date_range: str) -> str:
    return _document(
        f"Pajamų statistika - {date_range}",
        [
            f"Bendros pajamos: {format_amount(data.total_revenue)} €",
            f"Vidutinė užsakymo vertė: {format_amount(data.average_order_value)} €",
            f"Prognozuojamos pajamos: {format_amount(data.projected_revenue)} €",
        ],
        [
            (
                "PAJAMOS PAGAL PASLAUGOS TIPĄ",
                ["Paslaugos tipas", "Pajamos (€)"],
                [(p.name, format_amount(p.value)) for p in data.by_service_type],
            ),
            (
                "PAJAMOS PER LAIKOTARPĮ",
                ["Data", "Pajamos (€)"],
                [(p.date, format_amount(p.value)) for p in data.timeline],
            ),
        ],
    )


def export_valuators_csv(data: ValuatorsReport, date_range: str) -> str:
    summary = [
        f"Viso priskirtų užsakymų: {data.total_assigned}",
        f"Vidurkis vienam vertintojui: {data.average_per_valuator}",
    ]
    if data.most_loaded:
        summary.append(f"Labiausiai apkrautas: {data.most_loaded.name} ({data.most_loaded.count})")
    if data.least_loaded:
        summary.append(f"Mažiausiai apkrautas: {data.least_loaded.name} ({data.least_loaded.count})")

    return _document(
        f"Vertintojų apkrovimas - {date_range}",
        summary,
        [
            (
                "VERTINTOJŲ REITINGAS",
                ["Kodas", "Vardas", "Atlikta", "Vykdoma", "Viso"],
                [
                    (r.code, r.name, r.completed_orders, r.in_progress_orders, r.total_orders)
                    for r in data.ranking
                ],
            ),
            (
                "UŽSAKYMAI PAGAL VERTINTOJĄ",
                ["Vertintojas", "Užsakymų skaičius"],
                [(p.name, p.value) for p in data.by_valuator],
            ),
        ],
    )


def export_clients_csv(data: ClientsReport, date_range: str) -> str:
    return _document(
        f"Klientų aktyvumas - {date_range}",
        [
            f"Viso klientų: {data.total_clients}",
            f"Aktyvių klientų: {data.active_clients}",
            f"Naujų šį mėnesį: {data.new_this_month}",
        ],
        [
            (
                "TOP 10 AKTYVIAUSIŲ KLIENTŲ",
                ["El. paštas", "Vardas", "Užsakymų skaičius", "Išleista (€)"],
                [(c.email, c.name, c.orders_count, format_amount(c.total_spent)) for c in data.top_clients],
            ),
            (
                "KLIENTŲ AKTYVUMO PASISKIRSTYMAS",
                ["Kategorija", "Klientų skaičius"],
                [(p.name, p.value) for p in data.activity_distribution],
            ),
            (
                "REGISTRACIJŲ DINAMIKA",
                ["Data", "Naujų klientų"],
                [(p.date, p.value) for p in data.registration_timeline],
            ),
        ],
    )


def export_geography_csv(data: GeographyReport, date_range: str) -> str:
    return _document(
        f"Geografinė statistika - {date_range}",
        [f"Unikalių lokacijų: {data.total_locations}"],
        [
            (
                "UŽSAKYMAI PAGAL SAVIVALDYBĘ",
                ["Savivaldybė", "Užsakymų skaičius"],
                [(p.name, p.value) for p in data.by_municipality],
            ),
            (
                "UŽSAKYMAI PAGAL MIESTĄ (TOP 20)",
                ["Miestas", "Užsakymų skaičius"],
                [(p.name, p.value) for p in data.by_city],
            ),
        ],
    )


CSV_EXPORTERS: Dict[ReportType, Callable[..., str]] = {
    ReportType.orders: export_orders_csv,
    ReportType.revenue: export_revenue_csv,
    ReportType.valuators: export_valuators_csv,
    ReportType.clients: export_clients_csv,
    ReportType.geography: export_geography_csv,
}


def render_csv(report_type: ReportType, data: ReportData, report_filter: ReportFilter) -> str:
    date_range = format_filter_range(report_filter.preset, report_filter.date_from, report_filter.date_to)
    return CSV_EXPORTERS[report_type](data, date_range)


def build_export_filename(
    report_type: ReportType,
    fmt: ExportFormat,
    report_filter: ReportFilter,
    today: Optional[date] = None,
) -> str:
    """``{report}-{range}-{YYYY-MM-DD}.{ext}``, e.g. ``orders-month-2024-03-15.csv``."""
    today = today or date.today()
    date_range = format_filter_range(report_filter.preset, report_filter.date_from, report_filter.date_to)
    return f"{report_type.value}-{date_range}-{today:%Y-%m-%d}.{fmt.value}"
