"""
PDF export of admin reports.

Reports are laid out as a single A4 HTML document (header with the date range,
summary cards, data tables, footer) and converted to PDF with WeasyPrint.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from nt_savitarna.core.logging_config import get_logger
from nt_savitarna.core.models.domain.enums import ReportType
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
from nt_savitarna.core.reporting.formatting import format_amount, format_datetime_lt

logger = get_logger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
DEFAULT_MAX_ROWS = 20

Card = Tuple[str, object]

PDF_STYLES = """
@page { size: A4; margin: 30px; }
body { font-family: "DejaVu Sans", Helvetica, sans-serif; font-size: 10px; color: #1f2937; }
.header { margin-bottom: 20px; border-bottom: 2px solid #2563eb; padding-bottom: 10px; }
.title { font-size: 20px; font-weight: bold; color: #1e3a8a; margin: 0 0 4px 0; }
.subtitle { font-size: 11px; color: #6b7280; margin: 0; }
.summary { display: flex; gap: 10px; margin-bottom: 20px; }
.card { flex: 1; background: #f3f4f6; border-radius: 4px; padding: 10px; }
.card-label { font-size: 9px; color: #6b7280; margin-bottom: 4px; }
.card-value { font-size: 16px; font-weight: bold; color: #111827; }
.section { margin-bottom: 18px; }
.section-title { font-size: 13px; font-weight: bold; margin-bottom: 6px; color: #1e3a8a; }
table { width: 100%; border-collapse: collapse; }
th { background: #2563eb; color: #ffffff; text-align: left; padding: 5px; }
td { padding: 5px; border-bottom: 1px solid #e5e7eb; }
tr:nth-child(even) td { background: #f9fafb; }
.more { font-style: italic; color: #6b7280; padding-top: 4px; }
.footer { margin-top: 24px; font-size: 8px; color: #9ca3af; text-align: center; }
"""


class PdfRenderError(RuntimeError):
    """Raised when WeasyPrint cannot produce the document."""


def escape_html(text: object) -> str:
    """Escape HTML special characters."""
    return (
        str(text)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#x27;")
    )


def _cards(cards: Sequence[Card]) -> str:
    items = "".join(
        f'<div class="card"><div class="card-label">{escape_html(label)}</div>'
        f'<div class="card-value">{escape_html(value)}</div></div>'
        for label, value in cards
    )
    return f'<div class="summary">{items}</div>'


def _table(title: str, headers: Sequence[str], rows: Sequence[Sequence[object]], max_rows: int = DEFAULT_MAX_ROWS) -> str:
    head = "".join(f"<th>{escape_html(h)}</th>" for h in headers)
    body = "".join(
        "<tr>" + "".join(f"<td>{escape_html(cell)}</td>" for cell in row) + "</tr>" for row in rows[:max_rows]
    )
    more = ""
    if len(rows) > max_rows:
        more = f'<div class="more">... ir dar {len(rows) - max_rows} įrašų</div>'
    return (
        f'<div class="section"><div class="section-title">{escape_html(title)}</div>'
        f"<table><thead><tr>{head}</tr></thead><tbody>{body}</tbody></table>{more}</div>"
    )


def render_document(
    title: str,
    date_range: str,
    cards: Sequence[Card],
    tables: Sequence[str],
    generated_at: Optional[datetime] = None,
) -> str:
    """Assemble the full HTML document for one report."""
    generated_at = generated_at or datetime.now()
    return (
        '<!DOCTYPE html><html lang="lt"><head><meta charset="utf-8">'
        f"<title>{escape_html(title)}</title><style>{PDF_STYLES}</style></head><body>"
        f'<div class="header"><p class="title">{escape_html(title)}</p>'
        f'<p class="subtitle">Laikotarpis: {escape_html(date_range)}</p></div>'
        f"{_cards(cards)}{''.join(tables)}"
        f'<div class="footer">NT Savitarna | Sugeneruota: {escape_html(format_datetime_lt(generated_at))}</div>'
        "</body></html>"
    )


def orders_html(data: OrdersReport, date_range: str) -> str:
    return render_document(
        "Užsakymų statistika",
        date_range,
        [("Viso užsakymų", data.total), ("Pagal statusą", f"{len(data.by_status)} kategorijos")],
        [
            _table("Užsakymai pagal statusą", ["Statusas", "Kiekis"], [(p.name, p.value) for p in data.by_status]),
            _table(
                "Užsakymai pagal paslaugos tipą",
                ["Paslaugos tipas", "Kiekis"],
                [(p.name, p.value) for p in data.by_service_type],
            ),
            _table(
                "Užsakymai pagal savivaldybę (Top 15)",
                ["Savivaldybė", "Kiekis"],
                [(p.name, p.value) for p in data.by_municipality],
                max_rows=15,
            ),
        ],
    )


def revenue_html(data: RevenueReport, date_range: str) -> str:
    return render_document(
        "Pajamų statistika",
        date_range,
        [
            ("Bendros pajamos", f"{format_amount(data.total_revenue)} €"),
            ("Vidutinė užsakymo vertė", f"{format_amount(data.average_order_value)} €"),
            ("Prognozuojamos pajamos", f"{format_amount(data.projected_revenue)} €"),
        ],
        [
            _table(
                "Pajamos pagal paslaugos tipą",
                ["Paslaugos tipas", "Pajamos (€)"],
                [(p.name, format_amount(p.value)) for p in data.by_service_type],
            ),
            _table(
                "Pajamos per laikotarpį",
                ["Data", "Pajamos (€)"],
                [(p.date, format_amount(p.value)) for p in data.timeline],
                max_rows=30,
            ),
        ],
    )


def valuators_html(data: ValuatorsReport, date_range: str) -> str:
    cards: List[Card] = [("Viso priskirtų", data.total_assigned), ("Vidurkis vienam", data.average_per_valuator)]
    if data.most_loaded:
        cards.append(("Labiausiai apkrautas", f"{data.most_loaded.name} ({data.most_loaded.count})"))
    if data.least_loaded:
        cards.append(("Mažiausiai apkrautas", f"{data.least_loaded.name} ({data.least_loaded.count})"))

    return render_document(
        "Vertintojų apkrovimas",
        date_range,
        cards,
        [
            _table(
                "Vertintojų reitingas",
                ["Kodas", "Vardas", "Atlikta", "Vykdoma", "Viso"],
                [(r.code, r.name, r.completed_orders, r.in_progress_orders, r.total_orders) for r in data.ranking],
            ),
            _table(
                "Užsakymai pagal vertintoją",
                ["Vertintojas", "Užsakymų skaičius"],
                [(p.name, p.value) for p in data.by_valuator],
            ),
        ],
    )


def clients_html(data: ClientsReport, date_range: str) -> str:
    return render_document(
        "Klientų aktyvumas",
        date_range,
        [
            ("Viso klientų", data.total_clients),
            ("Aktyvių klientų", data.active_clients),
            ("Naujų šį mėnesį", data.new_this_month),
        ],
        [
            _table(
                "Top 10 aktyviausių klientų",
                ["El. paštas", "Vardas", "Užsakymų", "Išleista (€)"],
                [(c.email, c.name, c.orders_count, format_amount(c.total_spent)) for c in data.top_clients],
                max_rows=10,
            ),
            _table(
                "Klientų aktyvumo pasiskirstymas",
                ["Kategorija", "Klientų skaičius"],
                [(p.name, p.value) for p in data.activity_distribution],
            ),
        ],
    )


def geography_html(data: GeographyReport, date_range: str) -> str:
    return render_document(
        "Geografinė statistika",
        date_range,
        [
            ("Unikalių lokacijų", data.total_locations),
            ("Savivaldybių", len(data.by_municipality)),
            ("Miestų", len(data.by_city)),
        ],
        [
            _table(
                "Užsakymai pagal savivaldybę",
                ["Savivaldybė", "Užsakymų skaičius"],
                [(p.name, p.value) for p in data.by_municipality],
                max_rows=15,
            ),
            _table(
                "Užsakymai pagal miestą (Top 20)",
                ["Miestas", "Užsakymų skaičius"],
                [(p.name, p.value) for p in data.by_city],
            ),
        ],
    )


HTML_BUILDERS: Dict[ReportType, Callable[..., str]] = {
    ReportType.orders: orders_html,
    ReportType.revenue: revenue_html,
    ReportType.valuators: valuators_html,
    ReportType.clients: clients_html,
    ReportType.geography: geography_html,
}


def render_html(report_type: ReportType, data: ReportData, report_filter: ReportFilter) -> str:
    date_range = format_filter_range(report_filter.preset, report_filter.date_from, report_filter.date_to)
    return HTML_BUILDERS[report_type](data, date_range)


def html_to_pdf(html_content: str) -> bytes:
    """Convert an HTML document to PDF bytes.

    WeasyPrint is imported on first use because it loads Pango at import time;
    missing system libraries surface as ``PdfRenderError``.
    """
    try:
        from weasyprint import HTML

        return HTML(string=html_content).write_pdf()
    except (ImportError, OSError) as e:
        raise PdfRenderError(f"PDF library dependencies missing: {e}") from e


def render_pdf(report_type: ReportType, data: ReportData, report_filter: ReportFilter) -> bytes:
    html_content = render_html(report_type, data, report_filter)
    pdf = html_to_pdf(html_content)
    logger.debug("Rendered %s report PDF (%d bytes)", report_type.value, len(pdf))
    return pdf
