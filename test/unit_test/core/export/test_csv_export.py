"""Unit tests for CSV report export."""

from __future__ import annotations

import csv
import io
from datetime import date

import pytest

from nt_savitarna.core.export.csv_export import (
    UTF8_BOM,
    build_export_filename,
    render_csv,
    render_table,
)
from nt_savitarna.core.models.domain.enums import ExportFormat, ReportType
from nt_savitarna.core.models.io.reports import (
    ClientsReport,
    GeographyReport,
    OrdersReport,
    ReportFilter,
    RevenueReport,
    TopClient,
    ValuatorsReport,
)


@pytest.fixture
def month_filter() -> ReportFilter:
    return ReportFilter(preset="month")


class TestRenderTable:
    """Test single CSV tables."""

    def test_quotes_only_when_needed(self):
        text = render_table(["Name", "Value"], [("Vilnius", 3), ('Kaunas, "centras"', 1)])

        assert text.splitlines() == ["Name,Value", "Vilnius,3", '"Kaunas, ""centras""",1']

    def test_round_trips_through_csv_reader(self):
        text = render_table(["a"], [("x,y",)])

        assert list(csv.reader(io.StringIO(text))) == [["a"], ["x,y"]]


class TestRenderCsv:
    """Test full report documents."""

    def test_orders_document(self, month_filter):
        data = OrdersReport(
            total=3,
            by_status=[{"name": "Apmokėta", "value": 2}, {"name": "Atlikta", "value": 1}],
            by_service_type=[{"name": "Vertintojo nustatymas", "value": 3}],
            by_property_type=[],
            by_municipality=[{"name": "Vilniaus m. sav.", "value": 3}],
            timeline=[{"date": "2024-03-01", "value": 3}],
        )

        text = render_csv(ReportType.orders, data, month_filter)
        lines = text.split("\n")

        assert lines[0] == UTF8_BOM + "Užsakymų statistika - month"
        assert lines[1] == "Viso užsakymų: 3"
        assert lines[2] == ""
        assert "UŽSAKYMAI PAGAL STATUSĄ" in lines
        assert "Apmokėta,2" in lines
        assert "2024-03-01,3" in lines
        assert not text.endswith("\n")

    def test_revenue_amounts_have_two_decimals(self, month_filter):
        data = RevenueReport(
            total_revenue=68,
            average_order_value=22.67,
            projected_revenue=204,
            by_service_type=[{"name": "Automatinis vertinimas", "value": 8}],
            timeline=[{"date": "2024-03", "value": 8}],
        )

        lines = render_csv(ReportType.revenue, data, month_filter).split("\n")

        assert "Bendros pajamos: 68.00 €" in lines
        assert "Automatinis vertinimas,8.00" in lines
        assert "2024-03,8.00" in lines

    def test_valuators_summary_without_loads(self, month_filter):
        data = ValuatorsReport(
            total_assigned=0,
            average_per_valuator=0,
            by_valuator=[],
            ranking=[],
            valuator_codes=[],
            timeline=[],
        )

        text = render_csv(ReportType.valuators, data, month_filter)

        assert "Labiausiai apkrautas" not in text
        assert "Kodas,Vardas,Atlikta,Vykdoma,Viso" in text

    def test_clients_document(self, month_filter):
        data = ClientsReport(
            total_clients=5,
            active_clients=2,
            new_this_month=1,
            registration_timeline=[],
            activity_distribution=[{"name": "1 užsakymas", "value": 2}],
            top_clients=[TopClient(email="a@example.lt", name="Ona", orders_count=1, total_spent=30)],
        )

        lines = render_csv(ReportType.clients, data, month_filter).split("\n")

        assert "a@example.lt,Ona,1,30.00" in lines
        assert "Naujų šį mėnesį: 1" in lines

    def test_custom_range_in_title(self):
        data = GeographyReport(by_municipality=[], by_city=[], total_locations=0)
        report_filter = ReportFilter(preset="custom", date_from="2024-01-01", date_to="2024-01-31")

        text = render_csv(ReportType.geography, data, report_filter)

        assert text.startswith(UTF8_BOM + "Geografinė statistika - 2024-01-01_2024-01-31")


class TestExportFilename:
    """Test attachment file names."""

    def test_preset(self, month_filter):
        name = build_export_filename(ReportType.orders, ExportFormat.csv, month_filter, today=date(2024, 3, 15))

        assert name == "orders-month-2024-03-15.csv"

    def test_custom_range(self):
        report_filter = ReportFilter(preset="custom", date_from="2024-01-01", date_to="2024-01-31")

        name = build_export_filename(ReportType.revenue, ExportFormat.pdf, report_filter, today=date(2024, 3, 15))

        assert name == "revenue-2024-01-01_2024-01-31-2024-03-15.pdf"
