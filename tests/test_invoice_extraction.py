"""Tests for invoice extraction and its fallback chains."""

from docfields.extraction.common import DATE_FIELD
from docfields.extraction.fields import ExtractedField
from docfields.extraction.invoice import (
    extract_invoice_fields,
    extract_total_amount,
    extract_vendor_name,
    first_accepted,
    is_numeric,
    known_vendor_matcher,
    total_from_bare_decimal,
    total_from_label,
    total_from_table,
    vendor_from_company_suffix,
    vendor_from_label,
    vendor_from_table_scan,
)
from docfields.utils.config import ExtractionConfig


def _by_name(fields: list[ExtractedField]) -> dict[str, ExtractedField]:
    return {f.name: f for f in fields}


class TestExtractInvoiceFields:
    """Tests for the full invoice extractor."""

    def setup_method(self) -> None:
        self.config = ExtractionConfig()

    def test_table_invoice(self, invoice_text: str) -> None:
        fields: list[ExtractedField] = []
        extract_invoice_fields(invoice_text, fields, self.config)
        values = {f.name: (f.value, f.confidence) for f in fields}
        assert values == {
            "InvoiceNumber": ("NV-1007", 0.85),
            "InvoiceDate": ("2024-03-31", 0.85),
            "TotalAmount": ("1875.50", 0.85),
            "VendorName": ("ABC.LTD", 0.85),
        }

    def test_removes_generic_dates(self) -> None:
        fields = [
            ExtractedField(DATE_FIELD, "01/02/2024", 0.80, "date.numeric"),
            ExtractedField("TaxAmount", "$5.00", 0.85, "amount.tax"),
        ]
        extract_invoice_fields("Invoice 01/02/2024", fields, self.config)
        assert [f.name for f in fields] == ["TaxAmount"]

    def test_first_invoice_number_wins(self) -> None:
        fields: list[ExtractedField] = []
        extract_invoice_fields("NV-1111 NV-2222", fields, self.config)
        assert [f.value for f in fields if f.name == "InvoiceNumber"] == ["NV-1111"]

    def test_missing_fields_omitted(self) -> None:
        fields: list[ExtractedField] = []
        extract_invoice_fields("Invoice without details", fields, self.config)
        assert fields == []

    def test_invoice_date_requires_this_century(self) -> None:
        fields: list[ExtractedField] = []
        extract_invoice_fields("Invoice 1999-12-31", fields, self.config)
        assert "InvoiceDate" not in _by_name(fields)


class TestTotalAmountChain:
    """Tests for the total amount fallback chain."""

    def test_table_first(self) -> None:
        text = "Rate 150.00 TotalAmount 1875.50"
        assert total_from_table(text) == "1875.50"
        result = extract_total_amount(text)
        assert result is not None
        assert result.value == "1875.50"
        assert result.source == "invoice.total.table"

    def test_bare_decimal_fallback(self) -> None:
        result = extract_total_amount("Amount due 1234.56 now")
        assert result is not None
        assert result.value == "1234.56"
        assert result.source == "invoice.total.bare_decimal"
        assert result.confidence == 0.85

    def test_bare_decimal_ignores_longer_numbers(self) -> None:
        assert total_from_bare_decimal("12345.67 and 12,500.00") is None

    def test_label_fallback(self) -> None:
        text = "Total Amount: $12,500.00"
        assert total_from_label(text) == "12,500.00"
        result = extract_total_amount(text)
        assert result is not None
        assert result.source == "invoice.total.label"
        assert result.confidence == 0.85

    def test_no_total(self) -> None:
        assert extract_total_amount("nothing numeric") is None


class TestVendorMatchers:
    """Tests for the individual vendor name matchers."""

    def test_known_vendor_case_insensitive(self) -> None:
        matcher = known_vendor_matcher(["Acme Corp"])
        assert matcher("billed by ACME CORP today") == "ACME CORP"

    def test_known_vendor_needs_boundaries(self) -> None:
        matcher = known_vendor_matcher(["Acme"])
        assert matcher("Acmeville") is None

    def test_known_vendor_order(self) -> None:
        matcher = known_vendor_matcher(["Globex", "Initech"])
        assert matcher("Initech and Globex") == "Globex"

    def test_label(self) -> None:
        assert vendor_from_label("VendorName: Acme Widgets") == "Acme Widgets"

    def test_label_stops_at_next_label(self) -> None:
        text = "VendorName Acme Widgets InvoiceDate 2024-01-05"
        assert vendor_from_label(text) == "Acme Widgets"

    def test_label_stays_on_its_line(self) -> None:
        assert vendor_from_label("VendorName\nGlobex") is None

    def test_company_suffix_after_digit(self) -> None:
        text = "Invoice NV-2001 Qty 12 Globex Trading Ltd"
        assert vendor_from_company_suffix(text) == "Globex Trading Ltd"

    def test_company_suffix_needs_digit(self) -> None:
        assert vendor_from_company_suffix("Globex Trading Ltd") is None

    def test_table_scan(self) -> None:
        text = "Header\nVendorName\nGlobex\nInvoice 1"
        assert vendor_from_table_scan(text) == "Globex"

    def test_table_scan_rejects_invoice_line(self) -> None:
        assert vendor_from_table_scan("VendorName\nInvoice Date") is None

    def test_table_scan_rejects_numeric_line(self) -> None:
        assert vendor_from_table_scan("VendorName\n12345") is None

    def test_table_scan_needs_next_line(self) -> None:
        assert vendor_from_table_scan("VendorName") is None

    def test_is_numeric(self) -> None:
        assert is_numeric("1,234.50")
        assert not is_numeric("Acme 1")


class TestExtractVendorName:
    """Tests for vendor chain resolution."""

    def test_known_vendor_wins(self, invoice_text: str) -> None:
        result = extract_vendor_name(invoice_text, ExtractionConfig())
        assert result is not None
        assert result.value == "ABC.LTD"
        assert result.source == "invoice.vendor.known"

    def test_label_when_no_known_vendor(self, invoice_text: str) -> None:
        result = extract_vendor_name(invoice_text, ExtractionConfig(known_vendors=[]))
        assert result is not None
        assert result.value == "ABC.LTD"
        assert result.source == "invoice.vendor.label"
        assert result.confidence == 0.85

    def test_short_candidate_falls_through(self) -> None:
        text = "Invoice VendorName AB TotalAmount 100 7 Initech Corp"
        result = extract_vendor_name(text, ExtractionConfig(known_vendors=[]))
        assert result is not None
        assert result.value == "Initech Corp"
        assert result.source == "invoice.vendor.suffix"

    def test_numeric_candidate_rejected(self) -> None:
        result = extract_vendor_name(
            "VendorName 4471", ExtractionConfig(known_vendors=[])
        )
        assert result is None

    def test_table_scan_fallback(self) -> None:
        result = extract_vendor_name(
            "VendorName\nGlobex\n", ExtractionConfig(known_vendors=[])
        )
        assert result is not None
        assert result.value == "Globex"
        assert result.confidence == 0.80
        assert result.source == "invoice.vendor.table_scan"

    def test_first_accepted_stops_at_first_hit(self) -> None:
        calls: list[str] = []

        def first(text: str) -> str | None:
            calls.append("first")
            return "Winner"

        def second(text: str) -> str | None:
            calls.append("second")
            return "Loser"

        winner = first_accepted((("a", first), ("b", second)), "text")
        assert winner == ("a", "Winner")
        assert calls == ["first"]
