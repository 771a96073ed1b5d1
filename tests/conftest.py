"""Shared test fixtures for the field extraction test suite."""

from pathlib import Path

import pytest


@pytest.fixture
def invoice_text() -> str:
    """Table-style invoice text as it comes out of normalization."""
    return "Invoice NV-1007 Date 2024-03-31 TotalAmount 1875.50 VendorName ABC.LTD"


@pytest.fixture
def receipt_text() -> str:
    """Raw receipt OCR output with ragged whitespace."""
    return (
        "Corner Cafe\r\n"
        "Receipt #: A1234\r\n"
        "Subtotal: $10.00\r\n"
        "Tax: $0.80\r\n"
        "Total: $10.80\r\n"
        "Paid by Visa card\r\n"
    )


@pytest.fixture
def statement_text() -> str:
    return (
        "First Bank\n"
        "Account Summary\n"
        "Account Number: 1234-5678\n"
        "Statement Period: 01/01/2024 - 01/31/2024"
    )


@pytest.fixture
def purchase_order_text() -> str:
    return "Purchase Order\nPO Number: PO-4521\nDelivery Date: 2024-07-15"


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent
