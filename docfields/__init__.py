"""Structured field extraction from OCR text.

A deterministic rule engine that normalizes raw OCR output, classifies
the document (invoice, receipt, statement, purchase order) and extracts
confidence-scored fields with ordered fallback rules.
"""
