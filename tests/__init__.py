"""
Test suite for portfolio-ledger

Contains:
- tests/unit/          : Unit tests for ledger, catalog, persistence, reporting, session
"""
