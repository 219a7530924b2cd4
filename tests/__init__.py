# StockPulse Tests Package

"""
Test suite for the StockPulse inventory core.

This package contains:
- Unit tests for the signal, reorder, alert and summary engines
- Unit tests for the product store, analytics views and report builder
- Integration tests for the inventory context and the CLI

Run tests:
    pytest
"""
