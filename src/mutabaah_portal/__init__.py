"""Mutabaah Portal package.

This package is organized by feature modules (catalog, ledger, reports, ...)
with a thin Flask controller layer and service/repository layers.
"""
