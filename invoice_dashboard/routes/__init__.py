"""Flask blueprint package for the invoice dashboard.

Blueprints are defined in the sibling modules (e.g., ``invoice_routes``) and
registered in :mod:`invoice_dashboard`.
"""
