"""Cross-dataset reconciliation.

This package aggregates long tables by canonical category, inner-joins
two sources and normalizes each joined column into shares of its total.
"""
