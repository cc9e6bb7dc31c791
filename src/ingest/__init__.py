"""Source adapters.

This package reads raw text lines and already-tabular CSV files and
hands them to the extraction and transform stages unchanged.
"""
