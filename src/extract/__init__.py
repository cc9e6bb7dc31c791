"""Text extraction stages.

This package turns raw HTML lines into a wide table: list-item
filtering, numeric token extraction and schema-checked row assembly.
"""
