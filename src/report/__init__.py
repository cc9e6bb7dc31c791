"""Disparity report assembly.

This package chains the extraction, transform and reconcile stages into
one explicit run and exposes the resulting tables as pandas frames.
"""
