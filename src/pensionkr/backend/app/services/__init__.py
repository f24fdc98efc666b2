"""Calculation services and the operation registry."""
