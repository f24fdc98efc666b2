"""Versioned constant tables for the retirement calculators."""
