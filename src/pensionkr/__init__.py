"""Korean retirement planning calculators."""
