"""Backend package: calculators, constant tables and the HTTP adapter."""
