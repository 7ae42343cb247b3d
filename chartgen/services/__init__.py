"""Domain services used by the chart pipeline."""
