"""Chartgen: natural language questions turned into chart-ready data."""
