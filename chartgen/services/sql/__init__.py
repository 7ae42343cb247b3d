"""Query planning, validation and execution."""
