"""Configuration: settings, constants, schema and prompts."""
