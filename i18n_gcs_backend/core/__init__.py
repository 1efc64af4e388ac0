"""Core configuration: option models, environment overrides and constants."""
