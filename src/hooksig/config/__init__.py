"""Configuration — TOML models, settings sources, discovery, logging."""
