"""Configuration — settings, discovery, logging."""
