"""Process-level services: telemetry and editor settings."""
