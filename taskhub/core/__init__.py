"""Core configuration and application wiring."""
