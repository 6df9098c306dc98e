"""Infrastructure layer: persistence and outbound services."""
