"""taskhub: authorization-gated task tracking service."""

__version__ = "1.0.0"
