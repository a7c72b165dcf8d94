"""Serial URL shortener microservice."""

__version__ = "1.0.0"
