"""System metrics over HTTP, BMP280 sensor drivers and piano note tables."""

__version__ = "0.1.0"