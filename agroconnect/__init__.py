"""AgroConnect: agricultural marketplace API for farmers and buyers."""

__version__ = "1.0.0"
