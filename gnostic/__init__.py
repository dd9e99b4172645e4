"""Read JSON Schemas for API formats and generate Protocol Buffer models from them."""

__version__ = "0.1.0"