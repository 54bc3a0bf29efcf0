"""Server scaffold generator for OpenAPI specifications."""

__version__ = "0.1.0"
