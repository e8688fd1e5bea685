"""Map compositing service: geospatial API proxy + annotated static map renderer."""

__version__ = "0.1.0"
