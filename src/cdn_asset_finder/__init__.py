"""Find JavaScript assets referenced from CDN script tags across a GitHub org."""

__version__ = "0.1.0"
