"""exportcov - documentation coverage for exported TypeScript/JavaScript symbols."""

__version__ = "0.1.0"
