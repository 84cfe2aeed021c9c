"""clir - a command line cleaning utility driven by glob patterns."""

__version__ = "0.3.0"
