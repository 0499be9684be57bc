"""edgepurge - CDN cache purging for content-managed websites."""

__version__ = "0.1.0"
