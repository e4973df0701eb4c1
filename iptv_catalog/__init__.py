"""IPTV source fetching, caching and channel catalog parsing."""

__version__ = "0.1.0"
