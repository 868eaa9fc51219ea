"""Report which local git working copies have outstanding work."""

__version__ = "0.1.0"
