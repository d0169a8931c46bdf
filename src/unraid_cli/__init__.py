"""CLI client for the Unraid API"""

__version__ = "0.1.0"
