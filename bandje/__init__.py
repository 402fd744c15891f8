"""bandje - random festival performances from a read-only lineup dataset."""

__version__ = "0.1.0"
