"""Book Availability - find nearby libraries that can lend a book right now."""

__version__ = "0.1.0"
