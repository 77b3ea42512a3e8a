"""Import findings from external lint reports as analysis issues."""

__version__ = "0.1.0"
