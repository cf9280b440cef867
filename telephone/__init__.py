"""Translation telephone: text through a chain of machine translations."""

__version__ = "1.0.0"
