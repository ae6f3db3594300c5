"""HTTP front end for the people search index."""

__version__ = "0.1.0"
