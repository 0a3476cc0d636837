"""HerbaVerse medicinal plant recommendation and quiz service."""

__version__ = "1.0.0"
