"""Turn recordings and transcripts into cleaned text and marketing assets."""

__version__ = "0.1.0"
