"""TextWiki: a minimal plain-text personal wiki."""

__version__ = "0.1.0"
