"""classical-tagger: validate classical-music release metadata."""

__version__ = "0.1.0"
