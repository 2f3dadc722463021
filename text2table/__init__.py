"""Convert loosely delimited plain-text tables into CSV, Markdown, HTML, SQL or JSON."""

__version__ = "0.1.0"
