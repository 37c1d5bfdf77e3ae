"""Transform repository metadata into CSL-JSON for citation rendering."""

__version__ = "0.1.0"
