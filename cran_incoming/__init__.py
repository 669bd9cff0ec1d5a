"""CRAN incoming tracker: cached snapshots of the CRAN incoming FTP tree."""

__version__ = "1.0.0"
