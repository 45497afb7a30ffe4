"""miniship: MiniApp release and versioning toolkit."""

__version__ = "0.3.0"
