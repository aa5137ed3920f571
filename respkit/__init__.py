"""HTTP response objects that write status, headers, cookies and body to a response writer."""

__version__ = "0.1.0"