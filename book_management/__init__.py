"""
Book management service: authors, books and the relation between them.
"""

__version__ = "1.0.0"
