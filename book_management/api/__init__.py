"""
HTTP boundary.
"""
