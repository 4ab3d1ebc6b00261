"""
connectn.interfaces - User interfaces for connect-N

This package contains the terminal interface for playing connect-N.
"""

# Don't import anything here to avoid circular imports
__all__ = []
