"""
Health monitoring module.

This module provides:
- Database reachability check
- Admin dashboard counts
"""

__version__ = "1.0.0"
