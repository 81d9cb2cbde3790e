"""
Domain value types.
"""

from src.fixedpoint.domain.fixed import Fixed

__all__ = ["Fixed"]
