"""UI layer for spotideck.

Contains:
- blessed: Full-screen terminal controller
"""

__all__ = []
