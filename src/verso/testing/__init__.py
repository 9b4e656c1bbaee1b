"""Test utilities for verso sites::

    from verso.testing import TestClient
"""

from verso.testing.client import TestClient

__all__ = ["TestClient"]
