"""
In-memory stub of the backend under test, served through FastAPI's TestClient.
"""

from .backend import StubBackend, StubError, create_app
from .store import StubStore

__all__ = ['StubBackend', 'StubError', 'StubStore', 'create_app']
