"""
Base API client abstract class for testing.

Provides consistent interface regardless of whether tests run in-memory or over HTTP.
"""
from abc import ABC, abstractmethod


class APITestClient(ABC):
    """Abstract base class for API testing clients.

    Endpoint facades depend on this interface only, so the same facade works
    against the in-memory stub and the remote backend.
    """

    @abstractmethod
    def get(self, path, params=None):
        """Make GET request to API endpoint."""
        pass

    @abstractmethod
    def post(self, path, data=None, headers=None):
        """Make POST request to API endpoint."""
        pass

    @abstractmethod
    def put(self, path, data=None):
        """Make PUT request to API endpoint."""
        pass

    @abstractmethod
    def delete(self, path):
        """Make DELETE request to API endpoint."""
        pass
