"""
Fintech API contract testing: client, assertion helpers, endpoint facades
and an in-memory stub of the backend.
"""

from invoke import Collection

from . import tasks

__version__ = '0.1.0'

# Task namespace, re-exported by the repository's tasks.py for `inv`
namespace = Collection.from_module(tasks)
