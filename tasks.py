"""Invoke entry point: `inv test unit`, `inv test api`, `inv test all`."""
from fintech_contract import namespace  # noqa: F401
