"""
Common Utilities

Shared building blocks used by the services: resilient retries and
log sanitization.
"""

from src.common import logging, resilience  # noqa: F401
