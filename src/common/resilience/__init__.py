"""
Resilience Patterns

Retry with exponential backoff for calls that cross a network boundary.
"""

from src.common.resilience.retry import RetryConfig, retry_with_backoff

__all__ = [
    "retry_with_backoff",
    "RetryConfig",
]
