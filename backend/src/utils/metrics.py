"""Metrics utilities."""

import asyncio
import functools
import time
from typing import Any, Dict, Optional

from prometheus_client import Counter, Histogram

# Mutation metrics
TAG_MUTATIONS = Counter(
    "tagadmin_mutations_total",
    "Number of bulk tag mutations processed",
    ["action"]
)

TERMS_AFFECTED = Counter(
    "tagadmin_terms_affected_total",
    "Number of terms deleted or merged",
    ["action"]
)

# Authentication metrics
AUTH_FAILURES = Counter(
    "tagadmin_auth_failures_total",
    "Number of requests rejected by digest verification",
    ["endpoint"]
)

# Store metrics
STORE_OPERATION_DURATION = Histogram(
    "tagadmin_store_operation_duration_seconds",
    "Time spent in vocabulary store operations",
    ["operation"],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0]
)

STORE_OPERATION_FAILURES = Counter(
    "tagadmin_store_operation_failures_total",
    "Number of failed vocabulary store operations",
    ["operation", "error"]
)


def track_mutation(action: str, affected: int):
    """Track a completed mutation.

    Args:
        action: Mutation action name
        affected: Number of terms affected
    """
    TAG_MUTATIONS.labels(action=action).inc()
    TERMS_AFFECTED.labels(action=action).inc(affected)


def track_auth_failure(endpoint: str):
    """Track a rejected request."""
    AUTH_FAILURES.labels(endpoint=endpoint).inc()


def observe_histogram(histogram: Histogram, value: float, labels: Optional[Dict[str, str]] = None):
    """Record a value in a histogram metric.

    Args:
        histogram: The histogram metric to update
        value: The value to record
        labels: Optional dictionary of label values
    """
    if labels:
        histogram.labels(**labels).observe(value)
    else:
        histogram.observe(value)


def track_time(histogram: Histogram, labels: Optional[Dict[str, str]] = None):
    """Decorator to track execution time of a function.

    Failures are observed in the histogram too and counted in
    STORE_OPERATION_FAILURES under the same operation label.

    Args:
        histogram: The histogram metric to update
        labels: Optional dictionary of label values
    """
    operation = (labels or {}).get("operation", "unknown")

    def decorator(func):
        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                STORE_OPERATION_FAILURES.labels(operation=operation, error=type(e).__name__).inc()
                raise
            finally:
                observe_histogram(histogram, time.perf_counter() - start, labels)

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                return func(*args, **kwargs)
            except Exception as e:
                STORE_OPERATION_FAILURES.labels(operation=operation, error=type(e).__name__).inc()
                raise
            finally:
                observe_histogram(histogram, time.perf_counter() - start, labels)

        return async_wrapper if asyncio.iscoroutinefunction(func) else sync_wrapper
    return decorator


def get_mutation_metrics() -> Dict[str, Any]:
    """Get current mutation metrics.

    Returns:
        Dictionary of mutation metrics keyed by action
    """
    return {
        action: {
            "mutations": TAG_MUTATIONS.labels(action=action)._value.get(),
            "terms": TERMS_AFFECTED.labels(action=action)._value.get()
        }
        for action in ("delete", "rename")
    }
