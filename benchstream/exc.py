"""Benchstream exceptions"""


class BenchstreamError(Exception):
    pass


class ConfigurationError(BenchstreamError):
    """Raised for invalid settings or arguments, before anything is spawned"""
    pass


class ClockError(BenchstreamError):
    """Raised when a monotonic clock is not available. Timings cannot be
    trusted without one, so this is always fatal."""
    pass
