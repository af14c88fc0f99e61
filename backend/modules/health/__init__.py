"""
Health monitoring module.

Provides the liveness endpoint with a database connectivity check.
"""

__version__ = "1.0.0"
