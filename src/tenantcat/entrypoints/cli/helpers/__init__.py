"""CLI helpers for TENANTCAT.

Message emitters writing to stderr with emoji/ASCII fallbacks, and the parser
for per-logger level options.
"""

from .messages import error, success, warn

__all__ = ["error", "success", "warn"]
