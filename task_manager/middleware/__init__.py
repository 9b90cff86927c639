"""HTTP middleware: timeout, request context (ids + access log), security headers.

Applied in create_app; order matters (last added = outermost).
"""

from task_manager.middleware.request_context import RequestContextMiddleware
from task_manager.middleware.security_headers import SecurityHeadersMiddleware
from task_manager.middleware.timeout import TimeoutMiddleware

__all__ = ["RequestContextMiddleware", "SecurityHeadersMiddleware", "TimeoutMiddleware"]
