"""HTTP middleware: timeout, request ID, user context, security headers.

Applied in create_app; order matters (last added = outermost).
"""

from taskdesk.middleware.request_id import RequestIDMiddleware
from taskdesk.middleware.security_headers import SecurityHeadersMiddleware
from taskdesk.middleware.timeout import TimeoutMiddleware
from taskdesk.middleware.user_context import UserContextMiddleware

__all__ = [
    "RequestIDMiddleware",
    "SecurityHeadersMiddleware",
    "TimeoutMiddleware",
    "UserContextMiddleware",
]
