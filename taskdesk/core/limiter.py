"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

LOGIN_LIMIT = "10/minute"
REGISTER_LIMIT = "5/minute"
WRITE_ENDPOINT_LIMIT = "120/minute"
REPORT_LIMIT = "20/minute"

limit_auth = limiter.limit(LOGIN_LIMIT)
limit_register = limiter.limit(REGISTER_LIMIT)
limit_writes = limiter.limit(WRITE_ENDPOINT_LIMIT)
limit_reports = limiter.limit(REPORT_LIMIT)
