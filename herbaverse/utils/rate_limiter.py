from slowapi import Limiter
from slowapi.util import get_remote_address

from herbaverse.config import RATE_LIMIT_ENABLED

# Per-client limit on the public AI endpoints (see RATE_LIMIT)
limiter = Limiter(key_func=get_remote_address, enabled=RATE_LIMIT_ENABLED)
