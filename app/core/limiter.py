from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import settings

# Shared limiter; applied per-route on the payslip generation endpoints
limiter = Limiter(key_func=get_remote_address)

GENERATION_LIMIT = f"{settings.rate_limit_per_minute}/minute"
