"""
Security utilities and authentication
"""

import time
from typing import Dict, List, Optional

from fastapi import HTTPException, Depends, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from guestmanager.core.config import settings

security = HTTPBearer()

class RateLimiter:
    """Sliding one-minute window per client key, kept in process memory"""

    def __init__(self):
        self.requests: Dict[str, List[float]] = {}

    def check(self, key: str, limit: Optional[int] = None) -> bool:
        if limit is None:
            limit = settings.RATE_LIMIT_PER_MINUTE

        now = time.time()
        cutoff = now - 60
        self.prune(cutoff)

        window = [t for t in self.requests.get(key, []) if t > cutoff]
        if len(window) >= limit:
            self.requests[key] = window
            return False

        window.append(now)
        self.requests[key] = window
        return True

    def prune(self, cutoff: float):
        """Drop clients with no requests after cutoff"""
        idle = [key for key, window in self.requests.items() if not window or window[-1] <= cutoff]
        for key in idle:
            del self.requests[key]

    def reset(self):
        self.requests.clear()

rate_limiter = RateLimiter()

def verify_admin_token(credentials: HTTPAuthorizationCredentials = Depends(security)):
    """Verify admin authentication token"""
    if credentials.credentials != settings.ADMIN_TOKEN:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin token"
        )
    return credentials.credentials

def get_client_ip(request: Request) -> str:
    """Extract client IP, preferring proxy headers"""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    return request.client.host if request.client else "unknown"

def rate_limit_check(request: Request, limit: Optional[int] = None) -> bool:
    return rate_limiter.check(get_client_ip(request), limit)
