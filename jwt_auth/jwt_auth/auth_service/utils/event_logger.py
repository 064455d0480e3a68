"""
Event logger utility for authentication events.
"""
from datetime import datetime, timezone
from fastapi import Request
from typing import Optional
import sys
import logging
import os

from ..config import settings

# Configure file and stdout logging
log_dir = settings.LOG_DIR

# Create handlers list
handlers = [logging.StreamHandler(sys.stdout)]

# Try to add file handler, but continue without it if directory creation fails
try:
    os.makedirs(log_dir, exist_ok=True)
    handlers.append(logging.FileHandler(f"{log_dir}/auth_events.log"))
except (OSError, PermissionError) as e:
    # Log to stderr if file logging setup fails
    print(f"WARNING: Could not set up file logging: {e}", file=sys.stderr)

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s:%(name)s:%(message)s",
    handlers=handlers
)

logger = logging.getLogger(__name__)


ALLOWED_EVENT_TYPES = {
    "signup_success",
    "signup_duplicate",
    "login_success",
    "login_failure",
}


def client_ip(request: Request) -> Optional[str]:
    """Best-effort client address, falling back to X-Forwarded-For."""
    ip_address = None
    if request.client:
        ip_address = request.client.host

    # Check for X-Forwarded-For header (proxy/load balancer scenarios)
    if not ip_address and request.headers.get("x-forwarded-for"):
        # X-Forwarded-For can contain multiple IPs, take the first one
        ip_address = request.headers.get("x-forwarded-for").split(",")[0].strip()
    return ip_address


def log_auth_event(
    event_type: str,
    request: Request,
    email: Optional[str] = None,
    user_id: Optional[int] = None,
) -> None:
    """
    Write one line describing an authentication event.

    Args:
        event_type: One of: signup_success, signup_duplicate,
                    login_success, login_failure
        request: FastAPI Request object
        email: Email the caller presented, if any
        user_id: Resolved user id, if any

    Raises:
        ValueError: If event_type is invalid
    """
    # Validate event type
    if event_type not in ALLOWED_EVENT_TYPES:
        raise ValueError(
            f"Invalid event_type '{event_type}'. Must be one of: {', '.join(sorted(ALLOWED_EVENT_TYPES))}"
        )

    level = logging.WARNING if event_type == "login_failure" else logging.INFO
    logger.log(
        level,
        "AUTH %s user_id=%s email=%s ip=%s user_agent=%s timestamp=%s",
        event_type,
        user_id,
        email,
        client_ip(request),
        request.headers.get("user-agent"),
        datetime.now(timezone.utc).isoformat(),
    )
