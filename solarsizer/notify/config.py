from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from dotenv import load_dotenv

RESEND_API_URL = "https://api.resend.com/emails"


@dataclass(frozen=True)
class NotifySettings:
    """
    Email relay settings.

    Attributes:
        api_key: Resend API key (None when not configured)
        recipients: Addresses that receive contact notifications
        sender: From header
        api_url: Transactional email endpoint
        timeout_s: HTTP timeout for the email API
    """
    api_key: Optional[str]
    recipients: Tuple[str, ...] = field(default_factory=tuple)
    sender: str = "Solar Sizer <onboarding@resend.dev>"
    api_url: str = RESEND_API_URL
    timeout_s: float = 10.0

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "NotifySettings":
        if dotenv:
            load_dotenv()
        recipients = tuple(
            addr.strip() for addr in os.getenv("NOTIFY_TO", "").split(",") if addr.strip()
        )
        return cls(
            api_key=os.getenv("RESEND_API_KEY") or None,
            recipients=recipients,
            sender=os.getenv("NOTIFY_FROM", cls.sender),
            api_url=os.getenv("RESEND_API_URL", RESEND_API_URL),
            timeout_s=float(os.getenv("NOTIFY_TIMEOUT_S", "10")),
        )
