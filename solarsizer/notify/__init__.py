"""
Contact notification service (email relay for contact submissions).
"""

from .app import create_app
from .config import NotifySettings
from .mailer import DeliveryError, MissingCredentialsError, NotificationError, send_contact_notification

__all__ = [
    "create_app",
    "NotifySettings",
    "NotificationError",
    "MissingCredentialsError",
    "DeliveryError",
    "send_contact_notification",
]
