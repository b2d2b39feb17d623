"""
Contact Notification Mailer
===========================

Renders a contact submission (and its optional sizing snapshot) to HTML and
relays it through the Resend transactional email API.

All user-supplied text goes through jinja2 autoescaping.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional

import requests
from jinja2 import Environment, select_autoescape

from .config import NotifySettings
from .schemas import ContactRequest

logger = logging.getLogger(__name__)


class NotificationError(RuntimeError):
    """Notification could not be delivered."""
    status_code = 500


class MissingCredentialsError(NotificationError):
    status_code = 500


class DeliveryError(NotificationError):
    status_code = 502


_env = Environment(autoescape=select_autoescape(default_for_string=True, default=True))

EMAIL_TEMPLATE = _env.from_string(
    """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"></head>
<body style="font-family: -apple-system, 'Segoe UI', Roboto, Arial, sans-serif; color: #1f2937; max-width: 700px; margin: 0 auto; padding: 20px;">
  <div style="background: #ff7900; padding: 24px; border-radius: 8px 8px 0 0; text-align: center;">
    <h1 style="color: white; margin: 0; font-size: 22px;">New Contact Form Submission</h1>
  </div>
  <div style="padding: 24px; border: 1px solid #e5e7eb; border-top: none;">
    <h2 style="font-size: 18px;">Contact Details</h2>
    <table style="width: 100%;">
      <tr><td style="color: #6b7280; width: 140px;">Name:</td><td><strong>{{ req.name }}</strong></td></tr>
      <tr><td style="color: #6b7280;">Email:</td><td>{{ req.email or "Not provided" }}</td></tr>
      <tr><td style="color: #6b7280;">Phone:</td><td>{{ req.phone or "Not provided" }}</td></tr>
      <tr><td style="color: #6b7280;">Location:</td><td>{{ req.location or "Not provided" }}</td></tr>
      <tr><td style="color: #6b7280;">Contact Method:</td><td>{{ "WhatsApp" if req.contact_method == "whatsapp" else "Email" }}</td></tr>
    </table>
    <h3 style="font-size: 14px;">Message:</h3>
    <p style="white-space: pre-wrap;">{{ req.message }}</p>
  </div>

  {% set s = req.inverter_sizing %}
  {% if s %}
  <div style="background-color: #f9fafb; padding: 24px; border-radius: 8px; margin-top: 24px;">
    <h2 style="color: #ff7900; font-size: 20px;">Inverter Load Report</h2>
    <p style="color: #6b7280; font-size: 13px;">Generated for {{ req.name }} on {{ generated_at.strftime("%B %d, %Y") }}</p>
    <table style="width: 100%;">
      <tr><td>Total Load</td><td><strong>{{ fmt(s.total_load) }}W</strong></td></tr>
      <tr><td>Peak Surge</td><td>{{ fmt(s.calculations.peak_surge or 0) }}W</td></tr>
      <tr><td>Required kVA</td><td>{{ fmt(s.calculations.required_kva or 0) }}</td></tr>
      <tr><td>Recommended kVA</td><td><strong>{{ fmt(s.recommended_inverter or 0) }}</strong></td></tr>
    </table>
    {% if s.appliances %}
    <h3 style="font-size: 16px;">Selected Appliances</h3>
    <table style="width: 100%; border-collapse: collapse; background-color: #fff;">
      <tr style="background-color: #f3f4f6;"><th align="left">Appliance</th><th>Wattage</th><th>Qty</th><th align="right">Subtotal</th></tr>
      {% for a in s.appliances %}<tr><td>{{ a.name }}</td><td align="center">{{ fmt(a.wattage) }}W</td><td align="center">{{ a.quantity }}</td><td align="right">{{ fmt(a.subtotal) }}W</td></tr>
      {% endfor %}
      <tr><td colspan="3"><strong>Total</strong></td><td align="right"><strong>{{ fmt(s.total_load) }}W</strong></td></tr>
    </table>
    {% else %}
    <p style="color: #6b7280;">No appliances selected</p>
    {% endif %}
    {% if s.calculations.warnings %}<h4>Warnings</h4><ul>{% for w in s.calculations.warnings %}<li>{{ w }}</li>{% endfor %}</ul>{% endif %}
    {% if s.calculations.recommendations %}<h4>Recommendations</h4><ul>{% for r in s.calculations.recommendations %}<li>{{ r }}</li>{% endfor %}</ul>{% endif %}
    <p style="color: #9ca3af; font-size: 11px;">This report is for estimation purposes only. Please consult a qualified electrician for final installation.</p>
  </div>
  {% else %}
  <div style="background-color: #fef3c7; padding: 20px; border-radius: 8px; margin-top: 20px; text-align: center;">
    <p style="color: #92400e; margin: 0;">No inverter sizing data available for this submission.</p>
  </div>
  {% endif %}
</body>
</html>
"""
)


def _fmt(value: float) -> str:
    return f"{float(value):g}"


def render_email(req: ContactRequest, generated_at: Optional[datetime] = None) -> str:
    return EMAIL_TEMPLATE.render(req=req, fmt=_fmt, generated_at=generated_at or datetime.now())


def email_subject(req: ContactRequest) -> str:
    kva = req.inverter_sizing.recommended_inverter if req.inverter_sizing else None
    return f"New Contact: {req.name} - {_fmt(kva) if kva else 'N/A'} kVA Inquiry"


def send_contact_notification(
    req: ContactRequest,
    settings: NotifySettings,
    session: Optional[requests.Session] = None,
) -> Dict[str, Any]:
    """
    Email the rendered submission. Returns the email API's JSON response.

    Raises:
        MissingCredentialsError: API key or recipients not configured
        DeliveryError: network failure or the email API rejected the message
    """
    if not settings.api_key:
        raise MissingCredentialsError("RESEND_API_KEY is not configured")
    if not settings.recipients:
        raise MissingCredentialsError("NOTIFY_TO is not configured")

    payload = {
        "from": settings.sender,
        "to": list(settings.recipients),
        "subject": email_subject(req),
        "html": render_email(req),
    }
    http = session or requests
    try:
        resp = http.post(
            settings.api_url,
            json=payload,
            headers={"Authorization": f"Bearer {settings.api_key}"},
            timeout=settings.timeout_s,
        )
    except requests.RequestException as e:
        raise DeliveryError(f"Email API unreachable: {e}") from e

    try:
        body = resp.json()
    except ValueError:
        body = {"message": resp.text}
    if not isinstance(body, dict):
        body = {"message": str(body)}

    if not resp.ok:
        raise DeliveryError(body.get("message") or f"Email API returned HTTP {resp.status_code}")

    logger.info("Contact notification sent for %s (id=%s)", req.name, body.get("id"))
    return body
