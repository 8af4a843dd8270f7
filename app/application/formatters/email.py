"""Render notification emails (personal and organization-branded)."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final

from app.domain.entities import (
    Notification,
    NotificationCategory,
    NotificationType,
    OrganizationInfo,
)

from .common import (
    BOOKING_TYPES,
    PAYMENT_TYPES,
    SPORT_COLORS,
    Branding,
    call_to_action_for,
    escape_html,
    format_currency,
    format_when,
    match_when,
    payload_int,
    payload_text,
    sport_tag,
)

ORGANIZATION_ACCENT_COLORS: Final[dict[str, str]] = {
    "booking": "#4DB8A8",
    "member": "#2196F3",
    "payment": "#4CAF50",
    "system": "#607D8B",
}
_WARNING_COLOR: Final[str] = "#F44336"


@dataclass(frozen=True)
class EmailContent:
    """Subject and HTML body ready to hand to the email transport."""

    subject: str
    html: str


@dataclass(frozen=True)
class DetailRow:
    label: str
    value: str
    color: str | None = None


def organization_email_category(notification_type: NotificationType) -> str:
    """Return the styling category used for organization-branded mail."""

    value = notification_type.value
    if value.startswith("booking_"):
        return "booking"
    if "member" in value:
        return "member"
    if "payment" in value or notification_type is NotificationType.REFUND_PROCESSED:
        return "payment"
    return "system"


def email_subject(
    notification: Notification, organization: OrganizationInfo | None = None
) -> str:
    if organization is not None:
        return f"[{organization.name}] {notification.title}"
    sport = sport_tag(notification)
    if sport and notification.category is NotificationCategory.MATCH:
        return f"[{sport}] {notification.title}"
    return notification.title


def _booking_rows(notification: Notification) -> list[DetailRow]:
    payload = notification.payload
    court = payload_text(payload, "courtName")
    date = payload_text(payload, "bookingDate")
    if not court and not date:
        return []

    rows: list[DetailRow] = []
    if court:
        rows.append(DetailRow("Court", court))
    facility = payload_text(payload, "facilityName")
    if facility:
        rows.append(DetailRow("Location", facility))
    when = format_when(date, payload_text(payload, "startTime"), payload_text(payload, "endTime"))
    if date and when:
        rows.append(DetailRow("When", when))
    player = payload_text(payload, "playerName")
    if player:
        rows.append(DetailRow("Player", player))
    price = payload_int(payload, "priceCents")
    if price is not None:
        rows.append(DetailRow("Amount", format_currency(price, payload_text(payload, "currency"))))
    return rows


def _payment_rows(notification: Notification) -> list[DetailRow]:
    payload = notification.payload
    amount = payload_int(payload, "amountCents")
    if amount is None:
        return []

    rows = [DetailRow("Amount", format_currency(amount, payload_text(payload, "currency")))]
    player = payload_text(payload, "playerName")
    if player:
        rows.append(DetailRow("From", player))
    reason = payload_text(payload, "failureReason")
    if reason:
        rows.append(DetailRow("Reason", reason, color=_WARNING_COLOR))
    return rows


def _match_rows(notification: Notification) -> list[DetailRow]:
    payload = notification.payload
    rows: list[DetailRow] = []
    sport = sport_tag(notification)
    if sport:
        rows.append(DetailRow("Sport", sport.title()))
    when = match_when(notification)
    if when:
        rows.append(DetailRow("When", when))
    location = payload_text(payload, "locationName")
    if location:
        rows.append(DetailRow("Location", location))
    player = payload_text(payload, "playerName")
    if player:
        rows.append(DetailRow("With", player))
    return rows


def detail_rows(notification: Notification) -> list[DetailRow]:
    """Return the key/value facts shown in the email details card."""

    if notification.type in BOOKING_TYPES:
        return _booking_rows(notification)
    if notification.type in PAYMENT_TYPES:
        return _payment_rows(notification)
    if notification.category is NotificationCategory.MATCH:
        return _match_rows(notification)
    return []


def _details_card(rows: Sequence[DetailRow], accent_color: str) -> str:
    if not rows:
        return ""
    rendered_rows = "".join(
        (
            "<tr>"
            '<td style="padding: 8px 0; color: #666666; font-size: 14px; width: 120px;">'
            f"{escape_html(row.label)}</td>"
            f'<td style="padding: 8px 0; color: {row.color or "#333333"}; font-size: 14px; '
            f'font-weight: 500;">{escape_html(row.value)}</td>'
            "</tr>"
        )
        for row in rows
    )
    return (
        '<table role="presentation" width="100%" cellspacing="0" cellpadding="0" '
        f'style="background-color: {accent_color}15; border-radius: 8px; margin: 24px 0; '
        f'border-left: 4px solid {accent_color};">'
        '<tr><td style="padding: 20px;">'
        f'<table role="presentation" width="100%" cellspacing="0" cellpadding="0">{rendered_rows}</table>'
        "</td></tr></table>"
    )


def _action_button(label: str, href: str, accent_color: str) -> str:
    return (
        '<table role="presentation" cellspacing="0" cellpadding="0" style="margin-top: 24px;">'
        f'<tr><td style="border-radius: 8px; background-color: {accent_color};">'
        f'<a href="{escape_html(href)}" style="display: inline-block; padding: 14px 32px; '
        'color: #ffffff; font-size: 16px; font-weight: 600; text-decoration: none; border-radius: 8px;">'
        f"{escape_html(label)}</a>"
        "</td></tr></table>"
    )


def _document(*, title: str, heading: str, accent_color: str, content: str, footer: str) -> str:
    return "".join(
        (
            "<!DOCTYPE html>",
            "<html><head>",
            '<meta charset="utf-8">',
            '<meta name="viewport" content="width=device-width, initial-scale=1.0">',
            f"<title>{escape_html(title)}</title>",
            "</head>",
            '<body style="margin: 0; padding: 0; background-color: #f5f5f5; '
            "font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Arial, sans-serif;\">",
            '<table role="presentation" width="100%" cellspacing="0" cellpadding="0">',
            '<tr><td align="center" style="padding: 40px 20px;">',
            '<table role="presentation" width="600" cellspacing="0" cellpadding="0" '
            'style="background-color: #ffffff; border-radius: 12px; overflow: hidden;">',
            f'<tr><td style="background-color: {accent_color}; padding: 24px 40px;">',
            '<h1 style="margin: 0; color: #ffffff; font-size: 24px; font-weight: 600;">',
            f"{escape_html(heading)}</h1>",
            "</td></tr>",
            f'<tr><td style="padding: 40px;">{content}</td></tr>',
            '<tr><td style="padding: 24px 40px; background-color: #f5f5f5; border-top: 1px solid #e5e5e5;">',
            footer,
            "</td></tr>",
            "</table>",
            "</td></tr></table>",
            "</body></html>",
        )
    )


def _content_block(notification: Notification, rows: Sequence[DetailRow], accent_color: str, href: str) -> str:
    parts = [
        '<h2 style="margin: 0 0 16px 0; color: #333333; font-size: 22px; font-weight: 600;">'
        f"{escape_html(notification.title)}</h2>"
    ]
    if notification.body:
        parts.append(
            '<p style="margin: 0 0 16px 0; color: #333333; font-size: 16px; line-height: 1.6;">'
            f"{escape_html(notification.body)}</p>"
        )
    parts.append(_details_card(rows, accent_color))
    cta = call_to_action_for(notification.type)
    parts.append(_action_button(cta.label, href, accent_color))
    return "".join(parts)


def render_email(notification: Notification, branding: Branding | None = None) -> EmailContent:
    """Render the personal (non organization-branded) email for ``notification``."""

    branding = branding or Branding()
    sport = sport_tag(notification)
    accent_color = SPORT_COLORS.get(sport or "", branding.accent_color)
    href = call_to_action_for(notification.type).resolve(branding, notification.target_id)

    footer = (
        '<p style="margin: 0; color: #666666; font-size: 12px; text-align: center;">'
        f"You received this email because of your {escape_html(branding.app_name)} "
        "notification settings.<br>"
        f'<a href="{escape_html(branding.preferences_link)}" style="color: {accent_color}; '
        'text-decoration: none;">Unsubscribe or manage notification preferences</a>'
        "</p>"
    )
    html = _document(
        title=notification.title,
        heading=branding.app_name,
        accent_color=accent_color,
        content=_content_block(notification, detail_rows(notification), accent_color, href),
        footer=footer,
    )
    return EmailContent(subject=email_subject(notification), html=html)


def render_organization_email(
    notification: Notification,
    organization: OrganizationInfo,
    branding: Branding | None = None,
) -> EmailContent:
    """Render an email branded with ``organization``'s name and category colour."""

    branding = branding or Branding()
    category = organization_email_category(notification.type)
    accent_color = ORGANIZATION_ACCENT_COLORS[category]
    rows = detail_rows(notification) if category in ("booking", "payment") else []
    href = call_to_action_for(notification.type).resolve(branding, notification.target_id)

    website = ""
    if organization.website:
        website = (
            f'<br><a href="{escape_html(organization.website)}" style="color: {accent_color}; '
            f'text-decoration: none;">{escape_html(organization.website)}</a>'
        )
    footer = (
        '<p style="margin: 0; color: #666666; font-size: 12px; text-align: center;">'
        f"You received this email because you are a member of {escape_html(organization.name)}.<br>"
        f'<a href="{escape_html(branding.organization_preferences_link)}" '
        f'style="color: {accent_color}; text-decoration: none;">Manage notification preferences</a>'
        f"{website}</p>"
        '<p style="margin: 16px 0 0 0; color: #999999; font-size: 11px; text-align: center;">'
        f"Powered by {escape_html(branding.app_name)}</p>"
    )
    html = _document(
        title=notification.title,
        heading=organization.name,
        accent_color=accent_color,
        content=_content_block(notification, rows, accent_color, href),
        footer=footer,
    )
    return EmailContent(subject=email_subject(notification, organization), html=html)


__all__ = [
    "DetailRow",
    "EmailContent",
    "ORGANIZATION_ACCENT_COLORS",
    "detail_rows",
    "email_subject",
    "organization_email_category",
    "render_email",
    "render_organization_email",
]
