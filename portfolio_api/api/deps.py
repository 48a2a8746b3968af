import logging

from fastapi import Request

from portfolio_api.core.config import Settings
from portfolio_api.core.errors import ValidationError
from portfolio_api.core.notifications import MailNotifier
from portfolio_api.db.mongo import MongoStore
from portfolio_api.models.contact import ContactRequest

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def get_contact_payload(request: Request) -> ContactRequest:
    """
    Read a contact form body sent either as JSON or as an HTML form post.

    Raises:
        ValidationError: if the body is not a JSON object or a parseable form
    """
    content_type = request.headers.get("Content-Type", "").split(";")[0].strip().lower()

    try:
        if content_type in FORM_CONTENT_TYPES:
            form = await request.form()
            data = {key: value for key, value in form.items() if isinstance(value, str)}
        else:
            data = await request.json()
    except (ValueError, UnicodeDecodeError) as e:
        logger.warning(f"⚠️ Could not parse contact body ({content_type or 'no content type'}): {str(e)}")
        raise ValidationError() from e

    if not isinstance(data, dict):
        raise ValidationError()

    return ContactRequest(**{k: v for k, v in data.items() if k in ContactRequest.model_fields})


def get_store(request: Request) -> MongoStore:
    return request.app.state.store


def get_notifier(request: Request) -> MailNotifier:
    return request.app.state.notifier


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_client_ip(request: Request, trust_proxy_headers: bool = False) -> str:
    """Extract client IP address from request"""
    if trust_proxy_headers:
        # Behind a proxy/load balancer
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip

    if request.client:
        return request.client.host

    return "unknown"
