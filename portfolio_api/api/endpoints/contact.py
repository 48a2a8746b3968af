"""
Contact form endpoints.

POST /contact accepts public submissions; the remaining routes are the admin
views over stored submissions.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, status

from portfolio_api.api.deps import (
    get_app_settings, get_client_ip, get_contact_payload, get_notifier, get_store
)
from portfolio_api.core.config import Settings
from portfolio_api.core.errors import ContactAPIError, DependencyError, NotFoundError
from portfolio_api.core.notifications import MailNotifier
from portfolio_api.core.validation import validate_contact
from portfolio_api.db.mongo import MongoStore
from portfolio_api.models.contact import ContactRequest, ContactSubmission, utc_now_ms

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/contact", status_code=status.HTTP_201_CREATED)
async def submit_contact(
    request: Request,
    payload: ContactRequest = Depends(get_contact_payload),
    store: MongoStore = Depends(get_store),
    notifier: MailNotifier = Depends(get_notifier),
    settings: Settings = Depends(get_app_settings),
) -> Dict[str, Any]:
    """
    Save a contact form submission and notify the site owner.

    The notification is best-effort: the submission counts as saved even
    when the mail relay fails, and ``emailSent`` reports what happened.

    Returns:
        dict: Public fields of the saved submission (message omitted)
    """
    fields = validate_contact(payload)

    submission = ContactSubmission(
        **fields,
        createdAt=utc_now_ms(),
        ipAddress=get_client_ip(request, settings.trust_proxy_headers),
        userAgent=request.headers.get("User-Agent"),
    )

    try:
        saved = await store.create_contact(submission)
    except ContactAPIError:
        raise
    except Exception as e:
        raise DependencyError(reason=f"Error saving contact: {str(e)}") from e

    result = await notifier.notify(saved)
    if not result.sent:
        logger.warning(f"⚠️ Contact {saved.id} saved but notification failed: {result.error}")

    return {
        "success": True,
        "message": "Message sent successfully!",
        "data": saved.summary().model_dump(),
        "emailSent": result.sent,
    }


@router.get("/contacts", status_code=status.HTTP_200_OK)
async def list_contacts(store: MongoStore = Depends(get_store)) -> Dict[str, Any]:
    """List every stored submission, most recent first."""
    try:
        contacts = await store.list_contacts()
    except Exception as e:
        raise DependencyError("Error fetching contacts", reason=f"Error fetching contacts: {str(e)}") from e

    return {
        "success": True,
        "count": len(contacts),
        "data": [contact.model_dump() for contact in contacts],
    }


@router.get("/contact/{contact_id}", status_code=status.HTTP_200_OK)
async def get_contact(contact_id: str, store: MongoStore = Depends(get_store)) -> Dict[str, Any]:
    try:
        contact = await store.get_contact(contact_id)
    except Exception as e:
        raise DependencyError("Error fetching contact", reason=f"Error fetching contact {contact_id}: {str(e)}") from e

    if contact is None:
        raise NotFoundError("Contact not found")

    return {
        "success": True,
        "data": contact.model_dump(),
    }


@router.delete("/contact/{contact_id}", status_code=status.HTTP_200_OK)
async def delete_contact(contact_id: str, store: MongoStore = Depends(get_store)) -> Dict[str, Any]:
    try:
        deleted = await store.delete_contact(contact_id)
    except Exception as e:
        raise DependencyError("Error deleting contact", reason=f"Error deleting contact {contact_id}: {str(e)}") from e

    if not deleted:
        raise NotFoundError("Contact not found")

    return {
        "success": True,
        "message": "Contact deleted successfully",
    }
