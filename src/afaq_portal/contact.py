"""Contact (demo request) form submission."""

import logging
from typing import Any

from pydantic import ValidationError

from .context import AppContext
from .errors import PortalError
from .models import ContactInquiry

logger = logging.getLogger(__name__)


def validation_messages(ctx: AppContext, error: ValidationError) -> dict[str, str]:
    """Map form validation errors to localized messages per wire field."""
    messages = {}
    for item in error.errors():
        field_name = str(item["loc"][0]) if item["loc"] else ""
        if field_name == "email" and item["type"] != "missing":
            messages[field_name] = ctx.t("form.email.invalid")
        else:
            messages[field_name] = ctx.t("form.required")
    return messages


async def submit_contact(ctx: AppContext, **fields: Any) -> tuple[bool, dict[str, str]]:
    """Validate and submit a contact inquiry.

    Args:
        ctx: Application context
        **fields: Form fields, by wire name (schoolName) or by attribute
            name (school_name)

    Returns:
        (sent, field errors). Submission failures are reported through a
        toast and leave the field errors empty.
    """
    try:
        inquiry = ContactInquiry.model_validate(fields)
    except ValidationError as e:
        return False, validation_messages(ctx, e)

    try:
        await ctx.cache.mutate(lambda: ctx.client.submit_contact(inquiry))
    except PortalError as e:
        logger.warning("Contact form error: %s", e)
        ctx.toaster.show(
            ctx.t("contact.error.title"),
            ctx.t("contact.error.description"),
            variant="destructive",
        )
        return False, {}

    ctx.toaster.show(ctx.t("contact.success.title"), ctx.t("contact.success.description"))
    return True, {}
