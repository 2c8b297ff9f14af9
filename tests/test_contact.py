import asyncio

from conftest import json_of

from afaq_portal.contact import submit_contact

FORM = {
    "schoolName": "Amman International School",
    "contactName": "Sara Al-Khatib",
    "email": "sara@amman-school.edu.jo",
    "city": "Amman",
    "gradeLevels": ["1-3", "4-6"],
}


def test_valid_inquiry_is_posted_with_wire_names(portal) -> None:
    portal.on("POST", "/api/public/contact", json_body={"id": "c1"})

    async def scenario():
        ctx = portal.context()
        result = await submit_contact(ctx, **FORM)
        toast = ctx.toaster.latest()
        await ctx.aclose()
        return result, toast

    (sent, errors), toast = asyncio.run(scenario())

    assert sent is True
    assert errors == {}
    assert toast.title == "Success!"
    payload = json_of(portal.calls("/api/public/contact", "POST")[0])
    assert payload["schoolName"] == "Amman International School"
    assert payload["gradeLevels"] == ["1-3", "4-6"]
    assert payload["phone"] is None


def test_invalid_fields_are_reported_without_a_request(portal) -> None:
    async def scenario():
        ctx = portal.context()
        result = await submit_contact(ctx, **{**FORM, "schoolName": "", "email": "not-an-email"})
        await ctx.aclose()
        return result

    sent, errors = asyncio.run(scenario())

    assert sent is False
    assert errors == {
        "schoolName": "This field is required",
        "email": "Please enter a valid email address",
    }
    assert portal.requests == []


def test_server_failure_shows_error_toast(portal) -> None:
    portal.on("POST", "/api/public/contact", status=500, text="Failed to submit contact form")

    async def scenario():
        ctx = portal.context(language="ar")
        result = await submit_contact(ctx, **FORM)
        toast = ctx.toaster.latest()
        await ctx.aclose()
        return result, toast

    (sent, errors), toast = asyncio.run(scenario())

    assert sent is False
    assert errors == {}
    assert toast.variant == "destructive"
    assert toast.title == "خطأ"
