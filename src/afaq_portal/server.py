"""Afaq Portal MCP Server - FastMCP tools for the Afaq Al-ʿIlm STEAM portal."""

from typing import Optional

from dotenv import load_dotenv
from fastmcp import FastMCP

from .chat import ChatSession
from .config import Settings
from .contact import submit_contact as _submit_contact
from .context import AppContext
from .errors import ConfigError, PortalError
from .pages import visit
from .upload import FileUploader, LocalFile, UploadBackend
from .views import format_toast, format_uploaded_file, render_text

# Load environment variables
load_dotenv()

# Create FastMCP server
mcp = FastMCP(
    "Afaq Portal",
    instructions="MCP server for Afaq Al-ʿIlm - bilingual STEAM education portal. Provides access to curriculum levels, weekly lessons, the teacher portal, file uploads and the AI assistant.",
)

# Global context (initialized on first use)
_context: Optional[AppContext] = None
_chat: Optional[ChatSession] = None


def _get_context() -> AppContext:
    """Get or create the application context."""
    global _context
    if _context is None:
        _context = AppContext.create(Settings.from_env(load_dotenv_file=False))
    return _context


def _apply_language(ctx: AppContext, language: Optional[str]) -> None:
    if language:
        ctx.i18n.set_language(language)


async def _render(path: str, language: Optional[str] = None) -> str:
    """Render a page, followed by any toasts it raised."""
    try:
        ctx = _get_context()
    except ConfigError as e:
        return f"Configuration error: {e}"

    _apply_language(ctx, language)
    shown = len(ctx.toaster.toasts)
    view = await visit(ctx, path)
    lines = [render_text(view)]
    for toast in ctx.toaster.toasts[shown:]:
        lines.append(format_toast(toast))
    return "\n".join(lines)


@mcp.tool()
async def view_page(path: str = "/", language: Optional[str] = None) -> str:
    """Render any page of the site.

    Args:
        path: Site path, e.g. "/", "/curriculum?level=1", "/curriculum/lesson/42",
            "/dashboard", "/teacher/lessons", "/teacher/resources", "/files"
        language: "en" or "ar" (keeps the current language if omitted)

    Returns:
        The page rendered as text.
    """
    return await _render(path, language)


@mcp.tool()
async def get_curriculum(
    level: str = "", search: str = "", language: Optional[str] = None
) -> str:
    """List the weekly lessons of a curriculum level.

    Args:
        level: Level ID (defaults to the first level)
        search: Optional text matched against title, objective and build type
        language: "en" or "ar"

    Returns:
        Levels and the matching lessons with their week numbers.
    """
    path = "/curriculum"
    params = []
    if level:
        params.append(f"level={level}")
    if search:
        params.append(f"q={search}")
    if params:
        path += "?" + "&".join(params)
    return await _render(path, language)


@mcp.tool()
async def get_lesson(lesson_id: str, language: Optional[str] = None) -> str:
    """Read the full plan of one lesson.

    Args:
        lesson_id: The ID of the lesson.
        language: "en" or "ar"

    Returns:
        Objective, teacher notes, challenge, reflections and lesson steps.
    """
    return await _render(f"/curriculum/lesson/{lesson_id}", language)


@mcp.tool()
async def get_dashboard(language: Optional[str] = None) -> str:
    """Get the teacher dashboard: counters, levels and quick links."""
    return await _render("/teacher/dashboard", language)


@mcp.tool()
async def set_language(code: str) -> str:
    """Switch the portal language.

    Args:
        code: "en" for English or "ar" for Arabic
    """
    try:
        ctx = _get_context()
    except ConfigError as e:
        return f"Configuration error: {e}"
    ctx.i18n.set_language(code)
    return f"Language: {ctx.i18n.language} ({ctx.i18n.direction})"


@mcp.tool()
async def submit_contact(
    school_name: str,
    contact_name: str,
    email: str,
    phone: str = "",
    city: str = "",
    grade_levels: Optional[list[str]] = None,
    message: str = "",
) -> str:
    """Request a demo through the contact form.

    Args:
        school_name: Name of the school
        contact_name: Person to contact
        email: Contact e-mail address
        phone: Optional phone number
        city: Optional city
        grade_levels: Any of "1-3", "4-6", "7-9"
        message: Optional message

    Returns:
        Confirmation message or the form errors.
    """
    try:
        ctx = _get_context()
    except ConfigError as e:
        return f"Configuration error: {e}"

    shown = len(ctx.toaster.toasts)
    sent, errors = await _submit_contact(
        ctx,
        schoolName=school_name,
        contactName=contact_name,
        email=email,
        phone=phone or None,
        city=city or None,
        gradeLevels=grade_levels or [],
        message=message or None,
    )
    if errors:
        return "\n".join(f"{name}: {text}" for name, text in errors.items())
    return "\n".join(format_toast(toast) for toast in ctx.toaster.toasts[shown:])


@mcp.tool()
async def chat(message: str) -> str:
    """Ask the site's AI assistant a question about the curriculum or teaching.

    Args:
        message: The question

    Returns:
        The assistant's answer.
    """
    global _chat
    try:
        ctx = _get_context()
    except ConfigError as e:
        return f"Configuration error: {e}"

    if _chat is None:
        _chat = ChatSession(ctx)
    answer = await _chat.send(message)
    if answer is None:
        return "Error: message is required"
    return answer.content


@mcp.tool()
async def upload_files(
    paths: list[str],
    backend: str = "platform",
    folder: str = "uploads",
) -> str:
    """Upload local files for hosting.

    Args:
        paths: Local file paths
        backend: "platform" (signed upload to platform storage) or
            "external" (S3-compatible storage, if configured)
        folder: Target folder for external storage

    Returns:
        Public URLs of the uploaded files, or why the upload failed.
    """
    try:
        ctx = _get_context()
        backend_choice = UploadBackend(backend)
    except ConfigError as e:
        return f"Configuration error: {e}"
    except ValueError:
        return f"Invalid backend: {backend}. Use 'platform' or 'external'."

    try:
        files = [LocalFile.from_path(path) for path in paths]
    except OSError as e:
        return f"Error: {e}"

    uploader = FileUploader(ctx, folder=folder)
    try:
        outcome = await uploader.upload(files, backend_choice)
    except PortalError as e:
        return f"API error: {e}"

    lines = [outcome.message]
    lines.extend(format_uploaded_file(uploaded) for uploaded in outcome.files)
    return "\n".join(lines)


def main():
    """Run the MCP server."""
    mcp.run()


if __name__ == "__main__":
    main()
