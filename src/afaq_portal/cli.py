"""Afaq Portal CLI - Command-line interface for the Afaq Al-ʿIlm portal.

Usage:
    afaq-portal [--lang en|ar] <command> [options]

Commands:
    page <path>                         Render any page of the site
    levels                              List curriculum levels
    curriculum [--level ID] [--search TEXT]  List lessons of a level
    lesson <id>                         Read a lesson plan
    dashboard                           Teacher dashboard
    resources                           Teacher resources
    upload [--external] [--folder F] <file>...  Upload files
    upload-status                       Show whether external storage is configured
    contact --school S --name N --email E [...]  Request a demo
    chat <message>                      Ask the AI assistant
"""

import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from .boundary import PageState


def _load_env():
    """Load .env from the afaq-portal project directory."""
    # Try the directory containing this file first, then walk up
    here = Path(__file__).resolve().parent
    for candidate in [here / ".env", here.parent / ".env", here.parent.parent / ".env"]:
        if candidate.exists():
            load_dotenv(candidate)
            return
    # Fallback: let dotenv search from cwd
    load_dotenv()


def _get_context(language=None):
    from .config import Settings
    from .context import AppContext
    from .errors import ConfigError

    try:
        settings = Settings.from_env(load_dotenv_file=False)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx = AppContext.create(settings)
    if language:
        ctx.i18n.set_language(language)
    return ctx


def _print_toasts(ctx, shown=0):
    from .views import format_toast

    for toast in ctx.toaster.toasts[shown:]:
        print(format_toast(toast))


async def _show(ctx, path, **params):
    """Render a page; follow an unauthorized redirect once it fires."""
    from .pages import visit
    from .views import render_text

    view = await visit(
        ctx, path, on_loading=lambda placeholder: print(placeholder.title, file=sys.stderr), **params
    )
    print(render_text(view))
    _print_toasts(ctx)
    if view.state is PageState.REDIRECTING:
        await asyncio.sleep(ctx.redirect_delay + 0.05)
        print(f"Redirected to {ctx.navigator.location}", file=sys.stderr)
        sys.exit(1)
    if view.state in (PageState.DATA_ERROR, PageState.NOT_FOUND):
        sys.exit(1)


def _options(args, flags=(), valued=()):
    """Split ``args`` into (options, positionals)."""
    options = {}
    positionals = []
    i = 0
    while i < len(args):
        if args[i] in flags:
            options[args[i]] = True
            i += 1
        elif args[i] in valued and i + 1 < len(args):
            options.setdefault(args[i], []).append(args[i + 1])
            i += 2
        else:
            positionals.append(args[i])
            i += 1
    return options, positionals


async def cmd_page(ctx, args):
    if not args:
        print("Error: path is required", file=sys.stderr)
        sys.exit(1)
    await _show(ctx, args[0])


async def cmd_levels(ctx, args):
    from .pages import level_label

    levels = await ctx.client.get_levels()
    if not levels:
        print("No levels found.")
        return
    print(f"{ctx.t('curriculum.title')}:")
    for level in levels:
        print(f"  [{level.id}] {level_label(ctx, level)}")


async def cmd_curriculum(ctx, args):
    options, _ = _options(args, valued=("--level", "-l", "--search", "-s"))
    params = {}
    level = (options.get("--level") or options.get("-l") or [None])[-1]
    search = (options.get("--search") or options.get("-s") or [None])[-1]
    if level:
        params["level"] = level
    if search:
        params["search"] = search
    await _show(ctx, "/curriculum", **params)


async def cmd_lesson(ctx, args):
    if not args:
        print("Error: lesson_id is required", file=sys.stderr)
        sys.exit(1)
    await _show(ctx, f"/curriculum/lesson/{args[0]}")


async def cmd_dashboard(ctx, args):
    await _show(ctx, "/teacher/dashboard")


async def cmd_resources(ctx, args):
    await _show(ctx, "/teacher/resources")


async def cmd_upload(ctx, args):
    from .upload import FileUploader, LocalFile, UploadBackend
    from .views import format_uploaded_file

    options, paths = _options(args, flags=("--external", "-e"), valued=("--folder", "-f"))
    backend = UploadBackend.EXTERNAL if ("--external" in options or "-e" in options) else UploadBackend.PLATFORM
    folder = (options.get("--folder") or options.get("-f") or ["uploads"])[-1]

    try:
        files = [LocalFile.from_path(path) for path in paths]
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    uploader = FileUploader(ctx, folder=folder)
    outcome = await uploader.upload(files, backend)
    if outcome.toast is None:
        print(outcome.message, file=sys.stderr)
    _print_toasts(ctx)
    for uploaded in outcome.files:
        print(f"  {format_uploaded_file(uploaded)}")
    if not outcome.ok:
        sys.exit(1)


async def cmd_upload_status(ctx, args):
    from .upload import FileUploader

    uploader = FileUploader(ctx)
    status = await uploader.refresh_status()
    if status is None:
        _print_toasts(ctx)
        sys.exit(1)
    if status.configured:
        print(ctx.t("upload.configured", endpoint=status.endpoint, bucket=status.bucket))
    else:
        print(uploader.disabled_reason)


async def cmd_contact(ctx, args):
    from .contact import submit_contact

    options, _ = _options(
        args,
        valued=("--school", "--name", "--email", "--phone", "--city", "--grades", "--message"),
    )

    def value(name):
        values = options.get(name)
        return values[-1] if values else None

    grades = []
    for item in options.get("--grades", []):
        grades.extend(g.strip() for g in item.split(",") if g.strip())

    sent, errors = await submit_contact(
        ctx,
        schoolName=value("--school") or "",
        contactName=value("--name") or "",
        email=value("--email") or "",
        phone=value("--phone"),
        city=value("--city"),
        gradeLevels=grades,
        message=value("--message"),
    )
    for name, text in errors.items():
        print(f"Error: {name}: {text}", file=sys.stderr)
    _print_toasts(ctx)
    if not sent:
        sys.exit(1)


async def cmd_chat(ctx, args):
    from .chat import ChatSession

    text = " ".join(args)
    if not text.strip():
        print("Error: message is required", file=sys.stderr)
        sys.exit(1)
    session = ChatSession(ctx)
    answer = await session.send(text)
    print(answer.content)


COMMANDS = {
    "page": cmd_page,
    "levels": cmd_levels,
    "curriculum": cmd_curriculum,
    "lesson": cmd_lesson,
    "dashboard": cmd_dashboard,
    "resources": cmd_resources,
    "upload": cmd_upload,
    "upload-status": cmd_upload_status,
    "contact": cmd_contact,
    "chat": cmd_chat,
}

USAGE = """\
Usage: afaq-portal [--lang en|ar] <command> [options]

Commands:
  page <path>                            Render a page (e.g. /, /curriculum, /files)
  levels                                 List curriculum levels
  curriculum [--level ID] [--search TEXT]  List the weekly lessons of a level
  lesson <id>                            Read a lesson plan
  dashboard                              Teacher dashboard
  resources                              Teacher resources
  upload [--external] [--folder F] <file>...  Upload files (platform storage by default)
  upload-status                          Show whether external storage is configured
  contact --school S --name N --email E [--phone P] [--city C] [--grades 1-3,4-6] [--message M]
                                         Request a demo
  chat <message>                         Ask the AI assistant

Settings are read from AFAQ_* environment variables or a .env file:
AFAQ_BASE_URL (required), AFAQ_SESSION_COOKIE, AFAQ_LANGUAGE, AFAQ_TIMEOUT,
AFAQ_REDIRECT_DELAY, AFAQ_LOG_LEVEL."""


async def _run(command, args, language):
    from .errors import PortalError

    ctx = _get_context(language)
    try:
        await COMMANDS[command](ctx, args)
    except PortalError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        await ctx.aclose()


def main():
    _load_env()

    args = sys.argv[1:]
    language = None
    if len(args) >= 2 and args[0] in ("--lang", "-L"):
        language = args[1]
        args = args[2:]

    if not args or args[0] in ("-h", "--help", "help"):
        print(USAGE)
        sys.exit(0)

    command = args[0]
    if command not in COMMANDS:
        print(f"Error: Unknown command '{command}'", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        sys.exit(1)

    asyncio.run(_run(command, args[1:], language))


if __name__ == "__main__":
    main()
