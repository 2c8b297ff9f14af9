"""Page views and their plain-text rendering."""

from dataclasses import dataclass, field
from typing import Any, Optional

from .boundary import PageState
from .models import Toast, UploadedFile


@dataclass
class Section:
    heading: str
    lines: list[str] = field(default_factory=list)


@dataclass
class PageView:
    """Rendered state of a page, independent of any output surface."""

    route: str
    state: PageState
    title: str
    direction: str = "ltr"
    sections: list[Section] = field(default_factory=list)
    links: list[tuple[str, str]] = field(default_factory=list)
    message: Optional[str] = None
    data: dict[str, Any] = field(default_factory=dict)

    def section(self, heading: str) -> Optional[Section]:
        for section in self.sections:
            if section.heading == heading:
                return section
        return None


def render_text(view: PageView) -> str:
    """Format a page view for display."""
    lines = [view.title, "=" * max(len(view.title), 10)]
    if view.message:
        lines.extend(["", view.message])
    for section in view.sections:
        lines.append("")
        lines.append(section.heading)
        lines.append("-" * max(len(section.heading), 10))
        for line in section.lines:
            lines.append(f"  {line}")
    if view.links:
        lines.append("")
        for label, href in view.links:
            lines.append(f"-> {label}: {href}")
    return "\n".join(lines)


def format_toast(toast: Toast) -> str:
    marker = "!" if toast.variant == "destructive" else "*"
    if toast.description:
        return f"[{marker}] {toast.title}: {toast.description}"
    return f"[{marker}] {toast.title}"


def format_uploaded_file(uploaded: UploadedFile) -> str:
    size_kb = uploaded.size / 1024
    return (
        f"{uploaded.name} ({size_kb:.1f} KB, {uploaded.type or 'unknown'}) "
        f"[{uploaded.method}] {uploaded.url}"
    )
