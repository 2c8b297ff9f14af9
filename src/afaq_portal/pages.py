"""Page controllers for every route of the site.

Each page declares its queries against the shared cache and builds a
:class:`~afaq_portal.views.PageView`. Pages that require sign-in go through
the context's :class:`~afaq_portal.boundary.AuthorizationBoundary` first and
dispatch no page query until the session is confirmed.
"""

import asyncio
import logging
import re
from typing import Any, Awaitable, Callable, Iterable, Optional
from urllib.parse import parse_qsl, urlsplit

from .animation import carousel_index, counter_value
from .boundary import PageState
from .content import (
    BRICK_TYPES,
    CURRICULUM_ALIGNMENT,
    FALLBACK_IMPACT,
    INTERACTIVE_LEARNING,
    KIT_LEVELS,
    LESSON_STEPS,
    MISSION,
    PARTNERS,
    STEAM_DESCRIPTION,
    STEAM_DISCIPLINES,
    TESTIMONIALS,
    TRAINING_SCHEDULE,
    TROUBLESHOOTING,
    VISION,
    WEEKS_PER_LEVEL,
)
from .context import AppContext
from .errors import PortalAPIError, PortalNetworkError
from .models import GRADE_LEVEL_OPTIONS, DashboardStats, Lesson, Level
from .query import QueryKey, QueryResult, QueryStatus, make_key
from .views import PageView, Section

logger = logging.getLogger(__name__)

PUBLIC_LEVELS_KEY = make_key("/api/public/levels")
PUBLIC_STATS_KEY = make_key("/api/public/stats")
DASHBOARD_KEY = make_key("/api/dashboard")
UPLOAD_STATUS_KEY = make_key("/api/upload-status")


def lessons_key(level_id: Optional[str]) -> QueryKey:
    return make_key("/api/lessons", "levelId", level_id)


def lesson_key(lesson_id: str) -> QueryKey:
    return make_key("/api/lessons", lesson_id)


def level_label(ctx: AppContext, level: Level) -> str:
    name = ctx.i18n.pick(level.name, level.name_ar)
    grades = ctx.t("curriculum.grades", min=level.grades_min, max=level.grades_max)
    return f"{name} ({grades})"


def week_label(ctx: AppContext, week_number: int) -> str:
    return ctx.t("lesson.week", number=str(week_number))


def filter_lessons(lessons: Iterable[Lesson], term: str, language: str) -> list[Lesson]:
    """Case-insensitive search over title, objective and build type."""
    needle = (term or "").strip().lower()
    if not needle:
        return list(lessons)
    matches = []
    for lesson in lessons:
        title = lesson.title_ar if language == "ar" else lesson.title
        objective = lesson.objective_ar if language == "ar" else lesson.objective
        haystacks = (title, objective, lesson.build_type)
        if any(needle in (text or "").lower() for text in haystacks):
            matches.append(lesson)
    return matches


def stats_lines(ctx: AppContext, stats: DashboardStats, elapsed_ms: Optional[float] = None) -> list[str]:
    def _count(value: int) -> str:
        if elapsed_ms is not None:
            value = counter_value(value, elapsed_ms)
        return f"{value:,}"

    return [
        f"{_count(stats.school_count)} {ctx.t('stats.partner.schools')}",
        f"{_count(stats.student_count)} {ctx.t('stats.students.reached')}",
        f"{_count(stats.teacher_count)} {ctx.t('stats.trained.teachers')}",
        f"{_count(stats.lesson_count)} {ctx.t('stats.lessons')}",
    ]


class Page:
    """Base page controller."""

    route = "/"
    requires_auth = False
    title_key = "app.title"

    def __init__(self, **params: Any):
        self.params = params
        self.state = PageState.CHECKING_AUTH if self.requires_auth else PageState.LOADING_DATA
        self.transitions: list[PageState] = []
        self._unauthorized = False
        self._errors: list[BaseException] = []

    def _enter(self, state: PageState) -> None:
        self.state = state
        self.transitions.append(state)

    def placeholder(self, ctx: AppContext) -> PageView:
        """The view shown while the session check is still running."""
        return PageView(
            route=self.route,
            state=PageState.CHECKING_AUTH,
            title=ctx.t("loading"),
            direction=ctx.i18n.direction,
        )

    async def render(
        self, ctx: AppContext, on_loading: Optional[Callable[[PageView], None]] = None
    ) -> PageView:
        """Run the page through its states and return the final view.

        ``on_loading`` receives the placeholder view when the session check
        still has to go to the network.
        """
        self._unauthorized = False
        self._errors = []

        if self.requires_auth:
            self._enter(PageState.CHECKING_AUTH)
            if on_loading is not None and not ctx.auth.checked:
                on_loading(self.placeholder(ctx))
            if await ctx.boundary.enter() is not PageState.AUTHENTICATED:
                self._enter(PageState.ANONYMOUS)
                return self._redirect_view(ctx)
            self._enter(PageState.AUTHENTICATED)

        self._enter(PageState.LOADING_DATA)
        view = await self.build(ctx)
        if self._unauthorized:
            return self._redirect_view(ctx)
        if self._errors and view.state in (PageState.READY, PageState.DATA_ERROR):
            view.state = PageState.DATA_ERROR
            view.sections.append(self._error_section(ctx))
        self._enter(view.state)
        return view

    async def build(self, ctx: AppContext) -> PageView:
        raise NotImplementedError

    async def _query(
        self,
        ctx: AppContext,
        key: QueryKey,
        fetcher: Callable[[], Awaitable[Any]],
        enabled: bool = True,
        refresh: bool = False,
    ) -> QueryResult:
        """Read ``key`` through the cache and record any failure on the page.

        A failed entry is fetched again when a page asks for it, so a later
        visit acts as the retry. ``refresh`` always fetches.
        """
        entry = ctx.cache.entry(key)
        failed = entry is not None and entry.state is QueryStatus.ERROR
        if enabled and (refresh or failed):
            result = await ctx.cache.refetch(key, fetcher)
        else:
            result = await ctx.cache.query(key, fetcher, enabled=enabled)
        if result.error is not None:
            if ctx.boundary.report(result.error):
                self._unauthorized = True
            else:
                self._errors.append(result.error)
        return result

    def _view(self, ctx: AppContext, sections: list[Section], **kwargs: Any) -> PageView:
        kwargs.setdefault("title", ctx.t(self.title_key))
        kwargs.setdefault("state", PageState.READY)
        return PageView(
            route=self.route,
            direction=ctx.i18n.direction,
            sections=sections,
            **kwargs,
        )

    def _redirect_view(self, ctx: AppContext) -> PageView:
        self._enter(PageState.REDIRECTING)
        return PageView(
            route=self.route,
            state=PageState.REDIRECTING,
            title=ctx.t("auth.unauthorized.title"),
            direction=ctx.i18n.direction,
            message=ctx.t("auth.redirecting", url=ctx.navigator.pending_url or ctx.client.login_url),
        )

    def _error_section(self, ctx: AppContext) -> Section:
        lines = []
        for error in self._errors:
            if isinstance(error, PortalNetworkError):
                lines.append(ctx.t("error.network"))
            elif isinstance(error, PortalAPIError) and error.status == 404:
                lines.append(ctx.t("error.notFound"))
            else:
                lines.append(f"{ctx.t('error')}: {error}")
        lines.append(ctx.t("button.tryAgain"))
        return Section(ctx.t("error"), lines)


class LandingPage(Page):
    """Public marketing page from the hero down to the contact form."""

    route = "/"

    async def build(self, ctx: AppContext) -> PageView:
        t = ctx.t
        language = ctx.i18n.language
        elapsed_ms = self.params.get("elapsed_ms")

        stats_result, levels_result = await asyncio.gather(
            self._query(ctx, PUBLIC_STATS_KEY, ctx.client.get_public_stats),
            self._query(ctx, PUBLIC_LEVELS_KEY, ctx.client.get_levels),
        )
        stats: Optional[DashboardStats] = stats_result.data
        levels: list[Level] = levels_result.data or []

        hero = Section(t("hero.title"), [t("hero.description")])
        if stats is not None:
            hero.lines.extend(stats_lines(ctx, stats, elapsed_ms))

        vision = Section(t("vision.title"), [VISION.get(language)])
        mission = Section(t("mission.title"), [MISSION.get(language)])
        steam = Section(t("steam.what.title"), [STEAM_DESCRIPTION.get(language)])
        steam.lines.extend(f"{letter}: {name.get(language)}" for letter, name in STEAM_DISCIPLINES)

        overview = Section(t("curriculum.title"), [t("curriculum.subtitle")])
        overview.lines.extend(level_label(ctx, level) for level in levels)

        kit = Section(t("kit.title"))
        for feature in KIT_LEVELS + INTERACTIVE_LEARNING:
            kit.lines.append(f"{feature.title.get(language)}: {feature.description.get(language)}")
        kit.lines.append(f"{t('curriculum.alignment.title')}: {CURRICULUM_ALIGNMENT.get(language)}")

        if stats is not None and (stats.student_count > 0 or stats.teacher_count > 0):
            students, teachers = stats.student_count, stats.teacher_count
        else:
            students, teachers = FALLBACK_IMPACT["students"], FALLBACK_IMPACT["teachers"]
        impact = Section(
            t("impact.title"),
            [
                f"{students:,} {t('stats.students.reached')}",
                f"{teachers:,} {t('stats.trained.teachers')}",
            ],
        )

        testimonials = list(TESTIMONIALS)
        if elapsed_ms is not None:
            start = carousel_index(elapsed_ms, len(testimonials))
            testimonials = testimonials[start:] + testimonials[:start]
        quotes = Section(t("testimonials.title"))
        for item in testimonials:
            quotes.lines.append(
                f"\"{item.quote.get(language)}\" - {item.name.get(language)}, "
                f"{item.role.get(language)}, {item.school.get(language)}"
            )

        partners = Section(t("partners.title"), [p.get(language) for p in PARTNERS])
        contact = Section(
            t("contact.title"),
            [t("contact.subtitle")]
            + [t("curriculum.grades", min=o.split("-")[0], max=o.split("-")[1]) for o in GRADE_LEVEL_OPTIONS],
        )

        return self._view(
            ctx,
            [hero, vision, mission, steam, overview, kit, impact, quotes, partners, contact],
            links=[
                (t("hero.cta.primary"), "/curriculum"),
                (t("hero.cta.secondary"), "/#contact"),
                (t("nav.login"), ctx.client.login_url),
            ],
            data={"stats": stats, "levels": levels},
        )


class HomePage(Page):
    """Signed-in home: dashboard counters and levels."""

    route = "/dashboard"
    requires_auth = True
    title_key = "nav.home"

    async def build(self, ctx: AppContext) -> PageView:
        t = ctx.t
        result = await self._query(ctx, DASHBOARD_KEY, ctx.client.get_dashboard, refresh=True)
        dashboard = result.data

        welcome = Section(t("dashboard.welcome", name=ctx.auth.state.display_name))
        sections = [welcome]
        if dashboard is not None:
            welcome.lines.extend(stats_lines(ctx, dashboard.stats))
            sections.append(
                Section(
                    t("levels.title"),
                    [level_label(ctx, level) for level in dashboard.levels],
                )
            )
        return self._view(
            ctx,
            sections,
            links=[
                (t("dashboard.curriculum"), "/curriculum"),
                (t("dashboard.resources"), "/teacher/resources"),
                (t("button.logout"), ctx.client.logout_url),
            ],
            data={"dashboard": dashboard},
        )


class CurriculumPage(Page):
    """Levels as tabs, weekly lessons of the selected level, search box."""

    route = "/curriculum"
    requires_auth = True
    title_key = "curriculum.title"

    async def build(self, ctx: AppContext) -> PageView:
        t = ctx.t
        language = ctx.i18n.language
        search = self.params.get("search") or ""

        levels_result = await self._query(ctx, PUBLIC_LEVELS_KEY, ctx.client.get_levels)
        levels: list[Level] = levels_result.data or []
        selected = self.params.get("level") or (levels[0].id if levels else None)

        lessons_result = await self._query(
            ctx,
            lessons_key(selected),
            lambda: ctx.client.get_lessons(selected),
            enabled=selected is not None,
        )
        lessons = filter_lessons(lessons_result.data or [], search, language)

        tabs = Section(t("levels.title"))
        for level in levels:
            marker = "*" if level.id == selected else " "
            tabs.lines.append(f"[{marker}] {level_label(ctx, level)}")

        listing = Section(t("curriculum.lessonCount", count=len(lessons)))
        if search:
            listing.lines.append(t("curriculum.search", term=search))
        for lesson in lessons:
            title = ctx.i18n.pick(lesson.title, lesson.title_ar)
            line = f"{week_label(ctx, lesson.week_number)}: {title}"
            if lesson.build_type:
                line += f" [{lesson.build_type}]"
            listing.lines.append(f"{line} (/curriculum/lesson/{lesson.id})")
        if not lessons and lessons_result.is_success:
            listing.lines.append(t("curriculum.noLessons"))

        return self._view(
            ctx,
            [tabs, listing],
            data={"levels": levels, "selected_level": selected, "lessons": lessons},
        )


class LessonDetailPage(Page):
    route = "/curriculum/lesson/{id}"
    requires_auth = True
    title_key = "curriculum.title"

    async def build(self, ctx: AppContext) -> PageView:
        t = ctx.t
        pick = ctx.i18n.pick
        lesson_id = str(self.params.get("lesson_id") or "")

        lesson_result, levels_result = await asyncio.gather(
            self._query(
                ctx,
                lesson_key(lesson_id),
                lambda: ctx.client.get_lesson(lesson_id),
                enabled=bool(lesson_id),
            ),
            self._query(ctx, PUBLIC_LEVELS_KEY, ctx.client.get_levels),
        )
        lesson: Optional[Lesson] = lesson_result.data
        if lesson is None:
            state = PageState.DATA_ERROR if lesson_result.is_error else PageState.NOT_FOUND
            return self._view(
                ctx,
                [Section(t("lesson.notFound.title"), [t("lesson.notFound.description")])],
                title=t("lesson.notFound.title"),
                state=state,
                links=[(t("lesson.backToCurriculum"), "/curriculum")],
            )

        levels = {level.id: level for level in levels_result.data or []}
        level = levels.get(lesson.level_id)

        overview = Section(week_label(ctx, lesson.week_number))
        if level is not None:
            overview.lines.append(level_label(ctx, level))
        overview.lines.append(f"{t('lesson.objective')}: {pick(lesson.objective, lesson.objective_ar)}")
        if lesson.build_type:
            overview.lines.append(f"{t('lesson.buildType')}: {lesson.build_type}")

        sections = [overview]
        for key, english, arabic in (
            ("lesson.teacherNotes", lesson.teacher_notes, lesson.teacher_notes_ar),
            ("lesson.challenge", lesson.challenge, lesson.challenge_ar),
            ("lesson.reflections", lesson.reflections, lesson.reflections_ar),
        ):
            text = pick(english, arabic)
            if text:
                sections.append(Section(t(key), [text]))

        language = ctx.i18n.language
        steps = Section(t("lesson.steps"))
        for number, step in enumerate(LESSON_STEPS, start=1):
            steps.lines.append(
                f"{number}. {step.title.get(language)} ({step.duration_min} min): "
                f"{step.description.get(language)}"
            )
        sections.append(steps)

        related = Section(t("lesson.related"))
        for week in (lesson.week_number - 1, lesson.week_number + 1):
            if 1 <= week <= WEEKS_PER_LEVEL:
                related.lines.append(week_label(ctx, week))
        if related.lines:
            sections.append(related)

        return self._view(
            ctx,
            sections,
            title=pick(lesson.title, lesson.title_ar),
            links=[(t("lesson.backToCurriculum"), "/curriculum")],
            data={"lesson": lesson, "level": level},
        )


class TeacherDashboardPage(Page):
    route = "/teacher/dashboard"
    requires_auth = True
    title_key = "teacher.dashboard"

    async def build(self, ctx: AppContext) -> PageView:
        t = ctx.t
        result = await self._query(ctx, DASHBOARD_KEY, ctx.client.get_dashboard, refresh=True)
        dashboard = result.data

        sections = [Section(t("dashboard.welcome", name=ctx.auth.state.display_name))]
        if dashboard is not None:
            sections[0].lines.extend(stats_lines(ctx, dashboard.stats))
            sections.append(
                Section(
                    t("levels.title"),
                    [level_label(ctx, level) for level in dashboard.levels],
                )
            )
        return self._view(
            ctx,
            sections,
            links=[
                (t("teacher.lessons"), "/teacher/lessons"),
                (t("resources.title"), "/teacher/resources"),
                (t("dashboard.files"), "/files"),
                (t("button.logout"), ctx.client.logout_url),
            ],
            data={"dashboard": dashboard},
        )


class TeacherLessonsPage(Page):
    """Lesson library across levels with a level filter and search."""

    route = "/teacher/lessons"
    requires_auth = True
    title_key = "teacher.lessons"

    async def build(self, ctx: AppContext) -> PageView:
        t = ctx.t
        language = ctx.i18n.language
        search = self.params.get("search") or ""
        level_filter = self.params.get("level") or "all"

        levels_result = await self._query(ctx, PUBLIC_LEVELS_KEY, ctx.client.get_levels)
        levels: list[Level] = levels_result.data or []
        shown = [level for level in levels if level_filter in ("all", level.id)]

        results = await asyncio.gather(
            *(
                self._query(ctx, lessons_key(level.id), self._lessons_fetcher(ctx, level.id))
                for level in shown
            )
        )

        sections = []
        total = 0
        for level, result in zip(shown, results):
            lessons = filter_lessons(result.data or [], search, language)
            total += len(lessons)
            section = Section(level_label(ctx, level))
            for lesson in lessons:
                title = ctx.i18n.pick(lesson.title, lesson.title_ar)
                section.lines.append(
                    f"{week_label(ctx, lesson.week_number)}: {title} (/curriculum/lesson/{lesson.id})"
                )
            sections.append(section)

        filter_label = t("teacher.allLevels") if level_filter == "all" else level_filter
        summary = Section(
            t("teacher.lessonsAvailable", count=total),
            [filter_label] + ([t("curriculum.search", term=search)] if search else []),
        )
        if total == 0:
            summary.lines.append(t("curriculum.noLessons"))
        return self._view(ctx, [summary] + sections, data={"total": total})

    @staticmethod
    def _lessons_fetcher(ctx: AppContext, level_id: str) -> Callable[[], Awaitable[list[Lesson]]]:
        return lambda: ctx.client.get_lessons(level_id)


class TeacherResourcesPage(Page):
    route = "/teacher/resources"
    requires_auth = True
    title_key = "resources.title"

    async def build(self, ctx: AppContext) -> PageView:
        t = ctx.t
        language = ctx.i18n.language

        schedule = Section(t("resources.schedule"))
        for session in TRAINING_SCHEDULE:
            schedule.lines.append(
                f"{session.date} {session.time}: {session.topic.get(language)} ({session.kind})"
            )

        bricks = Section(t("resources.bricks"))
        for brick in BRICK_TYPES:
            uses = ", ".join(use.get(language) for use in brick.uses)
            bricks.lines.append(
                f"{brick.name.get(language)}: {brick.description.get(language)} ({uses})"
            )

        troubleshooting = Section(t("resources.troubleshooting"))
        for item in TROUBLESHOOTING:
            troubleshooting.lines.append(item.problem.get(language))
            troubleshooting.lines.extend(
                f"  - {solution.get(language)}" for solution in item.solutions
            )

        return self._view(
            ctx,
            [schedule, bricks, troubleshooting],
            links=[(t("teacher.dashboard"), "/teacher/dashboard")],
        )


class FileManagerPage(Page):
    """Storage options available to the uploader."""

    route = "/files"
    requires_auth = True
    title_key = "files.title"

    async def build(self, ctx: AppContext) -> PageView:
        t = ctx.t
        folder = self.params.get("folder") or "uploads"
        result = await self._query(ctx, UPLOAD_STATUS_KEY, ctx.client.get_upload_status)
        status = result.data

        platform = Section(t("files.platform"), [t("upload.success.platform")])
        external = Section(t("files.external"), [t("files.folder", folder=folder)])
        if status is not None and status.configured:
            external.lines.append(
                t("upload.configured", endpoint=status.endpoint, bucket=status.bucket)
            )
        else:
            external.lines.append(t("upload.notConfigured"))

        return self._view(
            ctx,
            [platform, external],
            links=[(t("teacher.dashboard"), "/teacher/dashboard")],
            data={"upload_status": status},
        )


class NotFoundPage(Page):
    route = "*"
    title_key = "notFound.title"

    async def build(self, ctx: AppContext) -> PageView:
        return self._view(
            ctx,
            [Section(ctx.t("error.notFound"), [self.params.get("path", "")])],
            state=PageState.NOT_FOUND,
            links=[(ctx.t("button.goHome"), "/")],
        )


ROUTES: dict[str, type[Page]] = {
    "/": LandingPage,
    "/dashboard": HomePage,
    "/curriculum": CurriculumPage,
    "/teacher/dashboard": TeacherDashboardPage,
    "/teacher/lessons": TeacherLessonsPage,
    "/teacher/resources": TeacherResourcesPage,
    "/files": FileManagerPage,
}

_LESSON_ROUTE = re.compile(r"^/curriculum/lesson/(?P<lesson_id>[^/]+)$")

# Query string names accepted by the pages.
_PARAM_NAMES = {"level": "level", "levelId": "level", "q": "search", "search": "search", "folder": "folder"}


def resolve(path: str, **params: Any) -> Page:
    """Instantiate the page for ``path`` (unknown paths give NotFoundPage)."""
    parts = urlsplit(path)
    for name, value in parse_qsl(parts.query):
        if name in _PARAM_NAMES:
            params.setdefault(_PARAM_NAMES[name], value)
    route = parts.path.rstrip("/") or "/"

    match = _LESSON_ROUTE.match(route)
    if match:
        return LessonDetailPage(lesson_id=match.group("lesson_id"), **params)
    page_cls = ROUTES.get(route)
    if page_cls is None:
        logger.debug("No page for %s", route)
        return NotFoundPage(path=route)
    return page_cls(**params)


async def visit(
    ctx: AppContext,
    path: str,
    on_loading: Optional[Callable[[PageView], None]] = None,
    **params: Any,
) -> PageView:
    """Resolve and render ``path`` as the current location."""
    page = resolve(path, **params)
    ctx.navigator.location = path
    ctx.navigator.history.append(path)
    return await page.render(ctx, on_loading=on_loading)
