"""Bilingual (English/Arabic) strings and the session locale."""

import logging
import re
from typing import Callable, Mapping, Union

logger = logging.getLogger(__name__)

LANGUAGES = ("en", "ar")
DEFAULT_LANGUAGE = "en"

TRANSLATIONS: dict[str, dict[str, str]] = {
    "en": {
        "loading": "Loading...",
        "error": "An error occurred",
        "error.network": "Network error. Please check your connection.",
        "error.unauthorized": "You are not authorized to access this resource.",
        "error.notFound": "Resource not found.",
        "button.tryAgain": "Try Again",
        "button.goHome": "Go Home",
        "button.login": "Login",
        "button.logout": "Logout",
        "form.required": "This field is required",
        "form.email.invalid": "Please enter a valid email address",
        "form.success": "Form submitted successfully!",
        "app.title": "Afaq Al-ʿIlm",
        "app.tagline": "Hands-on STEAM learning for grades 1-9",
        "nav.home": "Home",
        "nav.curriculum": "Curriculum",
        "nav.impact": "Impact",
        "nav.partners": "Partners",
        "nav.contact": "Contact",
        "nav.login": "Teacher Login",
        "hero.title": "Revolutionizing STEAM Education",
        "hero.description": "Building kits, weekly lessons and teacher training that turn classrooms into workshops.",
        "hero.cta.primary": "Explore the Curriculum",
        "hero.cta.secondary": "Request a Demo",
        "curriculum.title": "Our Curriculum",
        "curriculum.subtitle": "Three progressive kits, one lesson every week.",
        "curriculum.grades": "Grades {min}-{max}",
        "curriculum.lessonCount": "{count} lessons",
        "curriculum.search": "Search: {term}",
        "curriculum.noLessons": "No lessons match your search.",
        "curriculum.loginRequired": "Sign in to browse the weekly lessons.",
        "lesson.week": "Week {number}",
        "lesson.objective": "Objective",
        "lesson.buildType": "Build",
        "lesson.teacherNotes": "Teacher Notes",
        "lesson.challenge": "Challenge",
        "lesson.reflections": "Reflections",
        "lesson.steps": "Lesson Steps",
        "lesson.related": "Related Lessons",
        "lesson.notFound.title": "Lesson Not Found",
        "lesson.notFound.description": "The lesson you're looking for doesn't exist or has been removed.",
        "lesson.backToCurriculum": "Back to Curriculum",
        "stats.partner.schools": "Partner Schools",
        "stats.students.reached": "Students Reached",
        "stats.trained.teachers": "Trained Teachers",
        "stats.lessons": "Lessons",
        "stats.satisfaction": "Satisfaction %",
        "vision.title": "Our Vision",
        "mission.title": "Our Mission",
        "steam.what.title": "What is STEAM?",
        "kit.title": "Kit Components",
        "interactive.learning.title": "Interactive Learning",
        "curriculum.alignment.title": "Jordan Curriculum Alignment",
        "impact.title": "Our Impact",
        "levels.title": "Learning Levels",
        "testimonials.title": "What Teachers Say",
        "partners.title": "Our Partners",
        "contact.title": "Get in Touch",
        "contact.subtitle": "Bring hands-on STEAM learning to your school.",
        "contact.success.title": "Success!",
        "contact.success.description": "Your inquiry has been submitted successfully. We'll contact you soon!",
        "contact.error.title": "Error",
        "contact.error.description": "Failed to submit inquiry. Please try again.",
        "dashboard.welcome": "Welcome back, {name}",
        "dashboard.curriculum": "Curriculum",
        "dashboard.resources": "Resources",
        "dashboard.files": "File Manager",
        "teacher.dashboard": "Teacher Dashboard",
        "teacher.lessons": "Lesson Library",
        "teacher.lessonsAvailable": "{count} lessons available",
        "teacher.allLevels": "All Levels",
        "resources.title": "Teacher Resources",
        "resources.schedule": "Training Schedule",
        "resources.bricks": "Brick Types",
        "resources.troubleshooting": "Troubleshooting",
        "auth.unauthorized.title": "Unauthorized",
        "auth.unauthorized.description": "You are logged out. Logging in again...",
        "auth.redirecting": "Redirecting to {url}",
        "files.title": "File Manager for Hosting",
        "files.platform": "Platform Storage",
        "files.external": "External Storage",
        "files.folder": "Folder: {folder}",
        "upload.success.title": "Upload Successful",
        "upload.success.platform": "Files uploaded to platform storage",
        "upload.success.single": "File uploaded to external storage",
        "upload.success.count": "{count} files uploaded successfully",
        "upload.failed.title": "Upload Failed",
        "upload.failed.description": "Failed to upload files",
        "upload.empty.title": "No Files Selected",
        "upload.empty.description": "Please select files to upload",
        "upload.notConfigured": "External storage is not configured. Set the storage credentials on the server to enable uploads.",
        "upload.configured": "Connected to {endpoint} (bucket: {bucket})",
        "chat.welcome": "Hello! I'm your AI assistant for Afaq Al-ʿIlm. How can I help you today? I can answer questions about curriculum, lesson planning, or any educational topic.",
        "chat.error": "Sorry, something went wrong. Please try again.",
        "notFound.title": "Page Not Found",
    },
    "ar": {
        "loading": "جاري التحميل...",
        "error": "حدث خطأ",
        "error.network": "خطأ في الشبكة. يرجى التحقق من الاتصال.",
        "error.unauthorized": "غير مخول لك الوصول إلى هذا المورد.",
        "error.notFound": "المورد غير موجود.",
        "button.tryAgain": "حاول مرة أخرى",
        "button.goHome": "الذهاب للرئيسية",
        "button.login": "تسجيل الدخول",
        "button.logout": "تسجيل الخروج",
        "form.required": "هذا الحقل مطلوب",
        "form.email.invalid": "يرجى إدخال عنوان بريد إلكتروني صحيح",
        "form.success": "تم إرسال النموذج بنجاح!",
        "app.title": "آفاق العلم",
        "app.tagline": "تعلم STEAM العملي للصفوف 1-9",
        "nav.home": "الرئيسية",
        "nav.curriculum": "المنهج",
        "nav.impact": "الأثر",
        "nav.partners": "الشركاء",
        "nav.contact": "تواصل معنا",
        "nav.login": "دخول المعلمين",
        "hero.title": "ثورة في تعليم STEAM",
        "hero.description": "مجموعات بناء ودروس أسبوعية وتدريب للمعلمين تحوّل الصفوف إلى ورش عمل.",
        "hero.cta.primary": "استكشف المنهج",
        "hero.cta.secondary": "اطلب عرضاً تجريبياً",
        "curriculum.title": "منهجنا",
        "curriculum.subtitle": "ثلاث مجموعات متدرجة، ودرس كل أسبوع.",
        "curriculum.grades": "الصفوف {min}-{max}",
        "curriculum.lessonCount": "{count} درس",
        "curriculum.search": "البحث: {term}",
        "curriculum.noLessons": "لا توجد دروس مطابقة لبحثك.",
        "curriculum.loginRequired": "سجّل الدخول لتصفح الدروس الأسبوعية.",
        "lesson.week": "الأسبوع {number}",
        "lesson.objective": "الهدف",
        "lesson.buildType": "البناء",
        "lesson.teacherNotes": "ملاحظات المعلم",
        "lesson.challenge": "التحدي",
        "lesson.reflections": "التأملات",
        "lesson.steps": "خطوات الدرس",
        "lesson.related": "دروس ذات صلة",
        "lesson.notFound.title": "الدرس غير موجود",
        "lesson.notFound.description": "الدرس الذي تبحث عنه غير موجود أو تمت إزالته.",
        "lesson.backToCurriculum": "العودة إلى المنهج",
        "stats.partner.schools": "المدارس الشريكة",
        "stats.students.reached": "الطلاب المستفيدون",
        "stats.trained.teachers": "المعلمون المدربون",
        "stats.lessons": "الدروس",
        "stats.satisfaction": "نسبة الرضا %",
        "vision.title": "رؤيتنا",
        "mission.title": "رسالتنا",
        "steam.what.title": "ما هو STEAM؟",
        "kit.title": "مكونات الحقيبة",
        "interactive.learning.title": "التعلم التفاعلي",
        "curriculum.alignment.title": "التوافق مع المنهج الأردني",
        "impact.title": "أثرنا",
        "levels.title": "مستويات التعلم",
        "testimonials.title": "ماذا يقول المعلمون",
        "partners.title": "شركاؤنا",
        "contact.title": "تواصل معنا",
        "contact.subtitle": "اجلب تعلم STEAM العملي إلى مدرستك.",
        "contact.success.title": "تم بنجاح!",
        "contact.success.description": "تم إرسال استفسارك بنجاح. سنتواصل معك قريباً!",
        "contact.error.title": "خطأ",
        "contact.error.description": "فشل إرسال الاستفسار. يرجى المحاولة مرة أخرى.",
        "dashboard.welcome": "مرحباً بعودتك، {name}",
        "dashboard.curriculum": "المنهج",
        "dashboard.resources": "الموارد",
        "dashboard.files": "مدير الملفات",
        "teacher.dashboard": "لوحة تحكم المعلم",
        "teacher.lessons": "مكتبة الدروس",
        "teacher.lessonsAvailable": "{count} درس متاح",
        "teacher.allLevels": "جميع المستويات",
        "resources.title": "موارد المعلم",
        "resources.schedule": "جدول التدريب",
        "resources.bricks": "أنواع القطع",
        "resources.troubleshooting": "حل المشكلات",
        "auth.unauthorized.title": "غير مصرح",
        "auth.unauthorized.description": "تم تسجيل خروجك. جاري تسجيل الدخول مرة أخرى...",
        "auth.redirecting": "جاري التحويل إلى {url}",
        "files.title": "مدير الملفات للاستضافة",
        "files.platform": "تخزين المنصة",
        "files.external": "التخزين الخارجي",
        "files.folder": "المجلد: {folder}",
        "upload.success.title": "تم الرفع بنجاح",
        "upload.success.platform": "تم رفع الملفات إلى تخزين المنصة",
        "upload.success.single": "تم رفع الملف إلى التخزين الخارجي",
        "upload.success.count": "تم رفع {count} ملف",
        "upload.failed.title": "فشل في الرفع",
        "upload.failed.description": "فشل في رفع الملفات",
        "upload.empty.title": "لا توجد ملفات",
        "upload.empty.description": "اختر ملفات للرفع",
        "upload.notConfigured": "التخزين الخارجي غير مُعد. أضف بيانات الاعتماد على الخادم لتفعيل الرفع.",
        "upload.configured": "متصل بـ {endpoint} (الحاوية: {bucket})",
        "chat.welcome": "مرحباً! أنا مساعدك الذكي في آفاق العلم. كيف يمكنني مساعدتك اليوم؟ يمكنني الإجابة على أسئلة حول المنهج، التخطيط للدروس، أو أي موضوع تعليمي.",
        "chat.error": "أعتذر، حدث خطأ. يرجى المحاولة مرة أخرى.",
        "notFound.title": "الصفحة غير موجودة",
    },
}

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def normalize_language(code: str | None) -> str:
    """Map any language code onto a supported locale ("ar" or "en")."""
    return "ar" if (code or "").strip().lower().startswith("ar") else "en"


def translate(key: str, locale: str = DEFAULT_LANGUAGE) -> str:
    """Look up ``key`` in the locale's flat mapping.

    Missing keys come back unchanged so that untranslated copy stays visible.
    """
    strings = TRANSLATIONS.get(locale) or TRANSLATIONS[DEFAULT_LANGUAGE]
    return strings.get(key, key)


def interpolate(template: str, values: Mapping[str, Union[str, int, float]]) -> str:
    """Replace ``{name}`` placeholders.

    Unknown names and values that render as an empty string are left as
    written.
    """

    def _sub(match: re.Match) -> str:
        value = values.get(match.group(1))
        text = "" if value is None else str(value)
        return text or match.group(0)

    return _PLACEHOLDER.sub(_sub, template)


class LanguageContext:
    """Holds the session locale and notifies consumers when it changes."""

    def __init__(self, language: str = DEFAULT_LANGUAGE):
        self._language = normalize_language(language)
        self._subscribers: list[Callable[[str], None]] = []

    @property
    def language(self) -> str:
        return self._language

    @property
    def direction(self) -> str:
        return "rtl" if self._language == "ar" else "ltr"

    def set_language(self, code: str) -> None:
        language = normalize_language(code)
        if language == self._language:
            return
        self._language = language
        logger.info("Language switched to %s", language)
        for callback in list(self._subscribers):
            callback(language)

    def toggle(self) -> str:
        self.set_language("en" if self._language == "ar" else "ar")
        return self._language

    def subscribe(self, callback: Callable[[str], None]) -> Callable[[], None]:
        """Register a re-render callback; returns the unsubscribe function."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def t(self, key: str, **values: Union[str, int, float]) -> str:
        text = translate(key, self._language)
        return interpolate(text, values) if values else text

    def pick(self, english: str, arabic: str) -> str:
        """Choose between the two language variants of a content field."""
        if self._language == "ar" and arabic:
            return arabic
        return english
