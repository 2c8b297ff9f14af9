"""Static bilingual copy: landing sections, testimonials, partners, lesson steps, resources."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Localized:
    en: str
    ar: str

    def get(self, language: str) -> str:
        return self.ar if language == "ar" and self.ar else self.en


@dataclass(frozen=True)
class Testimonial:
    name: Localized
    role: Localized
    school: Localized
    quote: Localized
    rating: int = 5


@dataclass(frozen=True)
class Feature:
    title: Localized
    description: Localized


@dataclass(frozen=True)
class LessonStep:
    title: Localized
    duration_min: int
    description: Localized


@dataclass(frozen=True)
class TrainingSession:
    date: str
    time: str
    topic: Localized
    kind: str
    materials: tuple[str, ...] = ()


@dataclass(frozen=True)
class BrickType:
    name: Localized
    description: Localized
    uses: tuple[Localized, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Troubleshooting:
    problem: Localized
    solutions: tuple[Localized, ...]


TESTIMONIALS = (
    Testimonial(
        name=Localized("Sara Al-Khatib", "سارة الخطيب"),
        role=Localized("Science Teacher", "معلمة علوم"),
        school=Localized("Amman International School", "مدرسة عمان الدولية"),
        quote=Localized(
            "Afaq Al-ʿIlm has revolutionized how my students engage with science. "
            "The hands-on activities make complex concepts accessible and exciting.",
            "لقد أحدثت آفاق العلم ثورة في طريقة تفاعل طلابي مع العلوم. "
            "الأنشطة العملية تجعل المفاهيم المعقدة سهلة ومثيرة.",
        ),
    ),
    Testimonial(
        name=Localized("Ahmed Mansour", "أحمد منصور"),
        role=Localized("Principal", "مدير"),
        school=Localized("Jordan Academy", "أكاديمية الأردن"),
        quote=Localized(
            "The bilingual support and alignment with Jordan's curriculum makes "
            "this platform invaluable for our diverse student body.",
            "الدعم ثنائي اللغة والتوافق مع المنهج الأردني يجعل هذه المنصة "
            "لا تقدر بثمن لطلابنا المتنوعين.",
        ),
    ),
    Testimonial(
        name=Localized("Omar Zaid", "عمر زيد"),
        role=Localized("Technology Teacher", "معلم تكنولوجيا"),
        school=Localized("Innovation Academy", "أكاديمية الابتكار"),
        quote=Localized(
            "The progression from basic concepts to advanced robotics is perfectly "
            "structured. Students build confidence with each level.",
            "التقدم من المفاهيم الأساسية إلى الروبوتات المتقدمة منظم بشكل مثالي. "
            "الطلاب يبنون الثقة مع كل مستوى.",
        ),
    ),
)

PARTNERS = (
    Localized("Ministry of Education", "وزارة التربية والتعليم"),
    Localized("UNESCO", "اليونسكو"),
    Localized("Jordan University", "الجامعة الأردنية"),
    Localized("USAID", "الوكالة الأمريكية للتنمية الدولية"),
    Localized("British Council", "المجلس الثقافي البريطاني"),
    Localized("Al-Kindi Foundation", "مؤسسة الكندي"),
)

VISION = Localized(
    "A generation of Jordanian students who think like scientists, build like "
    "engineers and create like artists.",
    "جيل من الطلاب الأردنيين يفكرون كالعلماء ويبنون كالمهندسين ويبدعون كالفنانين.",
)

MISSION = Localized(
    "We bring hands-on STEAM learning into every classroom through building kits, "
    "weekly bilingual lessons and ongoing teacher training.",
    "نجلب تعلم STEAM العملي إلى كل صف من خلال حقائب البناء والدروس الأسبوعية "
    "ثنائية اللغة والتدريب المستمر للمعلمين.",
)

STEAM_DESCRIPTION = Localized(
    "STEAM joins five disciplines into one way of learning by doing.",
    "يجمع STEAM خمسة مجالات في أسلوب واحد للتعلم بالممارسة.",
)

# Letter order is fixed regardless of the page direction.
STEAM_DISCIPLINES = (
    ("S", Localized("Science", "العلوم")),
    ("T", Localized("Technology", "التكنولوجيا")),
    ("E", Localized("Engineering", "الهندسة")),
    ("A", Localized("Arts", "الفنون")),
    ("M", Localized("Mathematics", "الرياضيات")),
)

KIT_LEVELS = (
    Feature(
        Localized("Level 1: Starter Kit", "المستوى الأول: حقيبة البداية"),
        Localized(
            "Large bricks and simple gears for grades 1-3 to explore shapes, balance and motion.",
            "قطع كبيرة وتروس بسيطة للصفوف 1-3 لاستكشاف الأشكال والتوازن والحركة.",
        ),
    ),
    Feature(
        Localized("Level 2: Builder Kit", "المستوى الثاني: حقيبة البنّاء"),
        Localized(
            "Axles, pulleys and levers for grades 4-6 to build working machines.",
            "محاور وبكرات وروافع للصفوف 4-6 لبناء آلات تعمل.",
        ),
    ),
    Feature(
        Localized("Level 3: Engineer Kit", "المستوى الثالث: حقيبة المهندس"),
        Localized(
            "Motors, sensors and programmable parts for grades 7-9 to solve real challenges.",
            "محركات وحساسات وقطع قابلة للبرمجة للصفوف 7-9 لحل تحديات حقيقية.",
        ),
    ),
)

INTERACTIVE_LEARNING = (
    Feature(
        Localized("Building & Design", "البناء والتصميم"),
        Localized(
            "Students plan and assemble models that turn ideas into objects.",
            "يخطط الطلاب ويجمعون نماذج تحول الأفكار إلى مجسمات.",
        ),
    ),
    Feature(
        Localized("Experimenting & Testing", "التجريب والاختبار"),
        Localized(
            "Every build is tested, measured and improved.",
            "كل نموذج يُختبر ويُقاس ويُحسّن.",
        ),
    ),
    Feature(
        Localized("Creative Solutions", "الحلول الإبداعية"),
        Localized(
            "Open challenges reward more than one right answer.",
            "التحديات المفتوحة تكافئ أكثر من إجابة صحيحة.",
        ),
    ),
)

CURRICULUM_ALIGNMENT = Localized(
    "Every weekly lesson maps to outcomes of the Jordanian national curriculum "
    "for science and mathematics.",
    "كل درس أسبوعي مرتبط بنتاجات المنهج الوطني الأردني في العلوم والرياضيات.",
)

LESSON_STEPS = (
    LessonStep(
        Localized("Introduction & Setup", "المقدمة والإعداد"),
        10,
        Localized(
            "Introduce the lesson objectives and prepare materials",
            "تقديم أهداف الدرس وإعداد المواد",
        ),
    ),
    LessonStep(
        Localized("Building Phase", "مرحلة البناء"),
        30,
        Localized(
            "Students work in teams to construct the model",
            "يعمل الطلاب في فرق لبناء النموذج",
        ),
    ),
    LessonStep(
        Localized("Testing & Iteration", "الاختبار والتطوير"),
        15,
        Localized(
            "Test the model and make improvements",
            "اختبار النموذج وإجراء التحسينات",
        ),
    ),
    LessonStep(
        Localized("Reflection & Discussion", "التفكير والمناقشة"),
        5,
        Localized(
            "Share discoveries and discuss learning outcomes",
            "مشاركة الاكتشافات ومناقشة نتائج التعلم",
        ),
    ),
)

# Weeks per level in the curriculum calendar.
WEEKS_PER_LEVEL = 24

TRAINING_SCHEDULE = (
    TrainingSession(
        "2025-08-15",
        "9:00 AM - 11:00 AM",
        Localized("Introduction to Afaq Al-ʿIlm Platform", "مقدمة لمنصة آفاق العلم"),
        "orientation",
        ("Teacher Guide", "Platform Overview", "Access Credentials"),
    ),
    TrainingSession(
        "2025-08-22",
        "9:00 AM - 12:00 PM",
        Localized("Starter Kit Training (Grades 1-3)", "تدريب مجموعة المبتدئين (الصفوف 1-3)"),
        "hands-on",
        ("Starter Kit", "Building Instructions", "Assessment Rubrics"),
    ),
    TrainingSession(
        "2025-08-29",
        "9:00 AM - 12:00 PM",
        Localized("Builder Kit Training (Grades 4-6)", "تدريب مجموعة البناة (الصفوف 4-6)"),
        "hands-on",
        ("Builder Kit", "Advanced Techniques", "Project Templates"),
    ),
    TrainingSession(
        "2025-09-05",
        "9:00 AM - 12:00 PM",
        Localized("Engineer Kit Training (Grades 7-9)", "تدريب مجموعة المهندسين (الصفوف 7-9)"),
        "hands-on",
        ("Engineer Kit", "Problem-Solving Strategies", "Innovation Projects"),
    ),
    TrainingSession(
        "2025-09-12",
        "10:00 AM - 11:00 AM",
        Localized("Assessment & Progress Tracking", "التقييم وتتبع التقدم"),
        "workshop",
        ("Assessment Tools", "Progress Sheets", "Digital Portfolio"),
    ),
)

BRICK_TYPES = (
    BrickType(
        Localized("Basic Bricks", "القطع الأساسية"),
        Localized(
            "2x2, 2x4, 2x6, 2x8 building blocks in various colors",
            "قطع البناء الأساسية بأحجام مختلفة وألوان متنوعة",
        ),
        (
            Localized("Foundation building", "بناء الأساسات"),
            Localized("Structural support", "الدعم الهيكلي"),
            Localized("Color coding", "الترميز بالألوان"),
        ),
    ),
    BrickType(
        Localized("Technic Beams", "العوارض التقنية"),
        Localized(
            "Structural beams with connection holes for complex builds",
            "عوارض هيكلية مع فتحات الاتصال للبناء المعقد",
        ),
        (
            Localized("Framework construction", "بناء الإطار"),
            Localized("Mechanical connections", "الاتصالات الميكانيكية"),
            Localized("Moving parts", "الأجزاء المتحركة"),
        ),
    ),
    BrickType(
        Localized("Gears & Wheels", "التروس والعجلات"),
        Localized(
            "Various sized gears, wheels, and axles for movement",
            "تروس وعجلات ومحاور بأحجام مختلفة للحركة",
        ),
        (
            Localized("Power transmission", "نقل القوة"),
            Localized("Speed control", "التحكم في السرعة"),
            Localized("Directional change", "تغيير الاتجاه"),
        ),
    ),
    BrickType(
        Localized("Connectors", "الموصلات"),
        Localized(
            "Pins, bushings, and connectors for joint assembly",
            "دبابيس وحلقات وموصلات لتجميع المفاصل",
        ),
        (
            Localized("Flexible joints", "المفاصل المرنة"),
            Localized("Rotating connections", "الاتصالات الدوارة"),
            Localized("Pivot points", "نقاط المحورة"),
        ),
    ),
)

TROUBLESHOOTING = (
    Troubleshooting(
        Localized("Build falls apart easily", "البناء ينهار بسهولة"),
        (
            Localized("Check all connections are properly secured", "تحقق من أن جميع الاتصالات محكمة"),
            Localized("Use overlapping brick patterns for stability", "استخدم أنماط متداخلة للاستقرار"),
            Localized("Add cross-bracing with technic beams", "أضف دعامات متقاطعة بالعوارض التقنية"),
        ),
    ),
    Troubleshooting(
        Localized("Gears not meshing properly", "التروس لا تتشابك بشكل صحيح"),
        (
            Localized("Ensure proper spacing between gear centers", "تأكد من المسافة الصحيحة بين مراكز التروس"),
            Localized("Check that gears are on the same plane", "تحقق أن التروس في نفس المستوى"),
            Localized("Verify axle alignment is straight", "تأكد من استقامة محاذاة المحور"),
        ),
    ),
    Troubleshooting(
        Localized("Model moves too slowly", "النموذج يتحرك ببطء شديد"),
        (
            Localized("Check for friction in moving parts", "تحقق من الاحتكاك في الأجزاء المتحركة"),
            Localized("Adjust gear ratios for more speed", "اضبط نسب التروس لمزيد من السرعة"),
            Localized("Ensure axles rotate freely", "تأكد أن المحاور تدور بحرية"),
        ),
    ),
)

# Shown by the impact section while real counters are missing or all zero.
FALLBACK_IMPACT = {"students": 150, "teachers": 10}
