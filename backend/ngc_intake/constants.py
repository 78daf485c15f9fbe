"""Centralized constants shared by the wizard core, schemas and routes.

Intake option lists, record lifecycle enums and the estimate tables live
here and nowhere else. The front end reads the option values from
`GET /wizard/options`; labels come from i18n.
"""

from __future__ import annotations

# ── Project intake enums ────────────────────────────────────────────────

PROJECT_TYPES: list[str] = [
    "website-redesign",
    "new-website",
    "ecommerce",
    "web-app",
    "mobile-app",
    "branding",
]

URGENCY_LEVELS: list[str] = ["low", "medium", "high", "urgent"]

# Priority shares the urgency scale
DEFAULT_PRIORITY = "medium"

CONSULTATION_STATUSES: list[str] = [
    "new",
    "reviewing",
    "quoted",
    "accepted",
    "declined",
    "in_progress",
    "completed",
    "cancelled",
]

# Status → timestamp column stamped when a consultation enters that status
CONSULTATION_STATUS_TIMESTAMPS: dict[str, str] = {
    "reviewing": "reviewed_at",
    "quoted": "quoted_at",
    "accepted": "accepted_at",
    "completed": "completed_at",
}

# ── Contact form enums ──────────────────────────────────────────────────

CONTACT_TYPES: list[str] = ["general", "business", "support", "partnership", "careers"]

CONTACT_STATUSES: list[str] = ["new", "in_progress", "resolved", "closed", "spam"]

# ── Wizard option lists (values only) ───────────────────────────────────

TIMELINES: list[str] = [
    "urgent",
    "1-2-months",
    "2-4-months",
    "4-6-months",
    "6-months-plus",
    "flexible",
]

BUDGET_RANGES: list[str] = [
    "under-5k",
    "5k-15k",
    "15k-30k",
    "30k-50k",
    "50k-100k",
    "over-100k",
    "discuss",
]

INDUSTRIES: list[str] = [
    "technology",
    "healthcare",
    "finance",
    "education",
    "retail",
    "restaurant",
    "real-estate",
    "consulting",
    "nonprofit",
    "manufacturing",
    "creative",
    "other",
]

PROJECT_GOALS: list[str] = [
    "increase-sales",
    "brand-awareness",
    "user-engagement",
    "lead-generation",
    "customer-support",
    "mobile-presence",
    "automation",
    "modernize",
    "expand-market",
    "improve-seo",
]

CONTENT_READINESS: list[str] = ["ready", "partial", "need-help", "not-sure"]

CONTACT_METHODS: list[str] = ["email", "phone", "video", "any"]

# ── Budget estimate table ───────────────────────────────────────────────
# Budget figures live only here; estimates.py reads them.

BASE_BUDGET_BY_TYPE: dict[str, int] = {
    "website-redesign": 8000,
    "new-website": 12000,
    "ecommerce": 20000,
    "web-app": 35000,
    "mobile-app": 45000,
    "branding": 6000,
}
BASE_BUDGET_FALLBACK: int = 10000

FEATURE_COSTS: dict[str, int] = {
    "responsive-design": 2000,
    "seo-optimization": 3000,
    "ecommerce-integration": 5000,
    "cms-integration": 4000,
    "multi-language": 2500,
    "user-authentication": 3500,
}

# The feature catalogue offered by the wizard is the priced feature set
FEATURES: list[str] = list(FEATURE_COSTS)

BUDGET_URGENCY_MULTIPLIERS: dict[str, float] = {
    "urgent": 1.5,
    "standard": 1.0,
    "flexible": 0.8,
}

# ── Timeline estimate table (weeks) ─────────────────────────────────────

BASE_WEEKS_BY_TYPE: dict[str, int] = {
    "website-redesign": 6,
    "new-website": 8,
    "ecommerce": 12,
    "web-app": 16,
    "mobile-app": 20,
    "branding": 4,
}
BASE_WEEKS_FALLBACK: int = 8

FEATURE_WEEKS: dict[str, int] = {
    "responsive-design": 1,
    "seo-optimization": 1,
    "ecommerce-integration": 3,
    "cms-integration": 2,
    "multi-language": 3,
    "user-authentication": 2,
}

CONTENT_MULTIPLIERS: dict[str, float] = {
    "ready": 1.0,
    "partial": 1.2,
    "need-help": 1.5,
    "not-sure": 1.3,
}
CONTENT_MULTIPLIER_FALLBACK: float = 1.2

TIMELINE_URGENCY_MULTIPLIERS: dict[str, float] = {
    "low": 1.1,
    "medium": 1.0,
    "high": 0.8,
    "urgent": 0.6,
}

# ── Complexity score table ──────────────────────────────────────────────

COMPLEXITY_BY_TYPE: dict[str, float] = {
    "website-redesign": 2,
    "new-website": 3,
    "ecommerce": 5,
    "web-app": 7,
    "mobile-app": 8,
    "branding": 2,
}
COMPLEXITY_FALLBACK: float = 3
COMPLEXITY_PER_FEATURE: float = 0.5
