"""Translation catalogue and lookup for user-facing strings.

The wizard core and the routes only emit dotted message keys; display text is
resolved here with ``t(key, params, locale)``.
"""

from __future__ import annotations

from typing import Any, Optional

from .config import DEFAULT_LOCALE

STR: dict[str, dict[str, Any]] = {
    "en": {
        "initializeProject": {
            "steps": {
                "step1": "Project Basics",
                "step2": "Project Details",
                "step3": "Timeline & Budget",
                "step4": "Contact Info",
                "step5": "Review & Submit",
            },
            "progress": "Step {current} of {total}",
            "submitted": "Thank you! We'll review your project and get back to you within 24 hours.",
        },
        "validation": {
            "required": "This field is required",
            "minLength": "Must be at least {min} characters",
            "maxLength": "Must be at most {max} characters",
            "invalidEmail": "Please enter a valid email address",
            "invalidUrl": "Please enter a valid URL starting with http:// or https://",
            "invalidPhone": "Please enter a valid phone number",
            "invalidOption": "Please choose one of the available options",
            "invalidList": "Please remove empty entries",
        },
        "errors": {
            "serverUnavailable": "We couldn't connect to our server. Please try again.",
            "unknownError": "An unknown error occurred. Please try again.",
            "validationError": "Some fields contain errors. Please check and try again.",
            "submissionInFlight": "Your request is already being sent. Please wait.",
            "sessionNotFound": "Your session has expired. Please start again.",
            "notReadyToSubmit": "Please complete every step before submitting.",
        },
        "contact": {
            "received": "Thanks for reaching out! We'll be in touch shortly.",
        },
    },
    "sr": {
        "initializeProject": {
            "steps": {
                "step1": "Osnove projekta",
                "step2": "Detalji projekta",
                "step3": "Rokovi i budžet",
                "step4": "Kontakt podaci",
                "step5": "Pregled i slanje",
            },
            "progress": "Korak {current} od {total}",
            "submitted": "Hvala! Pregledaćemo vaš projekat i javiti vam se u roku od 24 sata.",
        },
        "validation": {
            "required": "Ovo polje je obavezno",
            "minLength": "Mora imati najmanje {min} karaktera",
            "maxLength": "Može imati najviše {max} karaktera",
            "invalidEmail": "Unesite ispravnu email adresu",
            "invalidUrl": "Unesite ispravan URL koji počinje sa http:// ili https://",
            "invalidPhone": "Unesite ispravan broj telefona",
            "invalidOption": "Izaberite jednu od ponuđenih opcija",
        },
        "errors": {
            "serverUnavailable": "Nismo uspeli da se povežemo sa serverom. Pokušajte ponovo.",
            "unknownError": "Došlo je do nepoznate greške. Pokušajte ponovo.",
            "validationError": "Neka polja sadrže greške. Proverite i pokušajte ponovo.",
        },
    },
}

SUPPORTED_LOCALES: tuple[str, ...] = tuple(STR)


def _lookup(catalogue: dict[str, Any], key: str) -> Optional[str]:
    node: Any = catalogue
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node if isinstance(node, str) else None


def t(key: str, params: Optional[dict[str, Any]] = None, locale: Optional[str] = None) -> str:
    """Translate a dotted ``key`` into ``locale``.

    Falls back to English when the locale (or the key within it) is missing,
    and to the key itself when English has no entry either. ``{name}``
    placeholders are filled from ``params``; unknown placeholders are left as-is.
    """
    locale = locale or DEFAULT_LOCALE
    text = _lookup(STR.get(locale, {}), key)
    if text is None and locale != "en":
        text = _lookup(STR["en"], key)
    if text is None:
        return key

    for name, value in (params or {}).items():
        text = text.replace("{" + name + "}", str(value))
    return text
