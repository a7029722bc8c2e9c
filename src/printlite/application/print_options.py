# src/printlite/application/print_options.py
"""
Print Options - Raw Request Values to Typed Print Settings

Storefront pages and the legacy quote endpoint send print options as loose
strings ("bw", "90gsm", "double-sided", ...). This module maps them onto the
closed enums of the domain before anything reaches the pricing engine.

Unknown values are rejected by default. With ``strict=False`` they fall back
to the documented defaults (standard paper, black & white, single sided, no
binding, A4) and a warning is logged.

Files that USE this module:
- printlite.adapters.api.handlers (order creation and quote requests)
- tests.test_print_options (unit tests)

Files that this module USES:
- printlite.domain.models (option enums and PrintSettings)
- printlite.domain.errors (ValidationError)
- printlite.config (strict_print_options default)
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Mapping, Optional, TypeVar

from printlite.config import settings as app_settings
from printlite.domain.errors import ValidationError
from printlite.domain.models import (
    Binding,
    ColorMode,
    PaperSize,
    PaperType,
    PrintSettings,
    Sides,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

PAPER_TYPE_ALIASES = {
    "standard": PaperType.STANDARD,
    "70gsm": PaperType.STANDARD,
    "premium": PaperType.PREMIUM,
    "90gsm": PaperType.PREMIUM,
    "glossy": PaperType.GLOSSY,
    "120gsm": PaperType.GLOSSY,
}

COLOR_MODE_ALIASES = {
    "blackandwhite": ColorMode.BLACK_AND_WHITE,
    "black-and-white": ColorMode.BLACK_AND_WHITE,
    "black_white": ColorMode.BLACK_AND_WHITE,
    "blackwhite": ColorMode.BLACK_AND_WHITE,
    "bw": ColorMode.BLACK_AND_WHITE,
    "color": ColorMode.COLOR,
    "colour": ColorMode.COLOR,
}

SIDES_ALIASES = {
    "single": Sides.SINGLE,
    "single-sided": Sides.SINGLE,
    "simplex": Sides.SINGLE,
    "double": Sides.DOUBLE,
    "double-sided": Sides.DOUBLE,
    "duplex": Sides.DOUBLE,
}

BINDING_ALIASES = {
    "none": Binding.NONE,
    "": Binding.NONE,
    "spiral": Binding.SPIRAL,
    "staple": Binding.STAPLE,
}

PAPER_SIZE_ALIASES = {
    "a4": PaperSize.A4,
    "a3": PaperSize.A3,
    "letter": PaperSize.LETTER,
}

DEFAULTS = {
    "paperType": PaperType.STANDARD,
    "colorMode": ColorMode.BLACK_AND_WHITE,
    "sides": Sides.SINGLE,
    "binding": Binding.NONE,
    "paperSize": PaperSize.A4,
}


def parse_option(
    value: Any,
    aliases: Mapping[str, E],
    field: str,
    default: E,
    strict: bool,
) -> E:
    """
    Resolve one option value against its alias table.

    Args:
        value: Raw value from the request (string, enum member or None)
        aliases: Lower-case alias -> enum member
        field: Request field name, used in errors and warnings
        default: Value used when the option is absent, or unknown in fail-open mode
        strict: Reject unknown values instead of falling back

    Returns:
        Enum member

    Raises:
        ValidationError: If the value is unknown and ``strict`` is set
    """
    if value is None:
        return default
    if isinstance(value, Enum):
        value = value.value

    key = str(value).strip().lower()
    if key in aliases:
        return aliases[key]

    if strict:
        raise ValidationError(f"Unsupported {field}: '{value}'", field=field)

    logger.warning("Unknown %s '%s', falling back to '%s'", field, value, default.value)
    return default


def parse_copies(value: Any) -> int:
    """
    Parse the number of copies (missing means 1).

    Raises:
        ValidationError: If the value is not an integer of at least 1
    """
    if value is None:
        return 1
    if isinstance(value, bool):
        raise ValidationError("Copies must be a whole number", field="copies")
    try:
        copies = int(str(value).strip())
    except ValueError:
        raise ValidationError(f"Copies must be a whole number (got '{value}')", field="copies") from None
    if copies < 1:
        raise ValidationError(f"Copies must be at least 1 (got {copies})", field="copies")
    return copies


def _first(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if raw.get(key) is not None:
            return raw[key]
    return None


def parse_print_settings(raw: Mapping[str, Any], strict: Optional[bool] = None) -> PrintSettings:
    """
    Build PrintSettings from a checkout or quick-quote payload.

    Checkout keys: ``paperType``, ``colorOption``, ``printSides``, ``binding``,
    ``copies``, ``paperSize``. Legacy quote keys are also understood:
    ``printType`` (colour mode), ``paperQuality`` (paper tier), ``sides``, and
    ``paperType`` naming a sheet size (A4/A3/Letter).

    Args:
        raw: Request payload (or its printSettings section)
        strict: Override ``Settings.strict_print_options``

    Returns:
        PrintSettings

    Raises:
        ValidationError: On invalid copies, or unknown options in strict mode
    """
    if strict is None:
        strict = app_settings.strict_print_options

    paper_type_raw = raw.get("paperType")
    paper_size_raw = raw.get("paperSize")
    # Legacy quotes use paperType for the sheet size and paperQuality for the tier
    if paper_type_raw is not None and str(paper_type_raw).strip().lower() in PAPER_SIZE_ALIASES:
        paper_size_raw = paper_size_raw if paper_size_raw is not None else paper_type_raw
        paper_type_raw = raw.get("paperQuality")
    elif paper_type_raw is None:
        paper_type_raw = raw.get("paperQuality")

    return PrintSettings(
        paper_type=parse_option(paper_type_raw, PAPER_TYPE_ALIASES, "paperType", DEFAULTS["paperType"], strict),
        color_mode=parse_option(
            _first(raw, "colorOption", "colorMode", "printType"),
            COLOR_MODE_ALIASES, "colorOption", DEFAULTS["colorMode"], strict,
        ),
        sides=parse_option(
            _first(raw, "printSides", "sides"), SIDES_ALIASES, "printSides", DEFAULTS["sides"], strict,
        ),
        binding=parse_option(raw.get("binding"), BINDING_ALIASES, "binding", DEFAULTS["binding"], strict),
        copies=parse_copies(raw.get("copies")),
        paper_size=parse_option(paper_size_raw, PAPER_SIZE_ALIASES, "paperSize", DEFAULTS["paperSize"], strict),
    )
