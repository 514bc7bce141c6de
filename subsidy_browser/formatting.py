"""
Display formatting for subsidy figures and names.

Every formatter takes a raw field value and returns the string shown in a
table cell. FORMATTERS maps the `format` names used in dataset configs to
these functions.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Dict, Optional, Union

Number = Union[int, float]

MISSING = "N/A"

# Readable names for USDA program codes that title-casing alone mangles
PROGRAM_NAMES: Dict[str, str] = {
    "CFAPCCA2": "CFAP Round 2",
    "CFAPCCCCA": "CFAP CCC Payments (A)",
    "CFAPCARES": "CFAP CARES Act",
    "CFAP3 - TUP": "CFAP3 Top-Up Payments",
    "SUPP DISASTER RELIEF NON-SPEC CROPS 1": "Supp Disaster Relief (Non-Specialty Crops)",
    "TMP/MFP 2019 NON SPECIALTY CROPS": "Market Facilitation Program 2019",
    "EMGNCY RELIEF PRGM-NONSPECIALITY CROPS": "Emergency Relief Program",
    "AGRICULTURAL RISK COVERAGE PROG - COUNTY": "Agriculture Risk Coverage (County)",
    "AGRICULTURAL RISK COVERAGE PROG - INDIVIDUAL": "Agriculture Risk Coverage (Individual)",
    "CRP PAYMENT - ANNUAL RENTAL": "CRP Annual Rental",
    "CRP PAYMENT - INCENTIVE": "CRP Incentive Payment",
    "CRP PAYMENT - SIGNING": "CRP Signing Incentive",
    "CRP PAYMENT - PRACTICE": "CRP Practice Incentive",
    "CRP PAYMENT - TRANSITION": "CRP Transition Incentive",
    "MARKET FACILITATION PROGRAM - CROPS": "Market Facilitation Program (Crops)",
    "MARKET FACILITATION PROGRAM - NON SPECIALTY CROPS": "Market Facilitation Program (Non-Specialty)",
}

# Applied to the lower-cased name, before word starts are capitalised
_PROGRAM_WORDS = (
    (r"\bcrp\b", "CRP"),
    (r"\bplc\b", "PLC"),
    (r"\barc\b", "ARC"),
    (r"\bmfp\b", "MFP"),
    (r"\bcfap\b", "CFAP"),
    (r"\busda\b", "USDA"),
    (r"\bprgm\b", "Program"),
    (r"\bprog\b", "Program"),
    (r"\bemgncy\b", "Emergency"),
    (r"\bnonspeciality\b", "Non-Specialty"),
    (r"\btmp\b", "TMP"),
)

_WORD_START = re.compile(r"\b\w")
_NON_SLUG = re.compile(r"[^a-z0-9]+")


def _as_number(value: Any) -> Optional[Number]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def fmt_count(value: Any) -> str:
    """
    Format a count with thousands separators.

    Examples:
        fmt_count(4812) -> "4,812"
        fmt_count(2.5) -> "2.5"
        fmt_count(None) -> "N/A"
    """
    n = _as_number(value)
    if n is None:
        return MISSING
    if isinstance(n, float):
        if n.is_integer():
            return f"{int(n):,}"
        return f"{n:,.3f}".rstrip("0").rstrip(".")
    return f"{n:,}"


def fmt_money(value: Any) -> str:
    """
    Format a dollar amount, abbreviating to K/M/B.

    Examples:
        fmt_money(1_234_567_890) -> "$1.23B"
        fmt_money(4_500_000) -> "$4.5M"
        fmt_money(12_400) -> "$12K"
        fmt_money(None) -> "N/A"
    """
    n = _as_number(value)
    if n is None:
        return MISSING
    if abs(n) >= 1e9:
        return f"${n / 1e9:.2f}B"
    if abs(n) >= 1e6:
        return f"${n / 1e6:.1f}M"
    if abs(n) >= 1e3:
        return f"${n / 1e3:.0f}K"
    return f"${n:.0f}"


def title_case(value: Any) -> str:
    """'JOHN DOE FARMS LLC' -> 'John Doe Farms Llc'"""
    if value is None:
        return ""
    return _WORD_START.sub(lambda m: m.group(0).upper(), str(value).lower())


def slugify(value: Any) -> str:
    if value is None:
        return ""
    return _NON_SLUG.sub("-", str(value).lower()).strip("-")


def format_program(name: Any) -> str:
    """Readable name for a raw USDA program code."""
    if not name or name == "—":
        return "" if name is None else str(name)
    name = str(name)
    if name in PROGRAM_NAMES:
        return PROGRAM_NAMES[name]

    text = name.lower()
    for pattern, replacement in _PROGRAM_WORDS:
        text = re.sub(pattern, replacement, text)
    text = _WORD_START.sub(lambda m: m.group(0).upper(), text)
    return text.replace(" - ", " — ")


def plain_text(value: Any) -> str:
    return "" if value is None else str(value)


FORMATTERS: Dict[str, Callable[[Any], str]] = {
    "text": plain_text,
    "count": fmt_count,
    "money": fmt_money,
    "title": title_case,
    "program": format_program,
}
