"""Pure domain logic for ATS (Applicant Tracking System) compatibility of resume HTML.

All functions operate on HTML strings -- no file I/O, no DOM parsing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

STANDARD_HEADERS = [
    "professional summary",
    "work experience",
    "experience",
    "skills",
    "education",
    "summary",
]

DEDUCTIONS: Dict[str, int] = {
    "section-headers": 20,
    "tables": 25,
    "multi-column": 5,
    "graphics": 15,
    "positioning": 10,
    "semantic-html": 5,
    "skills-section": 15,
    "date-formats": 5,
    "bullets": 5,
    "contact-info": 10,
}

PASSING_SCORE = 70

_MONTHS = r"(?:jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec)[a-z]*\.?"

DATE_FORMAT_PATTERNS: Dict[str, re.Pattern] = {
    "YYYY - YYYY": re.compile(r"\b\d{4}\s*[-–—]\s*\d{4}\b"),
    "MM/YYYY": re.compile(r"\b\d{1,2}/\d{4}\b"),
    "Month YYYY": re.compile(rf"\b{_MONTHS}\s+\d{{4}}\b", re.IGNORECASE),
}

_GRID_RE = re.compile(r"grid-template-columns|display:\s*grid")
_FLEX_ROW_RE = re.compile(r"flex-direction:\s*row|display:\s*flex[^}]*flex-wrap")
_ABSOLUTE_RE = re.compile(r"position:\s*absolute")
_EMAIL_RE = re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)*\.[a-z]{2,}", re.IGNORECASE)
_PHONE_RE = re.compile(r"\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")


@dataclass
class ATSIssue:
    type: str
    message: str
    severity: str  # "high" | "medium" | "low"


@dataclass
class ATSReport:
    """Structured result from ATS validation."""

    score: int
    issues: List[ATSIssue] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.score >= PASSING_SCORE


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_ats_compatibility(html: str) -> ATSReport:
    """Score resume *html* for ATS friendliness.

    Starts at 100 and applies a fixed deduction per failed check; the result
    is clamped to [0, 100].
    """
    issues: List[ATSIssue] = []
    warnings: List[str] = []
    score = 100
    html = html or ""
    lower = html.lower()

    def issue(kind: str, message: str, severity: str) -> None:
        nonlocal score
        issues.append(ATSIssue(type=kind, message=message, severity=severity))
        score -= DEDUCTIONS[kind]

    def warn(kind: str, message: str) -> None:
        nonlocal score
        warnings.append(message)
        score -= DEDUCTIONS[kind]

    if not any(header in lower for header in STANDARD_HEADERS):
        issue(
            "section-headers",
            'Missing standard section headers like "Work Experience", "Skills", "Education"',
            "high",
        )

    if "<table" in lower:
        issue("tables", "Resume uses tables for layout - ATS systems cannot parse tables properly", "high")

    if _GRID_RE.search(lower) or _FLEX_ROW_RE.search(lower):
        warn(
            "multi-column",
            "Multi-column layout detected - may reduce ATS parsing accuracy. Single column is most ATS-friendly.",
        )

    if "<img" in lower or "<svg" in lower:
        issue("graphics", "Resume contains images or graphics - ATS cannot read visual content", "medium")

    if _ABSOLUTE_RE.search(lower):
        issue("positioning", "Absolute positioning detected - may cause ATS parsing errors", "medium")

    has_semantic = "<header" in lower and "<section" in lower and ("<h1" in lower or "<h2" in lower)
    if not has_semantic:
        issue(
            "semantic-html",
            "Missing semantic HTML tags (<header>, <section>, <h1>, <h2>) - reduces ATS parsing accuracy",
            "low",
        )

    if "skill" not in lower:
        issue("skills-section", "No Skills section detected - critical for ATS keyword matching", "high")

    formats = detect_date_formats(html)
    if len(formats) > 1:
        warn("date-formats", f"Inconsistent date formats detected ({', '.join(formats)}) - use one format throughout")

    if "<li" not in lower and "•" not in html and "&bull;" not in lower:
        warn("bullets", "No bullet points detected - achievements should use bullet point format")

    if not _EMAIL_RE.search(html) and not _PHONE_RE.search(html):
        issue("contact-info", "Contact information (email/phone) not clearly visible", "medium")

    return ATSReport(score=max(0, min(100, score)), issues=issues, warnings=warnings)


def detect_date_formats(html: str) -> List[str]:
    """Names of the date formats present in *html*."""
    return [name for name, pattern in DATE_FORMAT_PATTERNS.items() if pattern.search(html)]


def ats_recommendations(score: int) -> List[str]:
    if score < PASSING_SCORE:
        return [
            "Critical: this resume may be auto-rejected by ATS systems",
            "Use a simple, linear layout without tables or complex columns",
            "Include standard section headers: Work Experience, Skills, Education",
        ]
    if score < 85:
        return [
            "Warning: some ATS systems may have difficulty parsing this resume",
            "Consider simplifying the layout to a single column",
            "Ensure all sections use standard headers",
        ]
    return [
        "Good: this resume should pass most ATS systems",
        "Continue using standard headers and simple formatting",
    ]


# ---------------------------------------------------------------------------
# Formatting report (pure string output)
# ---------------------------------------------------------------------------


def format_ats_report(report: ATSReport) -> str:
    """Render an :class:`ATSReport` as a human-readable report."""
    status = "PASS" if report.passed else "FAIL"
    lines = [f"## ATS Compatibility: {report.score}/100 ({status})"]

    if report.issues:
        lines.append("")
        lines.append("### Issues")
        for item in report.issues:
            lines.append(f"- [{item.severity}] {item.message}")

    if report.warnings:
        lines.append("")
        lines.append("### Warnings")
        for warning in report.warnings:
            lines.append(f"- {warning}")

    lines.append("")
    lines.append("### Recommendations")
    for i, rec in enumerate(ats_recommendations(report.score), 1):
        lines.append(f"{i}. {rec}")

    return "\n".join(lines)
