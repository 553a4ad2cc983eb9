"""Deterministic branch suggestions for when generation is unavailable.

Rules are tried in order; the first that matches supplies both branches.

| Rule        | Matches                                            | Branches                                  |
|-------------|----------------------------------------------------|-------------------------------------------|
| job_offer   | "job"/"offer" and a known employer in title         | "Accept {Employer} Offer" for two employers |
| either_or   | "<A> or <B>" in the title                          | "<A>" / "<B>", first letter capitalized   |
| yes_no      | anything                                           | "Yes - Take Action" / "No - Wait or Decline" |
"""
import re
from dataclasses import dataclass
from typing import Callable, List, Optional

from branchpoint.types import NamedOption

KNOWN_EMPLOYERS = ["Amazon", "Microsoft", "Apple", "Google", "Meta"]

_QUESTION_LEAD_RE = re.compile(
    r"^(should|shall|do|would|will|can|could)\s+(i|we)\s+", re.IGNORECASE
)
_EMPLOYER_RE = {
    name: re.compile(rf"\b{name.lower()}\b") for name in KNOWN_EMPLOYERS
}


@dataclass(frozen=True)
class BranchRule:
    """A named pattern that can turn a decision into two branches."""

    name: str
    build: Callable[[str, str], Optional[List[NamedOption]]]


def _job_offer(title: str, description: str) -> Optional[List[NamedOption]]:
    question = title.lower()
    if "job" not in question and "offer" not in question:
        return None
    if not any(pattern.search(question) for pattern in _EMPLOYER_RE.values()):
        return None

    combined = f"{question} {description.lower()}"
    employers = [name for name, pattern in _EMPLOYER_RE.items() if pattern.search(combined)]
    first = employers[0] if employers else "Company A"
    second = employers[1] if len(employers) > 1 else "Company B"
    return [
        {
            "name": f"Accept {first} Offer",
            "description": f"Choose the {first} position and move forward with their offer.",
        },
        {
            "name": f"Accept {second} Offer",
            "description": f"Choose the {second} position and move forward with their offer.",
        },
    ]


def _clean_option(text: str) -> str:
    cleaned = text.strip().strip("?!.,;:").strip()
    return cleaned[:1].upper() + cleaned[1:]


def _either_or(title: str, description: str) -> Optional[List[NamedOption]]:
    body = _QUESTION_LEAD_RE.sub("", title.strip())
    parts = re.split(r"\s+or\s+", body, maxsplit=1, flags=re.IGNORECASE)
    if len(parts) != 2:
        return None
    first, second = _clean_option(parts[0]), _clean_option(parts[1])
    if not first or not second:
        return None
    return [
        {
            "name": first,
            "description": f'Go with "{first}" and commit to what that path involves.',
        },
        {
            "name": second,
            "description": f'Go with "{second}" and commit to what that path involves.',
        },
    ]


def _yes_no(title: str, description: str) -> Optional[List[NamedOption]]:
    return [
        {
            "name": "Yes - Take Action",
            "description": "Move forward with this decision and embrace the opportunities it brings",
        },
        {
            "name": "No - Wait or Decline",
            "description": "Hold off on this decision and explore alternative options",
        },
    ]


RULES: List[BranchRule] = [
    BranchRule("job_offer", _job_offer),
    BranchRule("either_or", _either_or),
    BranchRule("yes_no", _yes_no),
]


def suggest_branches(title: str, description: Optional[str] = None) -> List[NamedOption]:
    """
    Two branches for a decision, chosen by the first matching rule.

    The final rule always matches, so this never fails.
    """
    for rule in RULES:
        branches = rule.build(title or "", description or "")
        if branches:
            return branches
    return _yes_no(title, description or "")


def matching_rule(title: str, description: Optional[str] = None) -> str:
    """Name of the rule that ``suggest_branches`` would use."""
    for rule in RULES:
        if rule.build(title or "", description or ""):
            return rule.name
    return "yes_no"
