"""
Text rendering of company cards.

Missing fields render as explicit fallback text, never as blank space.
"""

from typing import Callable, List, Optional, Tuple

from api.models import Company, Number


SMALL_MAX = 1000
MEDIUM_MAX = 5000

SKILLS_SHOWN = 3
BENEFITS_SHOWN = 2


def size_tier(headcount: Optional[int]) -> Optional[str]:
    """Small / Medium / Large from headcount; None when headcount is absent."""
    if headcount is None:
        return None
    if headcount < SMALL_MAX:
        return "Small"
    if headcount < MEDIUM_MAX:
        return "Medium"
    return "Large"


def format_amount(value: Optional[Number]) -> str:
    if value is None:
        return "Not specified"
    return f"{value:,.0f}"


def format_headcount(headcount: Optional[int]) -> str:
    if headcount is None:
        return "Size not specified"
    return f"{headcount:,} employees"


def exact_match(term: str) -> Callable[[str], bool]:
    """Predicate for values equal to `term`, ignoring case."""
    wanted = term.lower()
    return lambda value: value.lower() == wanted


def contains_match(term: str) -> Callable[[str], bool]:
    """Predicate for values containing `term`, ignoring case."""
    wanted = term.lower()
    return lambda value: wanted in value.lower()


def chips(
    values: List[str],
    shown: Optional[int] = None,
    highlight: Optional[Callable[[str], bool]] = None,
) -> str:
    """
    Join values for one chip row.

    Only the first `shown` values are listed (all of them when None) and
    a "+N more" marker stands in for the rest. Values picked out by
    `highlight` are wrapped in asterisks.
    """
    visible = values if shown is None else values[:shown]
    parts = [f"*{value}*" if highlight and highlight(value) else value for value in visible]
    if shown is not None and len(values) > shown:
        parts.append(f"+{len(values) - shown} more")
    return ", ".join(parts)


def company_card(
    company: Company,
    rank: Optional[int] = None,
    show_tier: bool = False,
    show_bonus: bool = False,
    skills_shown: Optional[int] = SKILLS_SHOWN,
    benefits_shown: Optional[int] = BENEFITS_SHOWN,
    skill_match: Optional[Callable[[str], bool]] = None,
    benefit_match: Optional[Callable[[str], bool]] = None,
    skills_label: str = "Skills Required",
    benefits_label: str = "Benefits",
) -> Tuple[str, List[str]]:
    """
    Build the title and detail lines of one card.

    Args:
        company: Company to render
        rank: 1-based position in a ranking; rank 1 is tagged "Top Paid"
        show_tier: Append the Small/Medium/Large size tier
        show_bonus: Add a bonus line when the company reports one
        skills_shown: Skills listed before "+N more"; None lists all, 0 hides the row
        benefits_shown: Same for benefits
        skill_match: Highlights matching skills
        benefit_match: Highlights matching benefits
        skills_label: Caption of the skills row
        benefits_label: Caption of the benefits row

    Returns:
        (title, lines)
    """
    title = company.name or "Unknown Company"
    lines = []

    if rank is not None:
        title = f"#{rank} {title}"
        if rank == 1:
            title += "  [Top Paid]"
        lines.append(f"Base Salary: {format_amount(company.base_salary)}")

    lines.append(f"Location: {company.location or 'Location not specified'}")

    headcount_line = f"Headcount: {format_headcount(company.headcount)}"
    tier = size_tier(company.headcount) if show_tier else None
    if tier:
        headcount_line += f" ({tier})"
    lines.append(headcount_line)

    if rank is None and company.base_salary is not None:
        lines.append(f"Salary: {format_amount(company.base_salary)}")

    if show_bonus and company.bonus is not None:
        lines.append(f"Bonus: {format_amount(company.bonus)}")

    if company.skills and skills_shown != 0:
        lines.append(f"{skills_label}: {chips(company.skills, skills_shown, skill_match)}")

    if company.benefits and benefits_shown != 0:
        lines.append(f"{benefits_label}: {chips(company.benefits, benefits_shown, benefit_match)}")

    return title, lines
