import logging

from cfa_admin.models.chapter import Chapter
from cfa_admin.models.weightage import WeightagePlan

logger = logging.getLogger(__name__)

FULL_WEIGHTAGE = 100


# ----------------------------
# VALIDATION
# ----------------------------

def _validate_index(plan: WeightagePlan, index: int):
    if index not in range(len(plan.chapters)):
        raise ValueError(f"Chapter index {index} is out of range")


def _validate_weight(weight: int):
    if weight not in range(0, FULL_WEIGHTAGE + 1):
        raise ValueError("Weightage must be between 0 and 100")


def _validate_total_questions(total_questions: int):
    if total_questions < 0:
        raise ValueError("Total questions cannot be negative")


# ----------------------------
# CREATE
# ----------------------------

def initialize_plan(chapters, total_questions: int, *, level: str = "", subject: str = "") -> WeightagePlan:
    """
    Even split of 100% across the subject's chapters.

    Every chapter gets floor(100 / n); the last one takes the
    remainder so the plan starts at exactly 100. No chapters
    gives an empty plan.
    """
    _validate_total_questions(total_questions)
    chapters = list(chapters)

    plan = WeightagePlan(level=level, subject=subject, total_questions=total_questions)
    if not chapters:
        logger.warning("No chapters configured for %s / %s", level, subject)
        return plan

    n = len(chapters)
    base = FULL_WEIGHTAGE // n

    for i, (name, code) in enumerate(chapters):
        weight = base if i < n - 1 else FULL_WEIGHTAGE - base * (n - 1)
        plan.chapters.append(Chapter(code=code, name=name, weight=weight))

    return plan


# ----------------------------
# UPDATE
# ----------------------------

def set_weight(plan: WeightagePlan, index: int, weight: int) -> WeightagePlan:
    # other chapters are left alone; a total other than 100 is only a warning
    _validate_index(plan, index)
    _validate_weight(weight)

    plan.chapters[index].weight = weight
    return plan


def toggle_enabled(plan: WeightagePlan, index: int) -> WeightagePlan:
    """
    Flip a chapter on or off.

    Disabling hands the chapter's weight to the chapters still enabled,
    floor(w / k) each, and zeroes it. The remainder w % k is dropped.
    With nothing left enabled the chapter keeps its weight.

    Enabling reclaims nothing: the chapter comes back with whatever
    weight it last held (usually 0).
    """
    _validate_index(plan, index)

    chapter = plan.chapters[index]
    chapter.enabled = not chapter.enabled

    if chapter.enabled:
        return plan

    remaining = plan.enabled_chapters
    if remaining:
        share = chapter.weight // len(remaining)
        for other in remaining:
            other.weight += share
        chapter.weight = 0

    return plan


def set_total_questions(plan: WeightagePlan, total_questions: int) -> WeightagePlan:
    _validate_total_questions(total_questions)
    plan.total_questions = total_questions
    return plan


# ----------------------------
# READ
# ----------------------------

def total_weight(plan: WeightagePlan) -> int:
    return sum(c.weight for c in plan.chapters if c.enabled)


def estimated_questions(chapter: Chapter, total_questions: int) -> int:
    # round half up, in integers: 0.5 questions counts as 1
    if not chapter.enabled:
        return 0
    return (chapter.weight * total_questions + FULL_WEIGHTAGE // 2) // FULL_WEIGHTAGE


def validate_plan(plan: WeightagePlan) -> bool:
    return total_weight(plan) == FULL_WEIGHTAGE


def weightage_payload(plan: WeightagePlan) -> dict[str, int]:
    return {c.code: c.weight for c in plan.chapters if c.enabled}


def plan_summary(plan: WeightagePlan) -> dict:
    """
    Frontend friendly view of a plan:
    - per chapter weightage + estimated questions
    - running total and warning
    """
    total = total_weight(plan)
    warning = None
    if plan.chapters and total != FULL_WEIGHTAGE:
        warning = (
            f"Total weightage is {total}%. "
            f"It should equal 100% for optimal question distribution."
        )

    return {
        "level": plan.level,
        "subject": plan.subject,
        "totalQuestions": plan.total_questions,
        "totalWeightage": total,
        "isValid": validate_plan(plan),
        "warning": warning,
        "chapters": [
            {
                "index": i,
                "code": c.code,
                "chapter": c.name,
                "enabled": c.enabled,
                "weightage": c.weight,
                "estimatedQuestions": estimated_questions(c, plan.total_questions)
            }
            for i, c in enumerate(plan.chapters)
        ]
    }


# ----------------------------
# SESSION STORAGE
# ----------------------------

def plan_to_dict(plan: WeightagePlan) -> dict:
    return {
        "level": plan.level,
        "subject": plan.subject,
        "total_questions": plan.total_questions,
        "chapters": [
            {"code": c.code, "name": c.name, "enabled": c.enabled, "weight": c.weight}
            for c in plan.chapters
        ]
    }


def plan_from_dict(data: dict) -> WeightagePlan:
    return WeightagePlan(
        level=data.get("level", ""),
        subject=data.get("subject", ""),
        total_questions=int(data.get("total_questions", 0)),
        chapters=[
            Chapter(
                code=row["code"],
                name=row["name"],
                enabled=bool(row.get("enabled", True)),
                weight=int(row.get("weight", 0))
            )
            for row in data.get("chapters", [])
        ]
    )
