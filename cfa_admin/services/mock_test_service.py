# cfa_admin/services/mock_test_service.py
import logging
from datetime import datetime

import pytz

from cfa_admin.models.mock_test import DIFFICULTIES, MockTestDraft
from cfa_admin.models.weightage import WeightagePlan
from cfa_admin.services.api_client import ApiSession, post_json
from cfa_admin.services.weightage_service import (
    estimated_questions,
    total_weight,
    validate_plan,
    weightage_payload,
)
from cfa_admin.utils.parsing import parse_int

logger = logging.getLogger(__name__)

ADD_MOCK_TEST_PATH = "/api/test/addMockTest"
MAX_TOTAL_QUESTIONS = 200


class MockTestSubmissionError(Exception):
    pass


def _now(tz_name: str):
    return datetime.now(pytz.timezone(tz_name))


# ----------------------------
# DRAFT
# ----------------------------

def _validate_draft(draft: MockTestDraft):
    if draft.total_questions not in range(1, MAX_TOTAL_QUESTIONS + 1):
        raise ValueError(f"Total questions must be between 1 and {MAX_TOTAL_QUESTIONS}")

    if draft.time_limit < 1:
        raise ValueError("Time limit must be at least 1 minute")

    if draft.passing_score not in range(0, 101):
        raise ValueError("Passing score must be between 0 and 100")

    if draft.difficulty not in DIFFICULTIES:
        raise ValueError(f"Difficulty must be one of: {', '.join(DIFFICULTIES)}")


def draft_from_form(data, defaults: dict | None = None) -> MockTestDraft:
    """
    Build a MockTestDraft from submitted form / JSON fields.
    Missing numbers fall back to the configured defaults.
    """
    defaults = defaults or {}
    base = MockTestDraft()

    draft = MockTestDraft(
        title=(data.get("title") or "").strip(),
        level=(data.get("level") or "").strip(),
        subject=(data.get("subject") or "").strip(),
        description=(data.get("description") or "").strip(),
        total_questions=parse_int(
            data.get("totalQuestions"), "Total questions",
            defaults.get("total_questions", base.total_questions)
        ),
        time_limit=parse_int(
            data.get("timeLimit"), "Time limit",
            defaults.get("time_limit", base.time_limit)
        ),
        passing_score=parse_int(
            data.get("passingScore"), "Passing score",
            defaults.get("passing_score", base.passing_score)
        ),
        difficulty=(data.get("difficulty") or base.difficulty).strip().lower()
    )

    _validate_draft(draft)
    return draft


# ----------------------------
# SUBMISSION CHECKS
# ----------------------------

def submission_errors(draft: MockTestDraft, plan: WeightagePlan) -> list[str]:
    errors = []

    if not draft.title:
        errors.append("Test title is required")
    if not draft.level:
        errors.append("CFA level is required")
    if not draft.subject:
        errors.append("Subject is required")

    if plan.is_empty:
        errors.append("No chapters configured for this subject")
    elif (plan.level, plan.subject) != (draft.level, draft.subject):
        errors.append("Chapter weightage was configured for a different subject")
    elif draft.total_questions != plan.total_questions:
        errors.append(
            f"Total questions ({draft.total_questions}) does not match "
            f"the weightage plan ({plan.total_questions})"
        )

    total = total_weight(plan)
    if not validate_plan(plan):
        errors.append(f"Total weightage must be 100% (currently {total}%)")

    return errors


def can_submit(draft: MockTestDraft, plan: WeightagePlan) -> bool:
    return not submission_errors(draft, plan)


def build_payload(draft: MockTestDraft, plan: WeightagePlan) -> dict:
    return {
        "name": draft.title,
        "noofquestions": draft.total_questions,
        "timelimit": draft.time_limit,
        "passingscore": draft.passing_score,
        "description": draft.description,
        "weightage": weightage_payload(plan)
    }


# ----------------------------
# CREATE
# ----------------------------

def create_mock_test(
    api_session: ApiSession,
    draft: MockTestDraft,
    plan: WeightagePlan,
    *,
    tz_name: str = "Asia/Kolkata"
) -> dict:
    """
    Submit a subject-wise mock test to the backend.

    Blocked locally (no request sent) unless the draft is complete
    and the plan totals exactly 100%. Backend failures raise ApiError
    and leave the plan as it was.
    """
    errors = submission_errors(draft, plan)
    if errors:
        raise MockTestSubmissionError(" | ".join(errors))

    payload = build_payload(draft, plan)
    logger.info(
        "Creating mock test '%s' (%s / %s, %d chapters)",
        draft.title, draft.level, draft.subject, len(payload["weightage"])
    )

    result = post_json(api_session, ADD_MOCK_TEST_PATH, payload)

    enabled = plan.enabled_chapters
    return {
        "title": draft.title,
        "level": draft.level,
        "subject": draft.subject,
        "description": draft.description,
        "totalQuestions": draft.total_questions,
        "timeLimit": draft.time_limit,
        "passingScore": draft.passing_score,
        "difficulty": draft.difficulty,
        "totalWeightage": total_weight(plan),
        "estimatedQuestions": [
            {
                "code": c.code,
                "chapter": c.name,
                "questions": estimated_questions(c, draft.total_questions),
                "weightage": c.weight
            }
            for c in enabled
        ],
        "createdAt": _now(tz_name).isoformat(),
        "status": "created",
        "backendResponse": result
    }
