# cfa_admin/routes/admin_routes.py
import logging

from flask import (Response, jsonify, Blueprint,
                   request, session, current_app)
from cfa_admin.utils.decorators import login_required, role_required
from cfa_admin.utils.parsing import parse_int
from cfa_admin.utils.session import (
    current_api_session,
    load_plan,
    store_plan,
    discard_plan
)
from cfa_admin.services.api_client import ApiError, SessionExpiredError
from cfa_admin.services.catalog_service import (
    get_levels,
    get_subjects,
    get_chapters
)
from cfa_admin.services.weightage_service import (
    initialize_plan,
    set_weight,
    toggle_enabled,
    set_total_questions,
    plan_summary
)
from cfa_admin.services.mock_test_service import (
    MockTestSubmissionError,
    draft_from_form,
    create_mock_test
)
from cfa_admin.services.plan_export_service import get_plan_as_csv

logger = logging.getLogger(__name__)

admin_bp = Blueprint("admin", __name__)


def _json_body() -> dict:
    # lists and scalars are treated as an empty form
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _error(message, status=400):
    return jsonify({"success": False, "message": message}), status


def _plan_response(plan, status=200):
    return jsonify({
        "success": True,
        "configured": not plan.is_empty,
        "plan": plan_summary(plan)
    }), status


def _no_plan():
    return _error("No weightage plan in progress. Select a subject first.", 404)


# =========================
# CATALOG
# =========================

@admin_bp.route("/catalog/levels")
@login_required
@role_required("admin")
def list_levels():
    return jsonify(get_levels())


@admin_bp.route("/catalog/subjects")
@login_required
@role_required("admin")
def list_subjects():
    level = request.args.get("level", "")
    return jsonify(get_subjects(level))


@admin_bp.route("/catalog/chapters")
@login_required
@role_required("admin")
def list_chapters():
    level = request.args.get("level", "")
    subject = request.args.get("subject", "")
    return jsonify([
        {"name": c.name, "code": c.code}
        for c in get_chapters(level, subject)
    ])


# =========================
# WEIGHTAGE PLAN
# =========================

@admin_bp.route("/mock-tests/plan", methods=["POST"])
@login_required
@role_required("admin")
def start_plan():
    """
    Subject selected: start a fresh even split.
    Replaces any plan already in progress.
    """
    data = _json_body()
    level = (data.get("level") or "").strip()
    subject = (data.get("subject") or "").strip()

    if not level or not subject:
        return _error("Level and subject are required")

    try:
        total_questions = parse_int(
            data.get("totalQuestions"), "Total questions",
            current_app.config["DEFAULT_TOTAL_QUESTIONS"]
        )
        plan = initialize_plan(
            get_chapters(level, subject),
            total_questions,
            level=level,
            subject=subject
        )
    except ValueError as e:
        return _error(str(e))

    store_plan(plan)
    return _plan_response(plan, 201)


@admin_bp.route("/mock-tests/plan", methods=["GET"])
@login_required
@role_required("admin")
def get_plan():
    plan = load_plan()
    if plan is None:
        return _no_plan()
    return _plan_response(plan)


@admin_bp.route("/mock-tests/plan", methods=["PATCH"])
@login_required
@role_required("admin")
def update_plan_total():
    plan = load_plan()
    if plan is None:
        return _no_plan()

    try:
        total_questions = parse_int(_json_body().get("totalQuestions"), "Total questions")
        set_total_questions(plan, total_questions)
    except ValueError as e:
        return _error(str(e))

    store_plan(plan)
    return _plan_response(plan)


@admin_bp.route("/mock-tests/plan", methods=["DELETE"])
@login_required
@role_required("admin")
def close_plan():
    discard_plan()
    return jsonify({"success": True})


@admin_bp.route("/mock-tests/plan/weight", methods=["POST"])
@login_required
@role_required("admin")
def update_weight():
    plan = load_plan()
    if plan is None:
        return _no_plan()

    data = _json_body()
    try:
        index = parse_int(data.get("index"), "Chapter index")
        weight = parse_int(data.get("weight"), "Weightage")
        set_weight(plan, index, weight)
    except ValueError as e:
        return _error(str(e))

    store_plan(plan)
    return _plan_response(plan)


@admin_bp.route("/mock-tests/plan/toggle", methods=["POST"])
@login_required
@role_required("admin")
def toggle_chapter():
    plan = load_plan()
    if plan is None:
        return _no_plan()

    try:
        index = parse_int(_json_body().get("index"), "Chapter index")
        toggle_enabled(plan, index)
    except ValueError as e:
        return _error(str(e))

    store_plan(plan)
    return _plan_response(plan)


@admin_bp.route("/mock-tests/plan/download")
@login_required
@role_required("admin")
def download_plan_csv():
    plan = load_plan()
    if plan is None:
        return _no_plan()

    buffer = get_plan_as_csv(plan)
    return Response(
        buffer.getvalue(),
        mimetype="text/csv",
        headers={"Content-Disposition": "attachment; filename=mock_test_weightage.csv"}
    )


# =========================
# MOCK TEST CREATE
# =========================

@admin_bp.route("/mock-tests", methods=["POST"])
@login_required
@role_required("admin")
def create_test():
    plan = load_plan()
    if plan is None:
        return _error("Select a subject to configure chapter weightage")

    config = current_app.config
    try:
        draft = draft_from_form(_json_body(), defaults={
            "total_questions": plan.total_questions,
            "time_limit": config["DEFAULT_TIME_LIMIT"],
            "passing_score": config["DEFAULT_PASSING_SCORE"]
        })
    except ValueError as e:
        return _error(str(e))

    try:
        summary = create_mock_test(
            current_api_session(), draft, plan,
            tz_name=config["TIMEZONE"]
        )
    except MockTestSubmissionError as e:
        return _error(str(e))
    except SessionExpiredError as e:
        # token no longer valid, force re-authentication
        session.clear()
        return _error(e.message, 401)
    except ApiError as e:
        logger.error("Failed to create mock test '%s': %s", draft.title, e.message)
        return _error(f"Failed to create test: {e.message}", 502)

    discard_plan()
    return jsonify({
        "success": True,
        "message": "Mock test created successfully",
        "mockTest": summary
    }), 201
