import requests
from flask import current_app, session

from cfa_admin.models.weightage import WeightagePlan
from cfa_admin.services.api_client import ApiSession
from cfa_admin.services.weightage_service import plan_from_dict, plan_to_dict

PLAN_SESSION_KEY = "mock_test_plan"
HTTP_EXTENSION_KEY = "backend_http"


def backend_http() -> requests.Session:
    """
    One pooled HTTP session per app, created on first use.
    """
    http = current_app.extensions.get(HTTP_EXTENSION_KEY)
    if http is None:
        http = requests.Session()
        current_app.extensions[HTTP_EXTENSION_KEY] = http
    return http


def current_api_session() -> ApiSession:
    return ApiSession(
        current_app.config["BACKEND_BASE_URL"],
        token=session.get("auth_token"),
        timeout=current_app.config["BACKEND_TIMEOUT"],
        http=backend_http()
    )


# ----------------------------
# WEIGHTAGE PLAN (owned by the admin's session)
# ----------------------------

def load_plan():
    data = session.get(PLAN_SESSION_KEY)
    return plan_from_dict(data) if data else None


def store_plan(plan: WeightagePlan):
    session[PLAN_SESSION_KEY] = plan_to_dict(plan)


def discard_plan():
    session.pop(PLAN_SESSION_KEY, None)
