"""
Thin client for the exam-prep backend REST API.

Every call goes through an explicit ApiSession (base URL + bearer
token) instead of a token kept in global storage.
"""
import logging

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15


class ApiError(Exception):
    def __init__(self, message: str, status_code: int | None = None, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload


class SessionExpiredError(ApiError):
    pass


class ApiSession:
    def __init__(self, base_url: str, token: str | None = None, timeout: int = DEFAULT_TIMEOUT, http=None):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.http = http or requests.Session()

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers


def _error_message(body) -> str:
    if isinstance(body, dict) and body.get("message"):
        return body["message"]
    return "Unknown error"


def request_json(api_session: ApiSession, method: str, path: str, payload: dict | None = None) -> dict:
    """
    Send one request and return the decoded JSON body.

    Raises:
    - SessionExpiredError on HTTP 401
    - ApiError on transport failure, non-2xx, non-JSON body or success=false
    """
    url = api_session.url_for(path)

    try:
        response = api_session.http.request(
            method,
            url,
            json=payload,
            headers=api_session.headers(),
            timeout=api_session.timeout
        )
    except requests.RequestException as e:
        logger.error("%s %s failed: %s", method, url, e)
        raise ApiError("Network error: Failed to reach the backend. Please try again.") from e

    if response.status_code == 401:
        logger.warning("%s %s rejected the session token", method, url)
        raise SessionExpiredError("Session expired. Please log in again.", status_code=401)

    try:
        body = response.json()
    except ValueError:
        body = None

    if not response.ok:
        logger.warning("%s %s returned %s", method, url, response.status_code)
        raise ApiError(_error_message(body), status_code=response.status_code, payload=body)

    if not isinstance(body, dict):
        raise ApiError("Backend returned an invalid response", status_code=response.status_code)

    if body.get("success") is False:
        raise ApiError(_error_message(body), status_code=response.status_code, payload=body)

    return body


def post_json(api_session: ApiSession, path: str, payload: dict) -> dict:
    return request_json(api_session, "POST", path, payload)


def get_json(api_session: ApiSession, path: str) -> dict:
    return request_json(api_session, "GET", path)
