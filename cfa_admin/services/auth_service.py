from cfa_admin.services.api_client import ApiError, ApiSession, SessionExpiredError, post_json

ADMIN_LOGIN_PATH = "/api/auth/admin/login"


def authenticate_admin(api_session: ApiSession, username: str, password: str):
    """
    Authenticate admin against the backend using username & password.
    Returns {"token": ..., "user": ...} if valid, else None.
    Network / server failures propagate as ApiError.
    """
    if not username or not password:
        return None

    try:
        body = post_json(api_session, ADMIN_LOGIN_PATH, {"username": username, "password": password})
    except SessionExpiredError:
        return None
    except ApiError as e:
        if e.status_code is not None and e.status_code < 500:
            return None
        raise

    data = body.get("data") or {}
    token = data.get("token")
    if not token:
        return None

    return {"token": token, "user": data.get("user") or {}}
