import secrets

from fastapi import Depends, HTTPException
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from .config import ADMIN_PASSWORD, ADMIN_USER

security = HTTPBasic(auto_error=False)


def _credentials_ok(credentials: HTTPBasicCredentials | None) -> bool:
    if credentials is None:
        return False
    user_ok = secrets.compare_digest(credentials.username.encode("utf-8"), ADMIN_USER.encode("utf-8"))
    password_ok = secrets.compare_digest(credentials.password.encode("utf-8"), ADMIN_PASSWORD.encode("utf-8"))
    return user_ok and password_ok


def require_admin(credentials: HTTPBasicCredentials | None = Depends(security)):
    if not _credentials_ok(credentials):
        raise HTTPException(
            status_code=401,
            detail="Unauthorized",
            headers={"WWW-Authenticate": 'Basic realm="Museum Admin"'},
        )
