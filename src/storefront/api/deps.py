"""Request-scoped dependencies and error translation for the HTTP surface."""

from fastapi import Depends, Header, HTTPException
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.auth.session import AuthSession
from storefront.shared.errors import BackendError, NotFound, StorefrontError, Unauthenticated
from storefront.shared.result import Err

_STATUS_CODES = {
    Unauthenticated: 401,
    NotFound: 404,
    BackendError: 502,
}


def get_session(x_user_id: str | None = Header(None)) -> AuthSession:
    """The caller's session, identified by the `X-User-Id` header."""
    return AuthSession(user_id=x_user_id or None)


def require_admin(session: AuthSession = Depends(get_session)) -> AuthSession:
    if not session.is_authenticated:
        raise HTTPException(status_code=401, detail="Please sign in to continue")
    if not session.is_admin():
        raise HTTPException(status_code=403, detail="Admin access required")
    return session


def http_error(exc: Exception) -> HTTPException:
    """Translate a domain or application failure into an HTTP error."""
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=422, detail=exc.messages)
    if isinstance(exc, ObjectNotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, StorefrontError):
        for exc_cls, status_code in _STATUS_CODES.items():
            if isinstance(exc, exc_cls):
                return HTTPException(status_code=status_code, detail=exc.message)
    return HTTPException(status_code=502, detail=str(exc))


def unwrap_or_raise(result):
    """Value of an `Ok`, or the HTTP error matching an `Err`."""
    if isinstance(result, Err):
        raise http_error(result.as_exception())
    return result.value
