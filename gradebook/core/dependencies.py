"""FastAPI dependency injection utilities."""

from typing import Annotated

from fastapi import Depends, Header, Request
from sqlalchemy import select

from gradebook.core.database import DbSession
from gradebook.core.exceptions import AuthenticationError, PermissionDeniedError
from gradebook.core.security import verify_access_token
from gradebook.models.account import Account, AccountRole


def get_current_account(
    db: DbSession,
    authorization: str = Header(..., description="Bearer token"),
) -> Account:
    """Extract and validate the calling account from its JWT token."""
    if not authorization.startswith("Bearer "):
        raise AuthenticationError("Invalid authorization header format")

    token = authorization[7:]  # Remove "Bearer " prefix
    payload = verify_access_token(token)

    if not payload:
        raise AuthenticationError("Invalid or expired token")

    email = payload.get("sub")
    if not email:
        raise AuthenticationError("Invalid token payload")

    result = db.execute(select(Account).where(Account.email == email))
    account = result.scalar_one_or_none()

    if not account:
        raise AuthenticationError("Account not found")

    if payload.get("role") != account.role.value:
        raise AuthenticationError("Token role does not match account")

    return account


def require_role(role: AccountRole):
    """Dependency factory that requires the caller to hold a given role."""

    def check_role(
        account: Annotated[Account, Depends(get_current_account)],
    ) -> Account:
        if account.role != role:
            raise PermissionDeniedError(
                f"{role.value.title()} access required",
                required_role=role.value,
            )
        return account

    return check_role


def get_client_ip(request: Request) -> str | None:
    """Address of the caller, recorded on audit entries."""
    return request.client.host if request.client else None


# Type aliases for dependency injection
ClientIp = Annotated[str | None, Depends(get_client_ip)]
CurrentStudent = Annotated[Account, Depends(require_role(AccountRole.STUDENT))]
