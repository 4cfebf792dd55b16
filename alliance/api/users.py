"""Current user, user pages and password setup, with per-role edit rules."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from alliance.api.deps import get_authenticator, get_user_service, require_user
from alliance.auth.authenticator import Authenticator
from alliance.auth.roles import UserRole, can_grant, can_manage_users, can_view_settings
from alliance.models import User
from alliance.schemas.auth import (
    CurrentUser,
    MeResponse,
    NavLink,
    PasswordSetRequest,
    UserCreate,
    UserDetail,
    UserUpdate,
)
from alliance.services.users import UserService

logger = logging.getLogger(__name__)
router = APIRouter()

NAV_LINKS = (
    NavLink(name="Add Donation", href="/transactions/new"),
    NavLink(name="Accounts", href="/accounts"),
    NavLink(name="Donors", href="/donors"),
    NavLink(name="Reimbursements", href="/reimbursements"),
    NavLink(name="Users", href="/users"),
)
SETTINGS_LINK = NavLink(name="Settings", href="/settings")


def _current_user(user: User) -> CurrentUser:
    return CurrentUser(
        id=user.id,
        username=user.username,
        role=user.role,
        first_name=user.contact.first_name,
        last_name=user.contact.last_name,
    )


def _user_detail(user: User) -> UserDetail:
    return UserDetail(
        **_current_user(user).model_dump(),
        email=user.contact.email,
        has_password=user.password is not None,
    )


def _denied(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=message)


def _get_user_or_404(users: UserService, user_id: int) -> User:
    user = users.get_user_by_id(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.get("/me", response_model=MeResponse)
def get_me(
    current_user: Annotated[User, Depends(require_user())],
) -> MeResponse:
    """The signed-in user and the navigation links their role may see."""
    links = list(NAV_LINKS)
    if can_view_settings(current_user.role):
        links.append(SETTINGS_LINK)
    return MeResponse(user=_current_user(current_user), links=links)


@router.post("/users", response_model=UserDetail, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreate,
    current_user: Annotated[User, Depends(require_user(UserRole.ADMIN))],
    users: Annotated[UserService, Depends(get_user_service)],
) -> UserDetail:
    """Create a user with a contact profile and optional password (admins only)."""
    if not can_grant(current_user.role, body.role):
        raise _denied("You do not have permission to create a Super Admin.")
    if users.get_user_by_username(body.username) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already exists.")
    user = users.create_user(
        username=body.username,
        first_name=body.first_name,
        last_name=body.last_name,
        role=body.role,
        password=body.password,
    )
    return _user_detail(user)


@router.get("/users/{user_id}", response_model=UserDetail)
def get_user(
    user_id: int,
    current_user: Annotated[User, Depends(require_user())],
    users: Annotated[UserService, Depends(get_user_service)],
) -> UserDetail:
    """A user's page; plain users can only see their own."""
    if not can_manage_users(current_user.role) and current_user.id != user_id:
        raise _denied("You do not have permission to view this page")
    return _user_detail(_get_user_or_404(users, user_id))


@router.patch("/users/{user_id}", response_model=UserDetail)
def update_user(
    user_id: int,
    body: UserUpdate,
    current_user: Annotated[User, Depends(require_user())],
    users: Annotated[UserService, Depends(get_user_service)],
) -> UserDetail:
    """
    Update names, username or role.

    Plain users may only change their own names. Nobody changes their own role, and
    only a SUPERADMIN may grant or revoke SUPERADMIN or edit a SUPERADMIN's account.
    """
    target = _get_user_or_404(users, user_id)
    role_changed = body.role is not None and body.role != target.role
    username_changed = body.username is not None and body.username.strip() != target.username

    if not can_manage_users(current_user.role):
        if current_user.id != target.id:
            raise _denied("You do not have permission to edit this user.")
        if role_changed or username_changed:
            raise _denied("You do not have permission to edit this field.")
    elif current_user.id != target.id and not can_grant(current_user.role, target.role):
        raise _denied("You do not have permission to edit this user.")

    if role_changed:
        if current_user.id == target.id:
            raise _denied("You cannot edit your own role.")
        if not can_grant(current_user.role, body.role) or not can_grant(current_user.role, target.role):
            raise _denied("You do not have permission to create a Super Admin.")

    existing = users.get_user_by_username(body.username) if username_changed else None
    if existing is not None and existing.id != target.id:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already exists.")

    updated = users.update_user(
        target,
        first_name=body.first_name,
        last_name=body.last_name,
        username=body.username if username_changed else None,
        role=body.role if role_changed else None,
    )
    if role_changed:
        logger.info(
            "Role changed: user_id=%s role=%s by user_id=%s",
            updated.id,
            updated.role.value,
            current_user.id,
        )
    return _user_detail(updated)


@router.put("/users/{user_id}/password", response_model=UserDetail)
def set_user_password(
    user_id: int,
    body: PasswordSetRequest,
    current_user: Annotated[User, Depends(require_user())],
    users: Annotated[UserService, Depends(get_user_service)],
    authenticator: Annotated[Authenticator, Depends(get_authenticator)],
) -> UserDetail:
    """Set up or reset a password: your own, or one you could have granted the role of."""
    target = _get_user_or_404(users, user_id)
    if current_user.id != target.id and not can_grant(current_user.role, target.role):
        raise _denied("You do not have permission to reset this password.")
    authenticator.set_password(target, body.password)
    users.db.refresh(target)
    return _user_detail(target)
