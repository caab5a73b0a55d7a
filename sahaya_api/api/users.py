"""Account routes: register, login, profile and administration."""
import math
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from sahaya_api.api.deps import get_current_user, get_optional_user, require_admin, require_master_admin
from sahaya_api.api.schemas import (
    Envelope,
    LoginRequest,
    LoginResult,
    PageEnvelope,
    Pagination,
    UserRegister,
    UserResponse,
    UserUpdate,
)
from sahaya_api.database import get_db
from sahaya_api.exceptions import AuthorizationError, NotFoundError
from sahaya_api.models.enums import UserRole
from sahaya_api.security import Actor
from sahaya_api.services.entity_service import MAX_PAGE_LIMIT
from sahaya_api.services.users import UserService

router = APIRouter(prefix="/users", tags=["Users"])


def is_master_admin(actor: Optional[Actor]) -> bool:
    return actor is not None and actor.role == UserRole.L1_MASTER_ADMIN.value


@router.post("/register", response_model=Envelope[UserResponse], status_code=status.HTTP_201_CREATED)
def register(
    payload: UserRegister,
    db: Session = Depends(get_db),
    actor: Optional[Actor] = Depends(get_optional_user),
):
    """Open registration. Only a master admin may create a non-citizen account."""
    if payload.role != UserRole.L3_CITIZEN and not is_master_admin(actor):
        raise AuthorizationError("Only a master admin can assign administrative roles")
    user = UserService(db).register(payload.model_dump())
    return Envelope[UserResponse](message="User registered successfully", data=UserResponse.model_validate(user))


@router.post("/login", response_model=Envelope[LoginResult])
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    token, user = UserService(db).login(payload.username, payload.password)
    return Envelope[LoginResult](
        message="Login successful",
        data=LoginResult(token=token, user=UserResponse.model_validate(user)),
    )


@router.get("/me", response_model=Envelope[UserResponse])
def me(db: Session = Depends(get_db), actor: Actor = Depends(get_current_user)):
    user = UserService(db).get(actor.user_id)
    if not user:
        raise NotFoundError("User not found")
    return Envelope[UserResponse](data=UserResponse.model_validate(user))


@router.get("", response_model=PageEnvelope[UserResponse])
def list_users(
    request: Request,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1),
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_admin),
):
    """Filter by role, department, district, is_active."""
    users, total = UserService(db).list(request.query_params, page=page, limit=limit)
    limit = min(limit, MAX_PAGE_LIMIT)
    return {
        "success": True,
        "data": [UserResponse.model_validate(user) for user in users],
        "pagination": Pagination(page=page, limit=limit, total=total, pages=math.ceil(total / limit)),
    }


@router.get("/{user_id}", response_model=Envelope[UserResponse])
def get_user(user_id: int, db: Session = Depends(get_db), actor: Actor = Depends(get_current_user)):
    if actor.user_id != user_id and actor.role not in (UserRole.L1_MASTER_ADMIN.value, UserRole.L2_EXEC_ADMIN.value):
        raise AuthorizationError()
    user = UserService(db).get(user_id)
    if not user:
        raise NotFoundError("User not found")
    return Envelope[UserResponse](data=UserResponse.model_validate(user))


@router.put("/{user_id}", response_model=Envelope[UserResponse])
def update_user(
    user_id: int,
    payload: UserUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_user),
):
    """Users edit their own profile; a master admin may edit anyone, including role and active flag."""
    master = is_master_admin(actor)
    if actor.user_id != user_id and not master:
        raise AuthorizationError()
    user = UserService(db).update(user_id, payload.model_dump(exclude_unset=True), allow_admin_fields=master)
    if not user:
        raise NotFoundError("User not found")
    return Envelope[UserResponse](message="User updated successfully", data=UserResponse.model_validate(user))


@router.delete("/{user_id}", response_model=Envelope[UserResponse])
def deactivate_user(user_id: int, db: Session = Depends(get_db), actor: Actor = Depends(require_master_admin)):
    user = UserService(db).deactivate(user_id)
    if not user:
        raise NotFoundError("User not found")
    return Envelope[UserResponse](message="User deactivated successfully", data=UserResponse.model_validate(user))
