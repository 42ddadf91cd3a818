"""FastAPI endpoints for the Identity domain.

``/users/me`` routes act on the caller resolved from the forwarded auth
headers; routes taking a ``user_id`` are administrative.
"""

from fastapi import APIRouter, Depends, HTTPException
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from shared.auth import ADMIN_ROLES, Actor, current_actor, require_roles

from identity.api.schemas import (
    AddAddressRequest,
    AddressIdResponse,
    AddressResponse,
    ChangeRoleRequest,
    RegisterUserRequest,
    StatusResponse,
    SuspendUserRequest,
    UpdateAddressRequest,
    UpdateProfileRequest,
    UserIdResponse,
    UserResponse,
)
from identity.user.account import ChangeRole, ReactivateUser, SuspendUser
from identity.user.addresses import AddAddress, RemoveAddress, SetDefaultAddress, UpdateAddress
from identity.user.profile import UpdateProfile
from identity.user.registration import RegisterUser
from identity.user.user import User

router = APIRouter(prefix="/users", tags=["users"])

_admin = require_roles(*ADMIN_ROLES)


def _load_user(user_id: str) -> User:
    try:
        return current_domain.repository_for(User).get(user_id)
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail="User not found")


def _address_response(address) -> AddressResponse:
    return AddressResponse(**address.snapshot())


def _user_response(user: User) -> UserResponse:
    return UserResponse(
        user_id=str(user.id),
        email=user.email.address,
        first_name=user.profile.first_name,
        last_name=user.profile.last_name,
        phone=user.profile.phone.number if user.profile.phone else None,
        role=user.role,
        status=user.status,
        registered_at=user.registered_at,
        addresses=[_address_response(a) for a in user.addresses_default_first()],
    )


@router.post("", status_code=201, response_model=UserIdResponse)
async def register_user(body: RegisterUserRequest) -> UserIdResponse:
    command = RegisterUser(
        email=body.email,
        first_name=body.first_name,
        last_name=body.last_name,
        phone=body.phone,
    )
    result = current_domain.process(command, asynchronous=False)
    return UserIdResponse(user_id=result)


@router.get("/me", response_model=UserResponse)
async def get_me(actor: Actor = Depends(current_actor)) -> UserResponse:
    return _user_response(_load_user(actor.user_id))


@router.put("/me/profile", response_model=StatusResponse)
async def update_profile(body: UpdateProfileRequest, actor: Actor = Depends(current_actor)) -> StatusResponse:
    command = UpdateProfile(
        user_id=actor.user_id,
        first_name=body.first_name,
        last_name=body.last_name,
        phone=body.phone,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Address book
# ---------------------------------------------------------------------------
@router.get("/me/addresses", response_model=list[AddressResponse])
async def list_addresses(actor: Actor = Depends(current_actor)) -> list[AddressResponse]:
    user = _load_user(actor.user_id)
    return [_address_response(a) for a in user.addresses_default_first()]


@router.post("/me/addresses", status_code=201, response_model=AddressIdResponse)
async def add_address(body: AddAddressRequest, actor: Actor = Depends(current_actor)) -> AddressIdResponse:
    command = AddAddress(
        user_id=actor.user_id,
        address_type=body.address_type,
        first_name=body.first_name,
        last_name=body.last_name,
        street=body.street,
        city=body.city,
        state=body.state,
        zip_code=body.zip_code,
        country=body.country,
        is_default=body.is_default,
    )
    result = current_domain.process(command, asynchronous=False)
    return AddressIdResponse(address_id=result)


@router.put("/me/addresses/{address_id}", response_model=StatusResponse)
async def update_address(
    address_id: str, body: UpdateAddressRequest, actor: Actor = Depends(current_actor)
) -> StatusResponse:
    command = UpdateAddress(user_id=actor.user_id, address_id=address_id, **body.model_dump())
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@router.delete("/me/addresses/{address_id}", response_model=StatusResponse)
async def remove_address(address_id: str, actor: Actor = Depends(current_actor)) -> StatusResponse:
    current_domain.process(RemoveAddress(user_id=actor.user_id, address_id=address_id), asynchronous=False)
    return StatusResponse()


@router.put("/me/addresses/{address_id}/default", response_model=StatusResponse)
async def set_default_address(address_id: str, actor: Actor = Depends(current_actor)) -> StatusResponse:
    current_domain.process(SetDefaultAddress(user_id=actor.user_id, address_id=address_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Administration
# ---------------------------------------------------------------------------
@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, actor: Actor = Depends(current_actor)) -> UserResponse:
    if actor.user_id != user_id and not actor.is_admin:
        raise HTTPException(status_code=403, detail="Forbidden")
    return _user_response(_load_user(user_id))


@router.put("/{user_id}/role", response_model=StatusResponse)
async def change_role(user_id: str, body: ChangeRoleRequest, actor: Actor = Depends(_admin)) -> StatusResponse:
    command = ChangeRole(user_id=user_id, role=body.role, changed_by=actor.user_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@router.put("/{user_id}/suspend", response_model=StatusResponse)
async def suspend_user(user_id: str, body: SuspendUserRequest, actor: Actor = Depends(_admin)) -> StatusResponse:
    command = SuspendUser(user_id=user_id, reason=body.reason, suspended_by=actor.user_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@router.put("/{user_id}/reactivate", response_model=StatusResponse)
async def reactivate_user(user_id: str, actor: Actor = Depends(_admin)) -> StatusResponse:
    current_domain.process(ReactivateUser(user_id=user_id), asynchronous=False)
    return StatusResponse()
