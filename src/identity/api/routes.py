"""FastAPI routes for the Identity domain: customer accounts, staff and the
customer directory."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from identity.api.schemas import (
    BootstrapRequest,
    CreateAddressRequest,
    CreateStaffRequest,
    LoginRequest,
    RegisterRequest,
    StaffLoginRequest,
    UpdateAddressRequest,
    UpdateProfileRequest,
    UpdateStaffRequest,
    WishlistRequest,
)
from identity.customer.directory import list_customers
from identity.staff.authentication import issue_staff_token, login_staff
from identity.staff.management import add_staff, bootstrap_superadmin, delete_staff, list_staff, update_staff
from identity.user.address import add_address, delete_address, list_addresses, update_address
from identity.user.profile import get_profile, update_profile
from identity.user.registration import login_user, register_user
from identity.user.wishlist import add_to_wishlist, list_wishlist, remove_from_wishlist
from shared.auth import Principal, get_current_customer, require_admin, require_staff, require_superuser
from shared.database import get_session


# ---------------------------------------------------------------------------
# Customer accounts
# ---------------------------------------------------------------------------
auth_router = APIRouter(prefix="/api/auth", tags=["auth"])


@auth_router.post("/register", status_code=201)
async def register(body: RegisterRequest, session: Session = Depends(get_session)):
    user = register_user(session, name=body.name, email=body.email, password=body.password, phone=body.phone)
    return {"success": True, "user": user.to_dict()}


@auth_router.post("/login")
async def login(body: LoginRequest, session: Session = Depends(get_session)):
    user, token = login_user(session, body.email, body.password)
    return {"success": True, "token": token, "token_type": "bearer", "user": user.to_dict()}


profile_router = APIRouter(prefix="/api/user/profile", tags=["profile"])


@profile_router.get("")
async def read_profile(session: Session = Depends(get_session), customer: Principal = Depends(get_current_customer)):
    return {"success": True, "user": get_profile(session, customer.subject).to_dict()}


@profile_router.put("")
async def edit_profile(
    body: UpdateProfileRequest,
    session: Session = Depends(get_session),
    customer: Principal = Depends(get_current_customer),
):
    user = update_profile(session, customer.subject, body.model_dump(exclude_unset=True))
    return {"success": True, "user": user.to_dict()}


address_router = APIRouter(prefix="/api/addresses", tags=["addresses"])


@address_router.get("")
async def get_addresses(session: Session = Depends(get_session), customer: Principal = Depends(get_current_customer)):
    return {"success": True, "addresses": [a.to_dict() for a in list_addresses(session, customer.subject)]}


@address_router.post("", status_code=201)
async def create_address(
    body: CreateAddressRequest,
    session: Session = Depends(get_session),
    customer: Principal = Depends(get_current_customer),
):
    address = add_address(session, customer.subject, body.model_dump())
    return {"success": True, "address": address.to_dict()}


@address_router.put("/{address_id}")
async def edit_address(
    address_id: str,
    body: UpdateAddressRequest,
    session: Session = Depends(get_session),
    customer: Principal = Depends(get_current_customer),
):
    address = update_address(session, customer.subject, address_id, body.model_dump(exclude_unset=True))
    return {"success": True, "address": address.to_dict()}


@address_router.delete("/{address_id}")
async def remove_address(
    address_id: str,
    session: Session = Depends(get_session),
    customer: Principal = Depends(get_current_customer),
):
    delete_address(session, customer.subject, address_id)
    return {"success": True, "message": "Address deleted successfully"}


wishlist_router = APIRouter(prefix="/api/wishlist", tags=["wishlist"])


@wishlist_router.get("")
async def get_wishlist(session: Session = Depends(get_session), customer: Principal = Depends(get_current_customer)):
    return {"success": True, "items": [item.to_dict() for item in list_wishlist(session, customer.subject)]}


@wishlist_router.post("")
async def add_wishlist_item(
    body: WishlistRequest,
    session: Session = Depends(get_session),
    customer: Principal = Depends(get_current_customer),
):
    item = add_to_wishlist(session, customer.subject, body.product_id)
    return {"success": True, "item": item.to_dict()}


@wishlist_router.delete("")
async def remove_wishlist_item(
    product_id: str | None = None,
    session: Session = Depends(get_session),
    customer: Principal = Depends(get_current_customer),
):
    remove_from_wishlist(session, customer.subject, product_id)
    return {"success": True}


# ---------------------------------------------------------------------------
# Staff
# ---------------------------------------------------------------------------
admin_auth_router = APIRouter(prefix="/api/admin", tags=["admin-auth"])


@admin_auth_router.post("/login")
async def staff_login(body: StaffLoginRequest, session: Session = Depends(get_session)):
    staff, token = login_staff(session, body.username, body.password)
    return {"success": True, "token": token, "token_type": "bearer", "user": staff.to_dict()}


@admin_auth_router.get("/me")
async def whoami(staff: Principal = Depends(require_staff)):
    return {
        "success": True,
        "authenticated": True,
        "user": {"username": staff.subject, "role": staff.role, "name": staff.name, "email": staff.email},
    }


@admin_auth_router.post("/bootstrap", status_code=201)
async def bootstrap(body: BootstrapRequest, session: Session = Depends(get_session)):
    staff = bootstrap_superadmin(session, body.staff_fields())
    return {
        "success": True,
        "message": "First admin created successfully",
        "user": staff.to_dict(),
        "token": issue_staff_token(staff),
    }


worker_router = APIRouter(prefix="/api/admin/workers", tags=["admin-workers"])


@worker_router.get("")
async def get_workers(session: Session = Depends(get_session), staff: Principal = Depends(require_superuser)):
    return {"success": True, "workers": [member.to_dict() for member in list_staff(session)]}


@worker_router.post("", status_code=201)
async def create_worker(
    body: CreateStaffRequest,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_superuser),
):
    worker = add_staff(session, body.model_dump())
    return {"success": True, "message": "Worker added successfully", "worker": worker.to_dict()}


@worker_router.put("/{username}")
async def edit_worker(
    username: str,
    body: UpdateStaffRequest,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_superuser),
):
    worker = update_staff(session, username, body.model_dump(exclude_unset=True), staff)
    return {"success": True, "message": "Worker updated successfully", "worker": worker.to_dict()}


@worker_router.delete("/{username}")
async def remove_worker(
    username: str,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_superuser),
):
    delete_staff(session, username, staff)
    return {"success": True, "message": "Worker deleted successfully"}


customer_router = APIRouter(prefix="/api/admin/customers", tags=["admin-customers"])


@customer_router.get("")
async def get_customers(session: Session = Depends(get_session), staff: Principal = Depends(require_admin)):
    return {"success": True, "customers": list_customers(session)}
