"""
Account API endpoints: admin login, customer registration and login
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.database import get_db
from app.exceptions import ValidationError, EmailAlreadyRegisteredError, InvalidCredentialsError, PersistenceError
from app.services.account_service import AccountService
from app.schemas.account import (
    AdminLogin,
    AdminLoginResponse,
    CustomerRegister,
    CustomerLogin,
    CustomerAuthResponse
)

router = APIRouter(prefix="/api", tags=["accounts"])


def get_account_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
) -> AccountService:
    """Dependency to get AccountService instance"""
    return AccountService(db, bcrypt_rounds=settings.BCRYPT_ROUNDS)


@router.post("/admin/login", response_model=AdminLoginResponse, summary="Admin login")
def admin_login(
    credentials: AdminLogin,
    service: AccountService = Depends(get_account_service)
):
    try:
        admin = service.authenticate_admin(credentials.username, credentials.password)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    return AdminLoginResponse(user=admin)


@router.post(
    "/customers/register",
    response_model=CustomerAuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register customer"
)
def register_customer(
    data: CustomerRegister,
    service: AccountService = Depends(get_account_service)
):
    """
    Register a new customer account
    
    - **name**, **email**, **phone**, **password**: required
    - **address**: optional delivery address
    """
    try:
        customer = service.register_customer(data)
    except (ValidationError, EmailAlreadyRegisteredError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return CustomerAuthResponse(message="Registration successful", customer=customer)


@router.post("/customers/login", response_model=CustomerAuthResponse, summary="Customer login")
def customer_login(
    credentials: CustomerLogin,
    service: AccountService = Depends(get_account_service)
):
    try:
        customer = service.authenticate_customer(str(credentials.email), credentials.password)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    return CustomerAuthResponse(message="Login successful", customer=customer)
