"""
Account Service - admin and customer credentials
"""
import logging
import bcrypt
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.exceptions import (
    ValidationError,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    PersistenceError
)
from app.repositories.account_repository import AccountRepository
from app.schemas.account import CustomerRegister, CustomerResponse, AdminResponse

logger = logging.getLogger(__name__)


def hash_password(password: str, rounds: int = 12) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    if not password_hash:
        return False
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


class AccountService:
    """Service layer for registration and login"""
    
    def __init__(self, db: Session, bcrypt_rounds: int = 12):
        self.db = db
        self.repository = AccountRepository(db)
        self.bcrypt_rounds = bcrypt_rounds
    
    def register_customer(self, data: CustomerRegister) -> CustomerResponse:
        """
        Register a new customer
        
        Raises:
            ValidationError: If name, phone or password is blank
            EmailAlreadyRegisteredError: If the email is taken
            PersistenceError: Storage failure
        """
        name = data.name.strip()
        phone = data.phone.strip()
        if not name or not phone or not data.password:
            raise ValidationError("All fields are required")
        
        email = str(data.email).lower()
        if self.repository.get_customer_by_email(email):
            logger.info("Registration rejected, email already registered: %s", email)
            raise EmailAlreadyRegisteredError(email)
        
        try:
            customer = self.repository.create_customer({
                'name': name,
                'email': email,
                'phone': phone,
                'password': hash_password(data.password, self.bcrypt_rounds),
                'address': data.address,
                'is_registered': True
            })
        except IntegrityError as e:
            # Concurrent registration won the unique email constraint
            self.db.rollback()
            logger.info("Registration rejected, email already registered: %s", email)
            raise EmailAlreadyRegisteredError(email) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to register customer: %s", e, exc_info=True)
            raise PersistenceError("Failed to register, please try again") from e
        logger.info("Customer registered successfully: %s", customer.id)
        return CustomerResponse.model_validate(customer)
    
    def authenticate_customer(self, email: str, password: str) -> CustomerResponse:
        """Validate customer login; only registered customers may log in"""
        customer = self.repository.get_customer_by_email(email.lower())
        if not customer or not customer.is_registered or not verify_password(password, customer.password):
            raise InvalidCredentialsError()
        return CustomerResponse.model_validate(customer)
    
    def authenticate_admin(self, username: str, password: str) -> AdminResponse:
        """Validate admin login"""
        admin = self.repository.get_admin_by_username(username)
        if not admin or not verify_password(password, admin.password):
            raise InvalidCredentialsError()
        return AdminResponse.model_validate(admin)
    
    def ensure_admin(self, username: str, email: str, password: str) -> bool:
        """Create admin account if it does not exist yet; returns True if created"""
        if self.repository.get_admin_by_username(username):
            return False
        self.repository.create_admin(username, email, hash_password(password, self.bcrypt_rounds))
        return True
