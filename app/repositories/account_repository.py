"""
Account Repository - Data Access Layer for admins and customers
"""
from typing import Optional
from sqlalchemy.orm import Session

from app.models.account import AdminUser, Customer


class AccountRepository:
    """Repository for admin users and customers"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def get_admin_by_username(self, username: str) -> Optional[AdminUser]:
        return self.db.query(AdminUser).filter(AdminUser.username == username).first()
    
    def create_admin(self, username: str, email: str, password_hash: str) -> AdminUser:
        admin = AdminUser(username=username, email=email, password=password_hash)
        self.db.add(admin)
        self.db.commit()
        self.db.refresh(admin)
        return admin
    
    def get_customer_by_id(self, customer_id: int) -> Optional[Customer]:
        return self.db.query(Customer).filter(Customer.id == customer_id).first()
    
    def get_customer_by_email(self, email: str) -> Optional[Customer]:
        return self.db.query(Customer).filter(Customer.email == email).first()
    
    def create_customer(self, customer_data: dict) -> Customer:
        """
        Create new customer
        
        Args:
            customer_data: Dictionary with customer fields, password already hashed
        """
        customer = Customer(**customer_data)
        self.db.add(customer)
        self.db.commit()
        self.db.refresh(customer)
        return customer
