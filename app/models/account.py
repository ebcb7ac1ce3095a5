"""
SQLAlchemy models for admin users and customers
"""
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime
from sqlalchemy.sql import func
from app.database import Base


class AdminUser(Base):
    """Admin panel account"""
    
    __tablename__ = "admin_users"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    username = Column(String(100), unique=True, nullable=False)
    password = Column(String(255), nullable=False)  # bcrypt hash
    email = Column(String(255), unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    
    def __repr__(self):
        return f"<AdminUser(id={self.id}, username='{self.username}')>"


class Customer(Base):
    """Store customer"""
    
    __tablename__ = "customers"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, nullable=True, index=True)
    password = Column(String(255), nullable=True)  # bcrypt hash
    address = Column(Text, nullable=True)
    is_registered = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    
    def __repr__(self):
        return f"<Customer(id={self.id}, email='{self.email}', is_registered={self.is_registered})>"
