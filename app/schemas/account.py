"""
Pydantic schemas for admin and customer accounts
"""
from pydantic import BaseModel, Field, EmailStr, ConfigDict
from typing import Optional


class AdminLogin(BaseModel):
    """Admin login credentials"""
    username: str
    password: str


class AdminResponse(BaseModel):
    """Public admin profile"""
    id: int
    username: str
    email: str
    
    model_config = ConfigDict(from_attributes=True)


class AdminLoginResponse(BaseModel):
    message: str = "Login successful"
    user: AdminResponse


class CustomerRegister(BaseModel):
    """Schema for customer registration"""
    name: str = Field(..., max_length=255, description="Full name")
    email: EmailStr = Field(..., description="Email address")
    phone: str = Field(..., max_length=50, description="Phone number")
    password: str = Field(..., description="Plain text password (stored hashed)")
    address: Optional[str] = Field(None, description="Delivery address")


class CustomerLogin(BaseModel):
    """Customer login credentials"""
    email: EmailStr
    password: str


class CustomerResponse(BaseModel):
    """Public customer profile"""
    id: int
    name: str
    email: Optional[str]
    phone: str
    address: Optional[str]
    
    model_config = ConfigDict(from_attributes=True)


class CustomerAuthResponse(BaseModel):
    message: str
    customer: CustomerResponse
