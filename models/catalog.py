# models/catalog.py
from pydantic import BaseModel
from typing import Optional


class SubjectCreate(BaseModel):
    name: str


class CategoryCreate(BaseModel):
    name: str


class Subject(BaseModel):
    type: str = "subject"
    name: str
    createdAt: str


class Category(BaseModel):
    type: str = "category"
    name: str
    subject: Optional[str] = None
    createdAt: str
