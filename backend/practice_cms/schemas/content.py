"""
Practice CMS Backend — Content Resource Schemas
===============================================

What:  Create / Update / Response models for every orderable content type.
How:   Each type has three schemas:
         *Create   — required fields enforced (missing → 400)
         *Update   — every field optional; only fields the client sent are
                     applied (model_dump(exclude_unset=True))
         *Response — what GET/POST/PUT return
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from practice_cms.schemas.common import CamelModel


class OrderedCreate(CamelModel):
    order: int = 0


class OrderedUpdate(CamelModel):
    order: Optional[int] = None


class OrderedResponse(CamelModel):
    id: int
    order: int
    created_at: datetime


# ── Testimonials ──────────────────────────────────────────────────────────

class TestimonialCreate(OrderedCreate):
    name: str = Field(min_length=1)
    service: str = Field(min_length=1)
    testimonial: str = Field(min_length=1)
    rating: int = Field(default=5, ge=1, le=5)
    photo: Optional[str] = None
    is_active: bool = True


class TestimonialUpdate(OrderedUpdate):
    name: Optional[str] = Field(default=None, min_length=1)
    service: Optional[str] = Field(default=None, min_length=1)
    testimonial: Optional[str] = Field(default=None, min_length=1)
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    photo: Optional[str] = None
    is_active: Optional[bool] = None


class TestimonialResponse(OrderedResponse):
    name: str
    service: str
    testimonial: str
    rating: int
    photo: Optional[str] = None
    is_active: bool


# ── FAQ ───────────────────────────────────────────────────────────────────

class FaqItemCreate(OrderedCreate):
    question: str = Field(min_length=1)
    answer: str = Field(min_length=1)
    is_active: bool = True


class FaqItemUpdate(OrderedUpdate):
    question: Optional[str] = Field(default=None, min_length=1)
    answer: Optional[str] = Field(default=None, min_length=1)
    is_active: Optional[bool] = None


class FaqItemResponse(OrderedResponse):
    question: str
    answer: str
    is_active: bool


# ── Services ──────────────────────────────────────────────────────────────

class ServiceCreate(OrderedCreate):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    icon: str = Field(min_length=1)
    gradient: str = Field(min_length=1)
    price: Optional[str] = None
    duration: Optional[str] = None
    show_price: bool = False
    show_duration: bool = False
    is_active: bool = True


class ServiceUpdate(OrderedUpdate):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    icon: Optional[str] = Field(default=None, min_length=1)
    gradient: Optional[str] = Field(default=None, min_length=1)
    price: Optional[str] = None
    duration: Optional[str] = None
    show_price: Optional[bool] = None
    show_duration: Optional[bool] = None
    is_active: Optional[bool] = None


class ServiceResponse(OrderedResponse):
    title: str
    description: str
    icon: str
    gradient: str
    price: Optional[str] = None
    duration: Optional[str] = None
    show_price: bool
    show_duration: bool
    is_active: bool


# ── Photo carousel ────────────────────────────────────────────────────────

class PhotoCreate(OrderedCreate):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    image_url: str = Field(min_length=1)
    show_text: bool = True
    is_active: bool = True


class PhotoUpdate(OrderedUpdate):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    image_url: Optional[str] = Field(default=None, min_length=1)
    show_text: Optional[bool] = None
    is_active: Optional[bool] = None


class PhotoResponse(OrderedResponse):
    title: str
    description: Optional[str] = None
    image_url: str
    show_text: bool
    is_active: bool


# ── Specialties ───────────────────────────────────────────────────────────

class SpecialtyCreate(OrderedCreate):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    icon: str = "Brain"
    icon_color: str = "#ec4899"
    is_active: bool = True


class SpecialtyUpdate(OrderedUpdate):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    icon: Optional[str] = None
    icon_color: Optional[str] = None
    is_active: Optional[bool] = None


class SpecialtyResponse(OrderedResponse):
    title: str
    description: str
    icon: str
    icon_color: str
    is_active: bool


# ── Custom codes ──────────────────────────────────────────────────────────

CodeLocation = Literal["header", "body"]


class CustomCodeCreate(OrderedCreate):
    name: str = Field(min_length=1)
    code: str = Field(min_length=1)
    location: CodeLocation
    is_active: bool = True


class CustomCodeUpdate(OrderedUpdate):
    name: Optional[str] = Field(default=None, min_length=1)
    code: Optional[str] = Field(default=None, min_length=1)
    location: Optional[CodeLocation] = None
    is_active: Optional[bool] = None


class CustomCodeResponse(OrderedResponse):
    name: str
    code: str
    location: str
    is_active: bool


# ── Articles ──────────────────────────────────────────────────────────────
# isPublished is accepted on create/update so the admin form can save and
# publish in one step; publishedAt itself is only ever set by the server.

class ArticleCreate(OrderedCreate):
    title: str = Field(min_length=1)
    subtitle: Optional[str] = None
    badge: Optional[str] = None
    description: str = Field(min_length=1)
    content: str = Field(min_length=1)
    card_image: Optional[str] = None
    author: str = Field(min_length=1)
    co_authors: Optional[str] = None
    institution: Optional[str] = None
    article_references: Optional[str] = None
    doi: Optional[str] = None
    keywords: Optional[str] = None
    category: str = "Psicologia"
    reading_time: Optional[int] = Field(default=None, ge=0)
    show_contact_button: bool = False
    contact_button_text: Optional[str] = "Entrar em Contato"
    contact_button_url: Optional[str] = None
    is_published: bool = False
    is_featured: bool = False


class ArticleUpdate(OrderedUpdate):
    title: Optional[str] = Field(default=None, min_length=1)
    subtitle: Optional[str] = None
    badge: Optional[str] = None
    description: Optional[str] = Field(default=None, min_length=1)
    content: Optional[str] = Field(default=None, min_length=1)
    card_image: Optional[str] = None
    author: Optional[str] = Field(default=None, min_length=1)
    co_authors: Optional[str] = None
    institution: Optional[str] = None
    article_references: Optional[str] = None
    doi: Optional[str] = None
    keywords: Optional[str] = None
    category: Optional[str] = None
    reading_time: Optional[int] = Field(default=None, ge=0)
    show_contact_button: Optional[bool] = None
    contact_button_text: Optional[str] = None
    contact_button_url: Optional[str] = None
    is_published: Optional[bool] = None
    is_featured: Optional[bool] = None


class ArticleResponse(OrderedResponse):
    title: str
    subtitle: Optional[str] = None
    badge: Optional[str] = None
    description: str
    content: str
    card_image: Optional[str] = None
    author: str
    co_authors: Optional[str] = None
    institution: Optional[str] = None
    article_references: Optional[str] = None
    doi: Optional[str] = None
    keywords: Optional[str] = None
    category: str
    reading_time: Optional[int] = None
    show_contact_button: bool
    contact_button_text: Optional[str] = None
    contact_button_url: Optional[str] = None
    is_published: bool
    is_featured: bool
    published_at: Optional[datetime] = None
    updated_at: datetime
