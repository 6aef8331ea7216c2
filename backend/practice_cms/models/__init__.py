"""
Practice CMS Backend — ORM Models

Importing this package registers every table with Base.metadata
(required by Alembic autogenerate and by the test suite's create_all).
"""

from practice_cms.models.admin_change import AdminChange
from practice_cms.models.article import Article
from practice_cms.models.custom_code import CODE_LOCATIONS, CustomCode
from practice_cms.models.faq_item import FaqItem
from practice_cms.models.photo import PhotoCarouselItem
from practice_cms.models.service import Service
from practice_cms.models.site_config import ConfigEntry
from practice_cms.models.specialty import Specialty
from practice_cms.models.support_message import MESSAGE_TYPES, SupportMessage
from practice_cms.models.testimonial import Testimonial

__all__ = [
    "AdminChange",
    "Article",
    "CODE_LOCATIONS",
    "ConfigEntry",
    "CustomCode",
    "FaqItem",
    "MESSAGE_TYPES",
    "PhotoCarouselItem",
    "Service",
    "Specialty",
    "SupportMessage",
    "Testimonial",
]
