"""
Practice CMS Backend — Resource Registry
========================================

What:  The table of orderable content types: URL slug → service + schemas.
Why:   Routes for all types are generated from this table (routes/resources.py),
       so adding a content type means adding a model, three schemas and
       one entry here.
"""

from dataclasses import dataclass
from typing import Dict, Type

from practice_cms.models import FaqItem, PhotoCarouselItem, Service, Specialty, Testimonial
from practice_cms.schemas import content
from practice_cms.schemas.common import CamelModel
from practice_cms.services.article_service import article_service
from practice_cms.services.custom_code_service import custom_code_service
from practice_cms.services.ordered_resource import OrderedResourceService


@dataclass(frozen=True)
class ResourceDefinition:
    slug: str
    service: OrderedResourceService
    create_schema: Type[CamelModel]
    update_schema: Type[CamelModel]
    response_schema: Type[CamelModel]


testimonial_service = OrderedResourceService(Testimonial, label="testimonial")
faq_service = OrderedResourceService(FaqItem, label="faq item")
service_service = OrderedResourceService(Service, label="service")
photo_service = OrderedResourceService(PhotoCarouselItem, label="photo")
specialty_service = OrderedResourceService(Specialty, label="specialty")


RESOURCES: Dict[str, ResourceDefinition] = {
    definition.slug: definition
    for definition in (
        ResourceDefinition(
            "testimonials",
            testimonial_service,
            content.TestimonialCreate,
            content.TestimonialUpdate,
            content.TestimonialResponse,
        ),
        ResourceDefinition(
            "faq",
            faq_service,
            content.FaqItemCreate,
            content.FaqItemUpdate,
            content.FaqItemResponse,
        ),
        ResourceDefinition(
            "services",
            service_service,
            content.ServiceCreate,
            content.ServiceUpdate,
            content.ServiceResponse,
        ),
        ResourceDefinition(
            "photo-carousel",
            photo_service,
            content.PhotoCreate,
            content.PhotoUpdate,
            content.PhotoResponse,
        ),
        ResourceDefinition(
            "specialties",
            specialty_service,
            content.SpecialtyCreate,
            content.SpecialtyUpdate,
            content.SpecialtyResponse,
        ),
        ResourceDefinition(
            "articles",
            article_service,
            content.ArticleCreate,
            content.ArticleUpdate,
            content.ArticleResponse,
        ),
        ResourceDefinition(
            "custom-codes",
            custom_code_service,
            content.CustomCodeCreate,
            content.CustomCodeUpdate,
            content.CustomCodeResponse,
        ),
    )
}
