"""
Practice CMS Backend — Site Document Service
============================================

What:  Single-document settings (contact section, footer, cookie banner,
       privacy policy, terms of use) served as typed endpoints on top of the
       Config Store.
Why:   Each of these is one admin form editing one JSON document. Giving
       them a schema catches malformed saves with a 400 instead of letting
       the public site render garbage, while storage stays a plain config
       entry with the same versioning as everything else.

Document lifecycle:
    read   → stored value with unset fields filled from the defaults
             (never saved → defaults, version 0)
    write  → current document + fields the client sent, validated, stored;
             guarded by the version that was read unless the caller passes
             expectedVersion
    reset  → entry deleted; the next read serves the defaults again
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Type

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from practice_cms.exceptions import ValidationError
from practice_cms.models.mixins import utcnow
from practice_cms.schemas.common import CamelModel
from practice_cms.schemas.documents import (
    ContactSettings,
    ContactSettingsResponse,
    CookieSettings,
    CookieSettingsResponse,
    FooterSettings,
    FooterSettingsResponse,
    LegalDocument,
    LegalDocumentResponse,
    LegalDocumentWrite,
)
from practice_cms.services.config_service import config_service

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SiteDocument:
    slug: str
    key: str
    schema: Type[CamelModel]
    response_schema: Type[CamelModel]
    write_schema: Type[CamelModel]
    defaults: Dict[str, Any] = field(default_factory=dict)
    stamps_last_updated: bool = False


def _validation_error(document: SiteDocument, error: PydanticValidationError) -> ValidationError:
    return ValidationError(
        message=f"Invalid {document.slug} document",
        field="body",
        context={
            "errors": [
                {"loc": [str(part) for part in err["loc"]], "msg": err["msg"]}
                for err in error.errors()
            ]
        },
    )


class SiteDocumentService:
    """
    Read / write / reset for any SiteDocument.

    Error Handling Strategy:
        Bodies that do not validate raise ValidationError (400). A stored
        value that no longer validates is logged and read as the defaults,
        so the public site keeps rendering. Database and version errors come
        from config_service unchanged.
    """

    def _from_stored(self, document: SiteDocument, stored: Any) -> CamelModel:
        if not isinstance(stored, dict):
            stored = {}
        try:
            parsed = document.schema.model_validate(stored)
        except PydanticValidationError as e:
            logger.warning(
                "Stored %s does not match its schema, serving defaults: %s", document.key, str(e)
            )
            parsed = document.schema()
        missing = {
            name: value
            for name, value in document.defaults.items()
            if name not in parsed.model_fields_set
        }
        return parsed.model_copy(update=missing) if missing else parsed

    async def read(self, db: AsyncSession, document: SiteDocument) -> Tuple[CamelModel, int]:
        """Return (document, version). Version 0: never saved, defaults only."""
        entry = await config_service.get(db, document.key)
        if entry is None:
            return self._from_stored(document, {}), 0
        return self._from_stored(document, entry.value), entry.version

    async def respond(self, db: AsyncSession, document: SiteDocument) -> CamelModel:
        """The document as its response schema, with version and updatedAt."""
        entry = await config_service.get(db, document.key)
        if entry is None:
            return self.defaults_response(document)
        current = self._from_stored(document, entry.value)
        return document.response_schema(
            **current.model_dump(), version=entry.version, updated_at=entry.updated_at
        )

    def defaults_response(self, document: SiteDocument) -> CamelModel:
        """Response for a document that was never saved (or is unreachable)."""
        return document.response_schema(**self._from_stored(document, {}).model_dump())

    async def write(
        self,
        db: AsyncSession,
        document: SiteDocument,
        updates: Dict[str, Any],
        expected_version: Optional[int] = None,
    ) -> CamelModel:
        """
        Merge `updates` (snake_case field names) into the current document
        and store the result.

        Raises:
            ValidationError: the merged document does not validate
            ConflictError:   the document changed since it was read
        """
        current, version = await self.read(db, document)
        merged = {**current.model_dump(), **updates}
        if document.stamps_last_updated:
            merged["last_updated"] = utcnow()
        try:
            validated = document.schema.model_validate(merged)
        except PydanticValidationError as e:
            raise _validation_error(document, e)

        guard = version if expected_version is None else expected_version
        entry = await config_service.set(
            db,
            document.key,
            validated.model_dump(mode="json", by_alias=True),
            expected_version=guard,
        )
        logger.info("%s saved (version %d)", document.slug, entry.version)
        return document.response_schema(
            **validated.model_dump(), version=entry.version, updated_at=entry.updated_at
        )

    async def reset(self, db: AsyncSession, document: SiteDocument) -> CamelModel:
        """Forget the stored document; the defaults apply again."""
        await config_service.delete(db, document.key)
        logger.info("%s reset to defaults", document.slug)
        return self.defaults_response(document)


# ── Documents ─────────────────────────────────────────────────────────────

CONTACT_SETTINGS = SiteDocument(
    slug="contact-settings",
    key="contact_settings",
    schema=ContactSettings,
    response_schema=ContactSettingsResponse,
    write_schema=ContactSettings,
    defaults={
        "contact_card": {
            "title": "Entre em Contato",
            "description": "Escolha a forma mais conveniente para você",
            "icon": "Mail",
            "iconColor": "#6366f1",
            "backgroundColor": "#ffffff",
        },
        "info_card": {
            "title": "Informações de Atendimento",
            "description": "Horários e localização",
            "icon": "Info",
            "iconColor": "#059669",
            "backgroundColor": "#ffffff",
        },
    },
)

FOOTER_SETTINGS = SiteDocument(
    slug="footer-settings",
    key="footer_settings",
    schema=FooterSettings,
    response_schema=FooterSettingsResponse,
    write_schema=FooterSettings,
)

COOKIE_SETTINGS = SiteDocument(
    slug="cookie-settings",
    key="cookie_settings",
    schema=CookieSettings,
    response_schema=CookieSettingsResponse,
    write_schema=CookieSettings,
    defaults={
        "title": "Cookies & Privacidade",
        "message": (
            "Utilizamos cookies para melhorar sua experiência no site e personalizar "
            "conteúdo. Ao continuar navegando, você concorda com nossa política de privacidade."
        ),
        "accept_button_text": "Aceitar Cookies",
        "decline_button_text": "Não Aceitar",
        "privacy_link_text": "Política de Privacidade",
        "terms_link_text": "Termos de Uso",
    },
)

PRIVACY_POLICY = SiteDocument(
    slug="privacy-policy",
    key="privacy_policy",
    schema=LegalDocument,
    response_schema=LegalDocumentResponse,
    write_schema=LegalDocumentWrite,
    defaults={
        "title": "Política de Privacidade",
        "content": (
            "<h2>1. Informações que Coletamos</h2>"
            "<p>Coletamos as informações que você fornece ao preencher formulários de "
            "contato ou agendar consultas.</p>"
            "<h2>2. Seus Direitos</h2>"
            "<p>Você pode acessar, corrigir ou excluir suas informações pessoais "
            "entrando em contato conosco.</p>"
        ),
    },
    stamps_last_updated=True,
)

TERMS_OF_USE = SiteDocument(
    slug="terms-of-use",
    key="terms_of_use",
    schema=LegalDocument,
    response_schema=LegalDocumentResponse,
    write_schema=LegalDocumentWrite,
    defaults={
        "title": "Termos de Uso",
        "content": (
            "<h2>1. Aceitação dos Termos</h2>"
            "<p>Ao acessar e usar este site, você concorda com estes termos.</p>"
            "<h2>2. Uso do Site</h2>"
            "<p>Este site fornece informações sobre serviços de psicologia e deve ser "
            "usado apenas para fins legítimos.</p>"
        ),
    },
    stamps_last_updated=True,
)

DOCUMENTS: Dict[str, SiteDocument] = {
    document.slug: document
    for document in (CONTACT_SETTINGS, FOOTER_SETTINGS, COOKIE_SETTINGS, PRIVACY_POLICY, TERMS_OF_USE)
}


# ── Singleton Instance ────────────────────────────────────────────────────
site_document_service = SiteDocumentService()
