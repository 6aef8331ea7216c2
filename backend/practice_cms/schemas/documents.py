"""
Practice CMS Backend — Site Document Schemas
============================================

What:  Typed shapes for the single-document settings the admin edits as one
       form each: contact section, footer, cookie banner, privacy policy and
       terms of use.
How:   Each document is stored as one Config Store entry. The full schema
       validates what is stored; fields left unset fall back to the defaults
       of services.site_documents. Responses add the entry's `version` and
       `updatedAt` so forms can send `expectedVersion` back.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from practice_cms.schemas.common import CamelModel


class DocumentMeta(CamelModel):
    version: int = Field(default=0, description="0 = never saved; pass back as expectedVersion")
    updated_at: Optional[datetime] = None


# ── Contact section ───────────────────────────────────────────────────────

class ContactSettings(CamelModel):
    """
    contactItems: buttons (WhatsApp, Instagram, e-mail, ...) each with
    type/title/description/icon/color/link/isActive/order. The cards are the
    two headers of the contact section.
    """
    contact_items: List[Dict[str, Any]] = Field(default_factory=list)
    schedule_info: Dict[str, Any] = Field(default_factory=dict)
    location_info: Dict[str, Any] = Field(default_factory=dict)
    contact_card: Dict[str, Any] = Field(default_factory=dict)
    info_card: Dict[str, Any] = Field(default_factory=dict)


class ContactSettingsResponse(ContactSettings, DocumentMeta):
    pass


# ── Footer ────────────────────────────────────────────────────────────────

class FooterSettings(CamelModel):
    general_info: Dict[str, Any] = Field(default_factory=dict)
    contact_buttons: List[Dict[str, Any]] = Field(default_factory=list)
    certification_items: List[Dict[str, Any]] = Field(default_factory=list)
    trust_seals: List[Dict[str, Any]] = Field(default_factory=list)
    bottom_info: Dict[str, Any] = Field(default_factory=dict)


class FooterSettingsResponse(FooterSettings, DocumentMeta):
    pass


# ── Cookie banner ─────────────────────────────────────────────────────────

class CookieSettings(CamelModel):
    is_enabled: bool = True
    title: str = ""
    message: str = ""
    accept_button_text: str = ""
    decline_button_text: str = ""
    privacy_link_text: str = ""
    terms_link_text: str = ""
    position: Literal["top", "bottom"] = Field(
        default="top", description="Banner edge on desktop; mobile always uses the bottom"
    )


class CookieSettingsResponse(CookieSettings, DocumentMeta):
    pass


# ── Privacy policy / terms of use ─────────────────────────────────────────

class LegalDocument(CamelModel):
    title: str = ""
    content: str = Field(default="", description="HTML")
    is_active: bool = True
    last_updated: Optional[datetime] = Field(
        default=None, description="Set by the server on every save"
    )


class LegalDocumentWrite(CamelModel):
    """PUT body: content is required, the title keeps its current value if omitted."""
    title: Optional[str] = Field(default=None, min_length=1)
    content: str = Field(min_length=1)
    is_active: Optional[bool] = None


class LegalDocumentResponse(LegalDocument, DocumentMeta):
    pass
