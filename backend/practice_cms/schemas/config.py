"""
Practice CMS Backend — Config Store Schemas
===========================================

What:  Request/response contracts for /api/config, /api/admin/config and
       the section color endpoints.

Design Decision:
    ConfigWrite.value is typed `Any` on purpose: the store accepts any JSON
    and leaves shape checks to the form that owns the key. SectionStyle is
    the one value shape validated server-side, because the section color
    endpoint edits one entry *inside* the `section_colors` map and must not
    corrupt its siblings.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field, model_validator

from practice_cms.schemas.common import CamelModel

CONFIG_KEY_MAX_LENGTH = 100


class ConfigEntryResponse(CamelModel):
    """A stored setting as returned to admin and public clients."""
    id: int
    key: str
    value: Any
    version: int = Field(description="Pass back as expectedVersion to guard against lost updates")
    updated_at: datetime


class ConfigWrite(CamelModel):
    """
    Body of POST /api/admin/config.

    expected_version:
        None  → last-write-wins upsert
        0     → only create (fails with 409 if the key already exists)
        n > 0 → only overwrite if the stored row is still at version n
    """
    key: str = Field(min_length=1, max_length=CONFIG_KEY_MAX_LENGTH)
    value: Any = Field(description="Any JSON document")
    expected_version: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def value_must_be_present(self) -> "ConfigWrite":
        # The column is NOT NULL; JSON null would be stored as SQL NULL
        if self.value is None:
            raise ValueError("value must not be null")
        return self


class SectionStyle(CamelModel):
    """
    Background style descriptor for one page section.

    backgroundType:
        solid    → backgroundColor fills the section
        gradient → gradientColors [from, to] along gradientDirection (e.g. "to-br")
        pattern  → backgroundColor under the built-in pattern
    Sections without an entry use their built-in default styling.
    """
    background_type: Literal["solid", "gradient", "pattern"]
    background_color: Optional[str] = None
    gradient_colors: Optional[List[str]] = None
    gradient_direction: Optional[str] = "to-br"
    opacity: float = Field(default=1.0, ge=0.0, le=1.0)
    overlay_color: Optional[str] = None
    overlay_opacity: float = Field(default=0.0, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def check_type_requirements(self) -> "SectionStyle":
        if self.background_type == "gradient":
            if not self.gradient_colors or len(self.gradient_colors) != 2:
                raise ValueError("gradient backgrounds need exactly two gradientColors")
        elif not self.background_color:
            raise ValueError(f"{self.background_type} backgrounds need a backgroundColor")
        return self


class SectionStyleWrite(SectionStyle):
    """Body of PUT /api/admin/section-colors/{section}."""
    expected_version: Optional[int] = Field(default=None, ge=0)


class SectionStylesResponse(CamelModel):
    sections: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    version: int = Field(default=0, description="Version of the section_colors entry (0 = never saved)")


class MaintenanceStatus(CamelModel):
    """Public maintenance-mode flag read before the site renders."""
    maintenance: Dict[str, Any]
    general: Dict[str, Any]
