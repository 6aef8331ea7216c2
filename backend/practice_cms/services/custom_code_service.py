"""
Practice CMS Backend — Custom Code Service
==========================================

What:  Ordered resource service for injected HTML/JS snippets, plus lookups
       by injection point (`header` or `body`).
Who:   The public site fetches /api/custom-codes/header and .../body once
       at boot and injects the snippets in order.
"""

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from practice_cms.database import DATABASE_ERRORS
from practice_cms.exceptions import ValidationError
from practice_cms.models.custom_code import CODE_LOCATIONS, CustomCode
from practice_cms.services.ordered_resource import OrderedResourceService


class CustomCodeService(OrderedResourceService[CustomCode]):
    def __init__(self):
        super().__init__(CustomCode, label="custom code")

    @staticmethod
    def _check_location(location: str) -> None:
        if location not in CODE_LOCATIONS:
            raise ValidationError(
                message=f"Location must be one of: {', '.join(CODE_LOCATIONS)}",
                field="location",
                context={"received": location},
            )

    async def list_by_location(self, db: AsyncSession, location: str) -> List[CustomCode]:
        """All snippets for one location, active or not (admin view)."""
        self._check_location(location)
        try:
            result = await db.execute(
                self._ordered_select().where(CustomCode.location == location)
            )
            return list(result.scalars().all())
        except DATABASE_ERRORS as e:
            raise self._database_error("list", e)

    async def list_active_by_location(self, db: AsyncSession, location: str) -> List[CustomCode]:
        """Active snippets for one location, in injection order."""
        self._check_location(location)
        try:
            result = await db.execute(
                self._ordered_select()
                .where(CustomCode.location == location)
                .where(self._visible_clause())
            )
            return list(result.scalars().all())
        except DATABASE_ERRORS as e:
            raise self._database_error("list", e)


custom_code_service = CustomCodeService()
