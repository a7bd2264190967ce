"""
Get Template Use Case
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork

from .create_template_use_case import template_response
from .dtos import TemplateResponse


class GetTemplateUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, template_id: UUID) -> Result[TemplateResponse]:
        async with self.uow:
            template = await self.uow.templates.get_by_id(template_id)
            if template is None:
                return Return.err(Error("TEMPLATE_NOT_FOUND", "Template not found"))

            return Return.ok(template_response(template))
