"""
Create Template Use Case

Stores a proposal template with its placeholder definitions.
"""

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.proposals.dtos import to_iso
from src.domain.entities import ProposalTemplate

from .dtos import CreateTemplateCommand, TemplateResponse


def template_response(template: ProposalTemplate) -> TemplateResponse:
    return TemplateResponse(
        id=str(template.id),
        name=template.name,
        subject=template.subject,
        content=template.content,
        variables=template.variables or [],
        service_type=template.service_type,
        is_active=template.is_active,
        updated_at=to_iso(template.updated_at),
    )


class CreateTemplateUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: CreateTemplateCommand) -> Result[TemplateResponse]:
        async with self.uow:
            template = ProposalTemplate(
                name=command.name,
                subject=command.subject,
                content=command.content,
                variables=[v.model_dump() for v in command.variables],
                service_type=command.service_type,
                is_active=command.is_active,
            )
            template = await self.uow.templates.create(template)
            await self.uow.commit()

            return Return.ok(template_response(template))
