"""Distributor maintenance use cases"""

from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.distributor_repository import DistributorRepository
from src.domain.distributor import Distributor
from .dtos import CreateDistributorCommandDTO, DistributorResponseDTO


def to_distributor_response(distributor: Distributor) -> DistributorResponseDTO:
    return DistributorResponseDTO(
        distributor_id=distributor.id,
        distributor_name=distributor.distributor_name,
        company_name=distributor.company_name,
        contact=distributor.contact,
        username=distributor.username,
        status=distributor.status,
        wallet_balance=distributor.wallet_balance,
        created_at=distributor.created_at,
    )


class CreateDistributor:
    """
    Use Case: Register a distributor

    Business Rules:
    1. username is unique
    2. Wallet starts at 0.00
    """

    def __init__(self, uow: UnitOfWork, distributor_repo: DistributorRepository):
        self.uow = uow
        self.distributor_repo = distributor_repo

    async def execute(self, command: CreateDistributorCommandDTO) -> Result[DistributorResponseDTO]:
        try:
            existing = await self.distributor_repo.get_by_username(command.username)
            if existing:
                return Return.err(
                    Error(
                        code="VALIDATION_ERROR",
                        message=f"Username '{command.username}' is already taken",
                    )
                )

            distributor = await self.distributor_repo.create(
                Distributor(
                    distributor_name=command.distributor_name,
                    company_name=command.company_name,
                    contact=command.contact,
                    username=command.username,
                    status=command.status,
                )
            )
            response = to_distributor_response(distributor)
            await self.uow.commit()
            return Return.ok(response)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="PERSISTENCE_FAILURE",
                    message="Failed to create distributor",
                    reason=str(e),
                )
            )


class GetDistributor:
    def __init__(self, distributor_repo: DistributorRepository):
        self.distributor_repo = distributor_repo

    async def execute(self, distributor_id: int) -> Result[DistributorResponseDTO]:
        distributor = await self.distributor_repo.get_by_id(distributor_id)
        if not distributor:
            return Return.err(
                Error(
                    code="DISTRIBUTOR_NOT_FOUND",
                    message=f"Distributor {distributor_id} not found",
                )
            )
        return Return.ok(to_distributor_response(distributor))


class ListDistributors:
    def __init__(self, distributor_repo: DistributorRepository):
        self.distributor_repo = distributor_repo

    async def execute(self, limit: int = 50, offset: int = 0) -> Result[list[DistributorResponseDTO]]:
        distributors = await self.distributor_repo.list_distributors(limit=limit, offset=offset)
        return Return.ok([to_distributor_response(d) for d in distributors])
