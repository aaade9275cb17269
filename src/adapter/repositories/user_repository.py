"""SQLAlchemy implementations of UserRepository, one per actor kind"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.user_repository import UserRepository
from src.domain.user import Admin, Staff


class SqlAlchemyAdminRepository(UserRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: int) -> Optional[Admin]:
        result = await self.session.execute(select(Admin).where(Admin.id == user_id))
        return result.scalar_one_or_none()


class SqlAlchemyStaffRepository(UserRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: int) -> Optional[Staff]:
        result = await self.session.execute(select(Staff).where(Staff.id == user_id))
        return result.scalar_one_or_none()
