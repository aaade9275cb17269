"""Back-office User Repository Interface

One implementation per actor kind; an order placer reference is resolved
by picking the repository for its kind.
"""

from abc import ABC, abstractmethod
from typing import Optional, Union
from src.domain.user import Admin, Staff


class UserRepository(ABC):
    """Read access to admin or staff records"""

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[Union[Admin, Staff]]:
        """
        Retrieve user by ID

        Args:
            user_id: Admin or staff ID

        Returns:
            The record if found, None otherwise
        """
        pass
