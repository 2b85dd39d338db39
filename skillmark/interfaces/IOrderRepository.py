from abc import ABC, abstractmethod
from typing import Optional

from skillmark.domain.models import Order

class IOrderRepository(ABC):
    @abstractmethod
    async def initialize(self) -> None:
        pass

    @abstractmethod
    async def append(self, order: Order) -> None:
        pass

    @abstractmethod
    async def find_by_id(self, order_id: str) -> Optional[Order]:
        pass
