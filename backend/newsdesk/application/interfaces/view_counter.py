"""Port for page-view counting."""

from abc import ABC, abstractmethod


class ViewCounter(ABC):
    """Source of the "today's views" figure on the stats endpoint."""

    @abstractmethod
    async def todays_views(self) -> int:
        ...
