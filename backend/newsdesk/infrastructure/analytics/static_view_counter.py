"""Placeholder view counter until real page-view tracking exists."""

from newsdesk.application.interfaces import ViewCounter


class StaticViewCounter(ViewCounter):
    """Reports a fixed, configured number of views."""

    def __init__(self, views: int = 0):
        self._views = views

    async def todays_views(self) -> int:
        return self._views
