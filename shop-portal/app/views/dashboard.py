"""Account dashboard controller"""

import logging

from ..core.config import settings
from ..core.errors import PortalError
from ..core.query_cache import QueryCache
from ..core.session import PageAccess, SessionState, customer_page_access
from ..models.upload import SystemSettings
from ..services.portal import PortalDataSource
from .results import Loading, Redirect, Render, ViewResult

logger = logging.getLogger(__name__)


async def load_branding(source: PortalDataSource, cache: QueryCache) -> SystemSettings:
    """System settings for the page header, falling back to the default name"""
    try:
        return await cache.fetch(("system-settings",), source.get_system_settings)
    except PortalError as e:
        logger.error(f"Error fetching system settings: {e}")
        return SystemSettings(system_name=settings.system_name)


class DashboardController:
    """
    Customer "my page" dashboard.

    Staff are sent to the operational dashboard and anonymous visitors to
    login. Customers see their active enrollments or an empty state.
    """

    def __init__(self, source: PortalDataSource, cache: QueryCache):
        self.source = source
        self.cache = cache

    async def load(self, state: SessionState) -> ViewResult:
        access = customer_page_access(state)
        if access == PageAccess.WAIT:
            return Loading()
        if access == PageAccess.STAFF_DASHBOARD:
            return Redirect(settings.staff_dashboard_url)
        if access == PageAccess.LOGIN:
            return Redirect(settings.login_url)

        enrollments = []
        enrollment_error = None
        try:
            enrollments = await self.cache.fetch(
                ("enrollments", state.session.user_id),
                self.source.list_enrollments,
            )
        except PortalError as e:
            logger.error(f"Error fetching enrollments: {e}")
            enrollment_error = "Failed to load your courses"

        return Render(
            "dashboard.html",
            {
                "session": state.session,
                "system_settings": await load_branding(self.source, self.cache),
                "enrollments": enrollments,
                "has_enrollments": len(enrollments) > 0,
                "enrollment_error": enrollment_error,
            },
        )
