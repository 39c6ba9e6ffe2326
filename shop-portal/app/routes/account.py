"""Customer account API routes"""

from fastapi import APIRouter, Depends

from ..core.session import SessionState
from ..models.enrollment import EnrollmentListResponse
from ..models.upload import SystemSettings
from ..security.session_guard import current_session, require_customer
from ..services.portal import PortalService

router = APIRouter(prefix="/api", tags=["Account"])


@router.get("/customer-enrollments", response_model=EnrollmentListResponse)
async def list_enrollments(session: SessionState = Depends(require_customer)):
    """Active course enrollments of the current customer"""
    enrollments = await PortalService(session).list_enrollments()
    return EnrollmentListResponse(enrollments=enrollments)


@router.get("/system-settings", response_model=SystemSettings, response_model_exclude_none=True)
async def get_system_settings(session: SessionState = Depends(current_session)):
    """Branding for portal pages"""
    return await PortalService(session).get_system_settings()
