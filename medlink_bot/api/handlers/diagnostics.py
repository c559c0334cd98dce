"""
Manual WhatsApp connectivity checks, mounted only in debug mode.
"""

from fastapi import APIRouter, HTTPException, Query, status

from ...core.exceptions import WhatsAppAPIError
from ...core.models import HospitalMenu, PlainText
from ...services.conversation import replies
from ...services.booking import BookingRepository
from ...services.whatsapp import WhatsAppCloudClient
from ...utils.logging import get_logger

logger = get_logger("medlink.diagnostics")


class DiagnosticsHandler:
    """Sends a test text and the hospital menu to a given number."""

    def __init__(self, whatsapp: WhatsAppCloudClient, repository: BookingRepository, menu_limit: int = 5):
        self.whatsapp = whatsapp
        self.repository = repository
        self.menu_limit = menu_limit
        self.router = APIRouter()
        self._setup_routes()

    def _setup_routes(self):

        @self.router.get("/whatsapp")
        async def test_whatsapp(to: str = Query(..., min_length=1)):
            try:
                basic_message = await self.whatsapp.send_text(to, "Testing basic message")
                hospitals = await self.repository.find_hospitals(limit=self.menu_limit)
                if hospitals:
                    hospital_list = await self.whatsapp.send(to, HospitalMenu(hospitals=tuple(hospitals)))
                else:
                    hospital_list = await self.whatsapp.send(to, PlainText(body=replies.NO_HOSPITALS))
            except WhatsAppAPIError as e:
                logger.error("Diagnostics send to %s failed: %s", to, e)
                raise HTTPException(
                    status_code=status.HTTP_502_BAD_GATEWAY,
                    detail={"error": str(e), "provider_status": e.status_code},
                )
            return {
                "success": True,
                "basic_message": basic_message,
                "hospital_list": hospital_list,
            }
