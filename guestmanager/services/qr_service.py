"""
QR code generation service
"""

import io
import qrcode

from guestmanager.core.config import settings

class QRService:
    """Service for generating QR codes"""

    @staticmethod
    def render_png(data: str, box_size: int = 10) -> bytes:
        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=box_size,
            border=4,
        )
        qr.add_data(data)
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        buffer = io.BytesIO()
        img.save(buffer, format="PNG")
        return buffer.getvalue()

    @staticmethod
    def generate_event_qr(public_code: str) -> bytes:
        """QR code pointing at the event guest portal"""
        return QRService.render_png(QRService.get_portal_url(public_code))

    @staticmethod
    def generate_guest_qr(qr_code: str) -> bytes:
        """Check-in QR code carrying the guest's code, scanned at the door"""
        return QRService.render_png(qr_code, box_size=8)

    @staticmethod
    def get_portal_url(public_code: str) -> str:
        return f"{settings.BASE_URL}/guest/portal?event={public_code}"
