from .inquiry_service import InquiryService

__all__ = ["InquiryService"]
