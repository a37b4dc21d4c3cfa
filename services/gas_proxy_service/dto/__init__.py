"""GAS Proxy Service DTO module.

Contains Data Transfer Objects for browser-facing API responses.
"""

from services.gas_proxy_service.dto.proxy_v1 import UploadImageResponseV1

__all__ = ["UploadImageResponseV1"]
