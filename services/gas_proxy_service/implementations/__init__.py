"""Implementation modules for the GAS Proxy Service."""

from services.gas_proxy_service.implementations.media_resolver import PhotoUrlMediaResolver

__all__ = ["PhotoUrlMediaResolver"]
