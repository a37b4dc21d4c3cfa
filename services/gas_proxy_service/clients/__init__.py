"""GAS Proxy Service clients module.

Contains HTTP clients for the upstream action endpoint and the asset host.
"""

from services.gas_proxy_service.clients.action_client import UpstreamActionClientImpl
from services.gas_proxy_service.clients.asset_uploader import GitHubAssetUploaderImpl

__all__ = ["UpstreamActionClientImpl", "GitHubAssetUploaderImpl"]
