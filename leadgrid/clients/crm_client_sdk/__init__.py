from leadgrid.clients.crm_client_sdk.config import SDKConfig
from leadgrid.clients.crm_client_sdk.errors import ApiError
from leadgrid.clients.crm_client_sdk.http_client import HttpClient
from leadgrid.clients.crm_client_sdk.leads_client import LeadsClient
from leadgrid.clients.crm_client_sdk.opportunities_client import OpportunitiesClient

__all__ = [
    "SDKConfig",
    "ApiError",
    "HttpClient",
    "LeadsClient",
    "OpportunitiesClient",
]
