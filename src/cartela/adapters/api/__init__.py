from cartela.adapters.api.api_client import ApiClient
from cartela.adapters.api.http_transport import HttpTransport

__all__ = ["ApiClient", "HttpTransport"]
