from .onerp_api_client import OnerpApiClient, extract_error_message

__all__ = ["OnerpApiClient", "extract_error_message"]
