from .api import APIError, HRMSClient

__all__ = ["APIError", "HRMSClient"]
