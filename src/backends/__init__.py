from src.backends.client import BackendClient, BackendClientConfig, create_client

__all__ = [
    "BackendClient",
    "BackendClientConfig",
    "create_client",
]
