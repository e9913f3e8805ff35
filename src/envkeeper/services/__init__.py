"""
Services Layer - Operation surface over the core scanner, sandbox and writer.
"""

from envkeeper.services.container import ServicesContainer, create_services
from envkeeper.services.env_service import EnvDocument, EnvService, WriteOptions

__all__ = [
    "EnvDocument",
    "EnvService",
    "ServicesContainer",
    "WriteOptions",
    "create_services",
]
