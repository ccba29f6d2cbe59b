"""External service clients for communicating with external systems"""

from .processing_client import RegistrationNotifier

__all__ = [
    "RegistrationNotifier",
]
