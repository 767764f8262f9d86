"""Network clients"""

from .transport import HttpTransport, TransportFailure, FailureReason

__all__ = ["HttpTransport", "TransportFailure", "FailureReason"]
