"""Protocol interfaces for the collaborators the client depends on."""
from .transport import Transport
from .wrapper import RequestWrapper, passthrough

__all__ = ["Transport", "RequestWrapper", "passthrough"]
