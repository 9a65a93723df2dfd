from .resource_gateway import ResourceGateway
from .toast_sink import ToastSink

__all__ = [
    "ResourceGateway",
    "ToastSink",
]
