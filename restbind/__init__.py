from .connector import Connector, ConnectorRegistry, connectors
from .exceptions import ErrorKind
from .logger import get_logger, log, set_logger
from .properties import Property
from .request import Request
from .resource import Resource
from .routes import Route

__all__ = (
    'Connector',
    'ConnectorRegistry',
    'ErrorKind',
    'Property',
    'Request',
    'Resource',
    'Route',
    'connectors',
    'exceptions',
    'get_logger',
    'log',
    'policies',
    'set_logger',
    'signals',
)
