from enum import Enum

from werkzeug.http import HTTP_STATUS_CODES


class ErrorKind(Enum):
    ARGUMENT = 'argument'
    MISSING_PARAMETER = 'missing-parameter'
    COERCION = 'coercion'
    CONNECTOR_NOT_FOUND = 'connector-not-found'
    CONNECTION = 'connection'
    REDIRECTION = 'redirection'
    BAD_REQUEST = 'bad-request'
    UNAUTHORIZED = 'unauthorized'
    FORBIDDEN = 'forbidden'
    RESOURCE_NOT_FOUND = 'resource-not-found'
    METHOD_NOT_ALLOWED = 'method-not-allowed'
    CONFLICT = 'conflict'
    GONE = 'gone'
    INVALID = 'invalid'
    CLIENT_ERROR = 'client-error'
    SERVER_ERROR = 'server-error'


class RestBindError(Exception):
    kind = None

    def as_dict(self):
        return {
            'kind': self.kind.value if self.kind else None,
            'message': str(self)
        }


class ArgumentError(RestBindError, TypeError):
    kind = ErrorKind.ARGUMENT


class MissingParameter(RestBindError):
    kind = ErrorKind.MISSING_PARAMETER

    def __init__(self, parameter, owner):
        super(MissingParameter, self).__init__(
            'No value for parameter "{}" on {!r}'.format(parameter, owner))
        self.parameter = parameter
        self.owner = owner


class CoercionError(RestBindError):
    kind = ErrorKind.COERCION


class ConnectorNotFound(RestBindError):
    kind = ErrorKind.CONNECTOR_NOT_FOUND

    def __init__(self, name):
        if name is None:
            message = 'No default connector has been added'
        else:
            message = 'Connector "{}" has not been added'.format(name)
        super(ConnectorNotFound, self).__init__(message)
        self.name = name


class ConnectionFailed(RestBindError):
    kind = ErrorKind.CONNECTION


class HTTPError(RestBindError):
    """
    Base class for errors derived from the status code of a response.

    :param response: the :class:`requests.Response` that failed
    """
    code = None

    def __init__(self, response, message=None):
        self.response = response
        if message is None:
            message = 'Failed with {} {}'.format(self.status_code, HTTP_STATUS_CODES.get(self.status_code, ''))
        super(HTTPError, self).__init__(message)

    @property
    def status_code(self):
        return getattr(self.response, 'status_code', self.code)

    def as_dict(self):
        dct = super(HTTPError, self).as_dict()
        dct['status'] = self.status_code
        dct['message'] = HTTP_STATUS_CODES.get(self.status_code, '')
        return dct


class Redirection(HTTPError):
    kind = ErrorKind.REDIRECTION

    @property
    def location(self):
        return self.response.headers.get('Location')


class ClientError(HTTPError):
    kind = ErrorKind.CLIENT_ERROR


class BadRequest(ClientError):
    kind = ErrorKind.BAD_REQUEST
    code = 400


class UnauthorizedAccess(ClientError):
    kind = ErrorKind.UNAUTHORIZED
    code = 401


class ForbiddenAccess(ClientError):
    kind = ErrorKind.FORBIDDEN
    code = 403


class ResourceNotFound(ClientError):
    kind = ErrorKind.RESOURCE_NOT_FOUND
    code = 404


class MethodNotAllowed(ClientError):
    kind = ErrorKind.METHOD_NOT_ALLOWED
    code = 405


class ResourceConflict(ClientError):
    kind = ErrorKind.CONFLICT
    code = 409


class ResourceGone(ClientError):
    kind = ErrorKind.GONE
    code = 410


class ResourceInvalid(ClientError):
    kind = ErrorKind.INVALID
    code = 422


class ServerError(HTTPError):
    kind = ErrorKind.SERVER_ERROR


_STATUS_EXCEPTIONS = {cls.code: cls for cls in (BadRequest,
                                                UnauthorizedAccess,
                                                ForbiddenAccess,
                                                ResourceNotFound,
                                                MethodNotAllowed,
                                                ResourceConflict,
                                                ResourceGone,
                                                ResourceInvalid)}


def exception_for_status(status_code):
    """
    Return the :class:`HTTPError` subclass matching a status code, or ``None`` for successful responses.
    """
    if status_code in _STATUS_EXCEPTIONS:
        return _STATUS_EXCEPTIONS[status_code]
    if 300 <= status_code < 400:
        return Redirection
    if 400 <= status_code < 500:
        return ClientError
    if 500 <= status_code < 600:
        return ServerError
    return None
