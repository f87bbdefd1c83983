from collections import OrderedDict

import requests

from .exceptions import ConnectionFailed, ConnectorNotFound, exception_for_status
from .logger import log
from .signals import after_request, before_request, request_failed
from .utils import normalize_base_uri


class Connector(object):
    """
    Performs requests against one HTTP service.

    :param name: name the connector is registered under
    :param str base_uri: prefix for every request path; normalized on construction
    :param str username: basic auth username
    :param str password: basic auth password
    :param requests.Session session: optional session, a new one is created otherwise

    .. attribute:: options

        ``base_uri`` and ``basic_auth`` (``{'username': ..., 'password': ...}``), each present only if configured.
    """

    def __init__(self, name, base_uri=None, username=None, password=None, session=None):
        self.name = name
        options = {}
        if base_uri is not None:
            options['base_uri'] = normalize_base_uri(base_uri)
        if username is not None or password is not None:
            options['basic_auth'] = {'username': username, 'password': password}
        self.options = options
        self.session = session if session is not None else requests.Session()

    @property
    def base_uri(self):
        return self.options.get('base_uri')

    def url(self, path):
        if self.base_uri is None:
            return path
        if not path.startswith('/'):
            path = '/' + path
        return self.base_uri + path

    def fetch(self, request):
        """
        Send ``request`` and return the decoded response body.

        :raises ConnectionFailed: if the transport raised
        :raises HTTPError: subclass matching an unsuccessful status code
        """
        url = self.url(request.path)
        log('** RestBind {} {} {}'.format(request.method, url, dict(request.data)))
        before_request.send(self, request=request)

        try:
            response = self.session.request(request.method, url, **request.http_data(self.options))
        except requests.RequestException as e:
            request_failed.send(self, request=request, exception=e)
            raise ConnectionFailed('{} {} failed: {}'.format(request.method, url, e)) from e

        log('** RestBind {} {} returned {}'.format(request.method, url, response.status_code))

        error = exception_for_status(response.status_code)
        if error is not None:
            exception = error(response)
            request_failed.send(self, request=request, exception=exception)
            raise exception

        data = self.parse(response)
        after_request.send(self, request=request, response=response, data=data)
        return data

    @staticmethod
    def parse(response):
        if not response.content:
            return None
        if 'json' in response.headers.get('Content-Type', ''):
            try:
                return response.json()
            except ValueError:
                log('** RestBind could not decode JSON body, returning text')
        return response.text

    def __repr__(self):
        return '<Connector {!r} {}>'.format(self.name, self.base_uri)


class ConnectorRegistry(object):
    """
    Named connectors shared by all resources. The first connector added is the default unless another one is
    added with ``default=True``.
    """

    def __init__(self):
        self._connectors = OrderedDict()
        self._default = None

    def add(self, name, default=False, **options):
        """
        Create and register a :class:`Connector`.

        :param name: connector name, referred to by ``Meta.connector`` or a route's ``connector`` option
        :param bool default: whether to use this connector when resources do not name one
        :param options: ``base_uri``, ``username``, ``password`` and ``session``
        """
        return self.register(Connector(name, **options), default=default)

    def register(self, connector, default=False):
        self._connectors[connector.name] = connector
        if default or self._default is None:
            self._default = connector.name
        return connector

    def remove(self, name):
        self._connectors.pop(name, None)
        if self._default == name:
            self._default = next(iter(self._connectors), None)

    def clear(self):
        self._connectors.clear()
        self._default = None

    @property
    def default(self):
        return self[None]

    def __getitem__(self, name):
        if name is None:
            name = self._default
            if name is None:
                raise ConnectorNotFound(None)
        try:
            return self._connectors[name]
        except KeyError:
            raise ConnectorNotFound(name)

    def __contains__(self, name):
        return name in self._connectors

    def __len__(self):
        return len(self._connectors)


connectors = ConnectorRegistry()
