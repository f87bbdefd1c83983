import re
from collections import OrderedDict
from collections.abc import Mapping
from urllib.parse import quote

from .exceptions import ArgumentError, MissingParameter
from .properties import Property

HTTP_VERBS = ('get', 'put', 'post', 'delete')

QUERY_VERBS = ('get', 'delete')

_placeholder = re.compile(r'([:*])([A-Za-z_]\w*)')


def parameter_values(obj, names):
    """
    Read the attributes ``names`` off ``obj``.

    :raises MissingParameter: if ``obj`` does not have one of the attributes
    """
    values = OrderedDict()
    for name in names:
        try:
            values[name] = getattr(obj, name)
        except AttributeError:
            raise MissingParameter(name, obj)
    return values


class Request(object):
    """
    A single HTTP request built from a URI template.

    ``:name`` placeholders match a single path segment up to the next non-word character; ``*name`` placeholders
    may contain ``/``. Placeholder values are taken from ``params`` first and otherwise read off ``context``;
    a placeholder with no value, or a ``None`` value, raises :class:`MissingParameter`.
    Parameters used in the path are not sent again as query or body data.

    :param str verb: one of ``get``, ``put``, ``post`` and ``delete``
    :param str path: URI template relative to the connector's base URI, e.g. ``'/books/:id.json'``
    :param context: class or instance the request is made for
    :param dict params: parameter values, in order
    """

    def __init__(self, verb, path, context=None, params=None):
        verb = verb.lower()
        if verb not in HTTP_VERBS:
            raise ArgumentError('Unsupported HTTP verb "{}"'.format(verb))
        self.verb = verb
        self.template = path
        self.context = context
        self.params = OrderedDict(params or {})
        self.path, self.data = self._resolve()

    @property
    def method(self):
        return self.verb.upper()

    def _resolve(self):
        used = set()

        def substitute(match):
            kind, name = match.groups()
            if name in self.params:
                value = self.params[name]
                used.add(name)
            else:
                value = parameter_values(self.context, (name,))[name]
            # a class context yields the unbound Property itself
            if value is None or isinstance(value, Property):
                raise MissingParameter(name, self.context)
            return quote(str(value), safe='/' if kind == '*' else '')

        path = _placeholder.sub(substitute, self.template)
        data = OrderedDict((k, v) for k, v in self.params.items() if k not in used)
        return path, data

    def http_data(self, options=None):
        """
        Return keyword arguments for :meth:`requests.Session.request`.

        Data is sent as query parameters for ``GET`` and ``DELETE``; otherwise as a form body, or as JSON when any
        value is a nested mapping.

        :param dict options: connector options; ``basic_auth`` becomes the ``auth`` argument
        """
        options = options or {}
        http_data = {}

        if self.data:
            if self.verb in QUERY_VERBS:
                http_data['params'] = dict(self.data)
            elif any(isinstance(v, Mapping) for v in self.data.values()):
                http_data['json'] = self.data
            else:
                http_data['data'] = dict(self.data)

        basic_auth = options.get('basic_auth')
        if basic_auth:
            http_data['auth'] = (basic_auth['username'], basic_auth['password'])
        return http_data

    def perform(self, connector):
        return connector.fetch(self)

    def __repr__(self):
        return '<Request {} {}>'.format(self.method, self.path)
