import inspect
from collections import OrderedDict
from types import MethodType

from .connector import connectors
from .exceptions import ArgumentError
from .policies import apply_policy, policy_from, rescue_map, rescued
from .request import HTTP_VERBS, Request

ROUTE_LEVELS = ('class', 'instance')


class Route(object):
    """
    Connects a method of a :class:`restbind.Resource` to a URI. The keyword naming the HTTP verb holds the URI
    template, and exactly one verb must be given::

        class Book(Resource):
            find = Route(get='/books/:id.json', params='id')
            search = Route(get='/books', params=('q', 'page'), response='raw')
            update = Route(put='/books/:id.json', params='title', on='instance', response=Receipt)
            remove = Route(delete='/books/:id.json', on='instance', response=(Receipt, 'from_status'))
            fetch = Route(get='/big/:id', params='id', rescue={ErrorKind.RESOURCE_NOT_FOUND: None})

        Book.find(1)
        Book.find(1).update('New title')

    The verb is validated when the route is called, as is the number of arguments, which must match ``params``.

    :param str get: URI template for a ``GET`` request
    :param str put: URI template for a ``PUT`` request
    :param str post: URI template for a ``POST`` request
    :param str delete: URI template for a ``DELETE`` request
    :param params: parameter name or names; positional call arguments are assigned to them in order
    :param response: coercion policy for the response, default ``'self'``; see :mod:`restbind.policies`
    :param str on: ``'class'`` (default) or ``'instance'``; where the method is available
    :param dict including: extra parameters added to every request; these override call arguments of the same name
    :param dict rescue: ``{ErrorKind: fallback}`` values returned instead of raising transport or coercion errors
    :param connector: name of the connector to use; defaults to ``Meta.connector`` of the resource
    :param str attribute: name of the method; set by the resource the route is declared on
    """

    def __init__(self,
                 get=None,
                 put=None,
                 post=None,
                 delete=None,
                 params=(),
                 response='self',
                 on='class',
                 including=None,
                 rescue=None,
                 connector=None,
                 attribute=None):
        uris = dict(get=get, put=put, post=post, delete=delete)
        self.verbs = OrderedDict((verb, uris[verb]) for verb in HTTP_VERBS if uris[verb] is not None)

        if isinstance(params, str):
            params = (params,)
        self.params = tuple(params)

        if on not in ROUTE_LEVELS:
            raise ArgumentError('"on" must be one of {}, got {!r}'.format(ROUTE_LEVELS, on))

        self.on = on
        self.policy = policy_from(response)
        self.including = OrderedDict(including or {})
        self.rescue = rescue_map(rescue)
        self.connector = connector
        self.attribute = attribute

    @property
    def verb(self):
        return self._verb_and_path()[0]

    @property
    def path(self):
        return self._verb_and_path()[1]

    def _verb_and_path(self):
        if len(self.verbs) != 1:
            raise ArgumentError('{!r} must be declared with exactly one of {}, got {}'.format(
                self, ', '.join(HTTP_VERBS), ', '.join(self.verbs) or 'none'))
        return next(iter(self.verbs.items()))

    def call(self, receiver, *args):
        """
        Perform the request for ``receiver`` and return the coerced response.

        :param receiver: the resource class or instance the route is called on
        :param args: values for ``params``, in order
        """
        verb, path = self._verb_and_path()

        if len(args) != len(self.params):
            raise ArgumentError('{} takes {} argument{} ({} given)'.format(
                self.attribute or repr(self), len(self.params), '' if len(self.params) == 1 else 's', len(args)))

        params = OrderedDict(zip(self.params, args))
        params.update(self.including)

        owner = receiver if inspect.isclass(receiver) else type(receiver)
        request = Request(verb, path, receiver, params)
        return rescued(self.rescue, self._perform, request, owner)

    def _perform(self, request, owner):
        data = request.perform(self.connector_for(owner))
        return apply_policy(self.policy, data, owner)

    def connector_for(self, owner):
        name = self.connector
        if name is None:
            meta = getattr(owner, 'meta', None)
            name = meta.get('connector') if meta else None
        return connectors[name]

    def __get__(self, obj, owner):
        if self.on == 'instance':
            if obj is None:
                return self
            return MethodType(self.call, obj)
        return MethodType(self.call, owner)

    def __repr__(self):
        return '{}({})'.format(self.__class__.__name__,
                               ', '.join('{}={!r}'.format(verb, path) for verb, path in self.verbs.items()))
