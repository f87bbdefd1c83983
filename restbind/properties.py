import inspect

from .exceptions import MissingParameter
from .policies import RAW, apply_policy, policy_from, rescue_map, rescued
from .utils import as_path, get_path, has_path, normalize_keys, put_path


class Property(object):
    """
    Maps one attribute of a :class:`restbind.Resource` to a location in a payload.

    Properties are declared in the body of a resource class; the attribute name they are assigned to becomes
    :attr:`name`::

        class Book(Resource):
            title = Property()
            author = Property(response=Author, source=('meta', 'author'))
            summary = Property(response=lambda data: data.strip(), dest='abstract')

    :param response: coercion policy for values read from payloads, default ``'raw'``; see :mod:`restbind.policies`
    :param source: key, or tuple of nested keys, to read the value from; defaults to the property name
    :param dest: key, or tuple of nested keys, to write the value to in :meth:`to_dict`; defaults to ``source``
    :param dict rescue: ``{ErrorKind: fallback}`` values to use when the coercion fails
    """

    def __init__(self, response=RAW, source=None, dest=None, rescue=None, name=None):
        self.policy = policy_from(response)
        self._source = source
        self._dest = dest
        self.rescue = rescue_map(rescue)
        self.name = name

    def bind(self, name):
        if self.name is None:
            self.name = name
        return self

    @property
    def source(self):
        return as_path(self.name if self._source is None else self._source)

    @property
    def dest(self):
        if self._dest is None:
            return self.source
        return as_path(self._dest)

    def has_value_in(self, payload):
        return has_path(normalize_keys(payload), self.source)

    def value_from(self, payload, owner):
        """
        Read this property out of ``payload`` and coerce it.

        :param payload: a mapping, possibly nested; keys are compared as strings
        :param owner: the resource class, used by the ``'self'`` policy
        """
        value = get_path(normalize_keys(payload), self.source)
        return rescued(self.rescue, apply_policy, self.policy, value, owner)

    def to_dict(self, instance):
        try:
            value = getattr(instance, self.name)
        except AttributeError:
            raise MissingParameter(self.name, instance)

        if isinstance(value, list):
            value = [_serialize(v) for v in value]
        else:
            value = _serialize(value)
        return put_path(self.dest, value)

    def __get__(self, obj, owner):
        if obj is None:
            return self
        return obj.__dict__.get(self.name)

    def __repr__(self):
        return '{}({!r})'.format(self.__class__.__name__, self.name)


def _serialize(value):
    if not inspect.isclass(value) and hasattr(value, 'to_properties_dict'):
        return value.to_properties_dict()
    return value
