"""
Response coercion policies shared by :class:`restbind.routes.Route` and :class:`restbind.properties.Property`.

The ``response`` option of a route or property is converted once, at declaration, into one of the variants below:

=========================  ===========================  ======================================
Option value               Variant                      Result
=========================  ===========================  ======================================
``'raw'``                  :class:`Raw`                 ``data``
``'self'``                 :class:`SelfConstruct`       ``owner(data)``
a class                    :class:`ClassConstruct`      ``target(data)``
``(cls, 'name')``          :class:`DelegatedMethod`     ``cls.name(data)``
``('self', 'name')``       :class:`DelegatedMethod`     ``owner.name(data)``
any other callable         :class:`Callback`            ``callback(data)``
=========================  ===========================  ======================================
"""
import inspect
from collections import namedtuple

from .exceptions import ArgumentError, CoercionError, ErrorKind, RestBindError
from .logger import log

Raw = namedtuple('Raw', ())
SelfConstruct = namedtuple('SelfConstruct', ())
ClassConstruct = namedtuple('ClassConstruct', ('target',))
DelegatedMethod = namedtuple('DelegatedMethod', ('target', 'method'))
Callback = namedtuple('Callback', ('callback',))

RAW = Raw()
SELF = SelfConstruct()


def policy_from(value):
    if isinstance(value, (Raw, SelfConstruct, ClassConstruct, DelegatedMethod, Callback)):
        return value
    if value == 'raw':
        return RAW
    if value == 'self':
        return SELF
    if inspect.isclass(value):
        return ClassConstruct(value)
    if isinstance(value, (tuple, list)) and len(value) == 2 and isinstance(value[1], str):
        target, method = value
        if target == 'self' or inspect.isclass(target):
            return DelegatedMethod(target, method)
    if callable(value):
        return Callback(value)
    raise ArgumentError('Cannot build a response policy from {!r}'.format(value))


def _construct(target, data, policy):
    if isinstance(data, list):
        return [_construct(target, item, policy) for item in data]
    if data is None:
        return None
    try:
        return target(data)
    except Exception as e:
        raise CoercionError('Could not coerce response using {!r}: {}'.format(policy, e)) from e


def _call(fn, data, policy):
    try:
        return fn(data)
    except RestBindError:
        raise
    except Exception as e:
        raise CoercionError('Could not coerce response using {!r}: {}'.format(policy, e)) from e


def apply_policy(policy, data, owner):
    """
    Coerce ``data`` using ``policy``. The construct policies build one object per item of list data; delegated
    methods and callbacks receive the data as a whole.

    :param owner: the resource class used by ``'self'`` policies
    :raises CoercionError: if a construct target raised, or a delegated method or callback raised an error that is
        not a :class:`RestBindError`
    """
    if isinstance(policy, Raw):
        return data
    if isinstance(policy, SelfConstruct):
        return _construct(owner, data, policy)
    if isinstance(policy, ClassConstruct):
        return _construct(policy.target, data, policy)
    if isinstance(policy, DelegatedMethod):
        target = owner if policy.target == 'self' else policy.target
        return _call(lambda d: getattr(target, policy.method)(d), data, policy)
    if isinstance(policy, Callback):
        return _call(policy.callback, data, policy)
    raise ArgumentError('Unknown response policy {!r}'.format(policy))


def _error_kind(key):
    if isinstance(key, ErrorKind):
        return key
    if inspect.isclass(key) and issubclass(key, RestBindError) and key.kind is not None:
        return key.kind
    if isinstance(key, str):
        try:
            return ErrorKind(key)
        except ValueError:
            if key.upper() in ErrorKind.__members__:
                return ErrorKind[key.upper()]
    raise ArgumentError('{!r} does not name an error kind'.format(key))


def rescue_map(rescue):
    """
    Normalize a rescue option to a ``{ErrorKind: fallback}`` dictionary. Keys may be :class:`ErrorKind` members,
    their values or names, or :class:`RestBindError` subclasses.
    """
    if not rescue:
        return {}
    return {_error_kind(key): value for key, value in rescue.items()}


def rescued(rescue, fn, *args, **kwargs):
    try:
        return fn(*args, **kwargs)
    except RestBindError as e:
        if e.kind in rescue:
            log('** RestBind rescued {}: {}'.format(e.kind.value, e))
            return rescue[e.kind]
        raise
