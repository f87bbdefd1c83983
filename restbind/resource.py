from collections.abc import Mapping
from functools import reduce

from .exceptions import ArgumentError
from .properties import Property
from .request import parameter_values
from .routes import Route
from .utils import AttributeDict, deep_merge, normalize_keys


def _effective_properties(own, bases):
    properties = list(own)
    names = {p.name for p in own}
    for base in bases:
        if not isinstance(base, ResourceMeta):
            continue
        for p in base.properties:
            if p.name not in names:
                properties.append(p)
                names.add(p.name)
    return properties


class ResourceMeta(type):

    def __new__(mcs, name, bases, members):
        class_ = super(ResourceMeta, mcs).__new__(mcs, name, bases, members)
        class_.routes = routes = {}
        class_.meta = meta = AttributeDict()

        for base in reversed(bases):
            if isinstance(base, ResourceMeta):
                routes.update(base.routes)
                meta.update(base.meta)

        if 'Meta' in members:
            for k, v in members['Meta'].__dict__.items():
                if not k.startswith('__'):
                    meta[k] = v

        own = []
        for n, m in members.items():
            if isinstance(m, Route):
                if m.attribute is None:
                    m.attribute = n
                routes[n] = m
            elif isinstance(m, Property):
                own.append(m.bind(n))

        class_._own_properties = own
        class_.properties = _effective_properties(own, bases)
        return class_


class Resource(object, metaclass=ResourceMeta):
    """
    Base class for objects that are read from and written to a REST service.

    A resource is configured using :class:`restbind.Route` and :class:`restbind.Property` class attributes, and a
    `Meta` class:

    =====================  ==============================  ==============================================================
    Attribute name         Default                         Description
    =====================  ==============================  ==============================================================
    connector              ``None``                        Name of the connector used by the routes of this resource;
                                                           ``None`` uses the default connector.
    =====================  ==============================  ==============================================================

    Usage example:

    .. code-block:: python

        connectors.add('library', base_uri='library.example.com', username='alice', password='secret')

        class Book(Resource):
            class Meta:
                connector = 'library'

            title = Property()
            author = Property(response=Author, source=('details', 'author'))

            find = Route(get='/books/:id.json', params='id')
            save = Route(put='/books/:id.json', on='instance', including={'format': 'json'})

    Routes and properties can also be added after the class is created, with :meth:`connect`,
    :meth:`define_properties` and :meth:`use_connector`.

    .. attribute:: meta

        A :class:`AttributeDict` of configuration attributes collected from the `Meta` attributes of the base classes.

    .. attribute:: routes

        A dictionary of routes available on this resource, keyed by method name.

    .. attribute:: properties

        A list of the properties declared on this resource followed by those inherited from its bases. A property
        declared on this resource replaces an inherited property of the same name.
    """
    meta = None
    routes = None
    properties = ()

    def __init__(self, data=None, **kwargs):
        if data is not None or kwargs:
            data = normalize_keys(data if data is not None else {})
            if not isinstance(data, Mapping):
                raise ArgumentError('Cannot build {} from {!r}'.format(self.__class__.__name__, data))
            data.update(kwargs)
            self.populate_properties(data)

    @classmethod
    def connect(cls, name, **options):
        """
        Add a :class:`Route` named ``name`` to this resource. Takes the same options as :class:`Route`.
        """
        route = Route(attribute=name, **options)
        setattr(cls, name, route)
        cls.routes[name] = route
        return route

    @classmethod
    def define_properties(cls, *names, **options):
        """
        Add a :class:`Property` for each of ``names``. Takes the same options as :class:`Property`.

        Subclasses that already exist inherit the new properties as well.
        """
        for name in names:
            if any(p.name == name for p in cls._own_properties):
                raise ArgumentError('{} already has a property "{}"'.format(cls.__name__, name))
            prop = Property(name=name, **options)
            setattr(cls, name, prop)
            cls._own_properties.append(prop)
        cls._update_properties()

    @classmethod
    def _update_properties(cls):
        cls.properties = _effective_properties(cls._own_properties, cls.__bases__)
        for subclass in cls.__subclasses__():
            subclass._update_properties()

    @classmethod
    def use_connector(cls, name):
        cls.meta['connector'] = name

    def populate_properties(self, data):
        data = normalize_keys(data)
        owner = self.__class__
        for prop in self.properties:
            if prop.has_value_in(data):
                setattr(self, prop.name, prop.value_from(data, owner))

    def to_properties_dict(self):
        return reduce(lambda dct, prop: deep_merge(dct, prop.to_dict(self)), self.properties, {})

    def properties_equal(self, other):
        try:
            return all(getattr(self, p.name) == getattr(other, p.name) for p in self.properties)
        except AttributeError:
            return False

    def parameter_values(self, names):
        return parameter_values(self, names)

    def __repr__(self):
        return '<{} {}>'.format(self.__class__.__name__,
                                ' '.join('{}={!r}'.format(p.name, getattr(self, p.name)) for p in self.properties))
