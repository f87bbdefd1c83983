from collections import OrderedDict
from collections.abc import Mapping
from urllib.parse import urlsplit


class AttributeDict(dict):
    __getattr__ = dict.get
    __setattr__ = dict.__setitem__


def as_path(value):
    """Return a payload location as a tuple of keys."""
    if isinstance(value, (tuple, list)):
        return tuple(str(key) for key in value)
    return (str(value),)


def _normalize_key(key):
    if isinstance(key, bytes):
        return key.decode('utf-8')
    return str(key)


def normalize_keys(data):
    """
    Return a copy of ``data`` with every mapping key converted to a string, recursing into nested mappings and lists.
    """
    if isinstance(data, Mapping):
        return OrderedDict((_normalize_key(k), normalize_keys(v)) for k, v in data.items())
    if isinstance(data, list):
        return [normalize_keys(v) for v in data]
    return data


def has_path(data, path):
    for key in path:
        if not isinstance(data, Mapping) or key not in data:
            return False
        data = data[key]
    return True


def get_path(data, path, default=None):
    for key in path:
        if not isinstance(data, Mapping) or key not in data:
            return default
        data = data[key]
    return data


def put_path(path, value):
    """
    Build a fresh nested dictionary with ``value`` placed at ``path``.

    >>> put_path(('block', 'var'), 1)
    {'block': {'var': 1}}
    """
    for key in reversed(path):
        value = OrderedDict([(key, value)])
    return value


def deep_merge(first, second):
    """
    Merge ``second`` into a copy of ``first``; nested mappings present in both are merged rather than replaced.
    """
    merged = OrderedDict(first)
    for key, value in second.items():
        if isinstance(merged.get(key), Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def normalize_base_uri(uri):
    """
    Add a missing scheme (``https`` for port 443, ``http`` otherwise) and strip trailing slashes.
    """
    uri = str(uri).strip()
    if '://' not in uri:
        netloc = uri.split('/', 1)[0]
        scheme = 'https' if netloc.endswith(':443') else 'http'
        uri = '{}://{}'.format(scheme, uri)
    elif urlsplit(uri).port == 443 and uri.startswith('http://'):
        uri = 'https://' + uri[len('http://'):]
    return uri.rstrip('/')
