_sink = None


def set_logger(sink):
    """
    Set the process-wide log sink.

    :param sink: one of

        ``None`` - no logging

        an object with a ``debug`` method, e.g. a :class:`logging.Logger` - log using ``sink.debug(message)``

        a callable - log using ``sink(message)``
    """
    global _sink
    if sink is not None and not hasattr(sink, 'debug') and not callable(sink):
        raise TypeError('{!r} is neither callable nor has a debug() method'.format(sink))
    _sink = sink


def get_logger():
    return _sink


def log(message):
    sink = _sink
    if sink is None:
        return
    if hasattr(sink, 'debug'):
        sink.debug(str(message))
    else:
        sink(str(message))
