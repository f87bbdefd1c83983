import json
from unittest import TestCase, mock

from restbind import connectors, set_logger


class FakeConnector(object):
    """
    Stands in for :class:`restbind.Connector`; records requests and answers with ``responses`` in order.
    """

    def __init__(self, name='test', *responses):
        self.name = name
        self.responses = list(responses)
        self.requests = []

    def fetch(self, request):
        self.requests.append(request)
        response = self.responses.pop(0) if self.responses else None
        if isinstance(response, Exception):
            raise response
        return response


def make_response(status_code=200, body=None, content_type='application/json', headers=None):
    response = mock.Mock()
    response.status_code = status_code
    response.headers = dict(headers or {})
    if body is None:
        response.content = b''
        response.text = ''
    else:
        text = json.dumps(body) if content_type == 'application/json' else body
        response.content = text.encode('utf-8')
        response.text = text
        response.json.side_effect = lambda: json.loads(text)
        response.headers['Content-Type'] = content_type
    return response


class BaseTestCase(TestCase):

    def setUp(self):
        super(BaseTestCase, self).setUp()
        connectors.clear()
        set_logger(None)
        self.addCleanup(connectors.clear)
        self.addCleanup(set_logger, None)

    def add_connector(self, *responses, name='test', default=False):
        connector = FakeConnector(name, *responses)
        connectors.register(connector, default=default)
        return connector
