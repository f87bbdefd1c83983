from blinker import Namespace

_restbind = Namespace()

before_request = _restbind.signal('before-request')

after_request = _restbind.signal('after-request')

request_failed = _restbind.signal('request-failed')
