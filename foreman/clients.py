"""A thin layer on top of the requests package that addresses, labels,
and authenticates every request sent to a Foreman server.
"""

__all__ = [
    'AGENT',
    'DEFAULT_ADDRESS',
    'DEFAULT_API_VERSION',
    'Client',
    'Options',
    'Request',
    'get_default_session',
    'make_modifier',
]

import collections
import collections.abc
import logging
import threading
import urllib.parse

import requests
import requests.structures

from foreman import modifiers


LOG = logging.getLogger(__name__)
LOG.addHandler(logging.NullHandler())


AGENT = 'PythonForemanAPIClient'


DEFAULT_ADDRESS = 'http://localhost:3000'
DEFAULT_API_VERSION = 'v2'


_REQUEST_ARG_NAMES = frozenset('headers body'.split())


_SEND_ARG_NAMES = frozenset(
    'verify proxies stream cert timeout allow_redirects'.split()
)


_ALL_ARG_NAMES = _REQUEST_ARG_NAMES | _SEND_ARG_NAMES


# Header values that should not show up in debug logs.
_SECRET_HEADERS = frozenset(['authorization'])


_default_session = None
_default_session_lock = threading.Lock()


def get_default_session():
    """Return the session shared by clients without one of their own."""
    global _default_session
    with _default_session_lock:
        if _default_session is None:
            _default_session = requests.Session()
        return _default_session


Options = collections.namedtuple(
    'Options',
    'address api_version username password session',
    defaults=('', '', '', '', None),
)
Options.__doc__ = """Foreman client options.

   Empty address and api_version fall back to DEFAULT_ADDRESS and
   DEFAULT_API_VERSION; a None session falls back to the shared default
   session.  Basic auth is used only when username is non-empty.
"""


def make_modifier(address, api_version, username='', password=''):
    """Build the modifier that every outgoing request goes through."""
    decorators = [
        modifiers.set_url_host(address, api_version),
        modifiers.add_header('Content-Type', 'application/json'),
        modifiers.add_header('Agent', AGENT),
    ]
    if username:
        decorators.append(modifiers.set_basic_auth(username, password))
    return modifiers.chain(*decorators)


def _check_kwargs(kwargs, arg_names):
    names = set(kwargs) - arg_names
    if names:
        raise TypeError('not expect these keyword arguments: %s' %
                        ', '.join(sorted(names)))


def _make_method(method):
    def http_method(self, resource, **kwargs):
        _check_kwargs(kwargs, _ALL_ARG_NAMES)
        req_kwargs = {
            key: arg for key, arg in kwargs.items()
            if key in _REQUEST_ARG_NAMES
        }
        send_kwargs = {
            key: arg for key, arg in kwargs.items()
            if key in _SEND_ARG_NAMES
        }
        request = Request(method, resource, **req_kwargs)
        return self.send(request, **send_kwargs)
    http_method.__name__ = method.lower()
    http_method.__doc__ = 'Send a %s request to resource.' % method
    return http_method


def _log_headers(direction, headers):
    for name, value in headers:
        if name.lower() in _SECRET_HEADERS:
            value = '***'
        LOG.debug('%s %s: %s', direction, name, value)


class Client:

    def __init__(self, options=None):
        options = options or Options()
        self._address = options.address or DEFAULT_ADDRESS
        self._api_version = options.api_version or DEFAULT_API_VERSION
        if options.session is not None:
            self._session = options.session
        else:
            self._session = get_default_session()
        self._modifier = make_modifier(
            self._address,
            self._api_version,
            options.username,
            options.password,
        )

    @property
    def address(self):
        return self._address

    @property
    def api_version(self):
        return self._api_version

    @property
    def session(self):
        return self._session

    @property
    def modifier(self):
        return self._modifier

    get = _make_method('GET')
    head = _make_method('HEAD')
    post = _make_method('POST')
    put = _make_method('PUT')
    delete = _make_method('DELETE')

    def send(self, request, **kwargs):
        """Modify the request and send it through the session.

           Whatever the session returns or raises is passed through to
           the caller as is.
        """
        _check_kwargs(kwargs, _SEND_ARG_NAMES)
        request = self._modifier(request)
        LOG.debug('%s %s', request.method, request.uri)
        if LOG.isEnabledFor(logging.DEBUG):
            _log_headers('<<<', request.headers)
        response = self._session.send(
            request._make_request().prepare(), **kwargs)
        if LOG.isEnabledFor(logging.DEBUG):
            _log_headers('>>>', response.headers.items())
        return response


class Request:
    """An outgoing request whose parts modifiers may rewrite."""

    def __init__(self, method, uri, *, headers=None, body=None):
        parts = urllib.parse.urlsplit(uri)
        self.method = method
        self.scheme = parts.scheme
        self.host = parts.netloc
        self.path = parts.path
        self.query = parts.query
        self.fragment = parts.fragment
        if headers is None:
            self.headers = []
        elif isinstance(headers, collections.abc.Mapping):
            self.headers = list(headers.items())
        else:
            self.headers = list(headers)
        self.body = body

    def __str__(self):
        return ('Request(%r, %r, headers=%r, body=%r)' %
                (self.method, self.uri, self.headers, self.body))

    __repr__ = __str__

    @property
    def uri(self):
        return urllib.parse.urlunsplit((
            self.scheme, self.host, self.path, self.query, self.fragment,
        ))

    def add_header(self, name, value):
        self.headers.append((name, value))

    def set_header(self, name, value):
        self.del_header(name)
        self.headers.append((name, value))

    def del_header(self, name):
        name = name.lower()
        self.headers = [
            (key, value) for key, value in self.headers
            if key.lower() != name
        ]

    def get_header(self, name, default=None):
        values = self.get_all_headers(name)
        return values[0] if values else default

    def get_all_headers(self, name):
        name = name.lower()
        return [value for key, value in self.headers if key.lower() == name]

    def _make_request(self):
        # requests takes one value per header name; repeated values are
        # combined into one comma-separated field rather than sent as
        # separate header lines, even for singleton headers such as
        # Content-Type.
        headers = requests.structures.CaseInsensitiveDict()
        for name, value in self.headers:
            if name in headers:
                headers[name] = '%s, %s' % (headers[name], value)
            else:
                headers[name] = value
        return requests.Request(
            self.method, self.uri, headers=headers, data=self.body)
