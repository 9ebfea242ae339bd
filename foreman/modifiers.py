"""Request modifiers and the decorators that chain them.

A modifier is a callable that takes a request and returns a request (the
same object or a replacement).  A decorator takes a modifier and returns
a new modifier that applies its own transformation first, and then hands
the transformed request to the modifier it wraps.

Modifiers must not raise; any failure belongs to the transport.
"""

__all__ = [
    'identity',
    'make_decorator',
    'fold',
    'chain',
    # Stages
    'set_url_host',
    'add_header',
    'set_basic_auth',
]

import base64
import functools


def identity(request):
    return request


def make_decorator(transform):
    """Make a decorator out of a request transformation."""
    def decorator(modifier):
        def modify(request):
            return modifier(transform(request))
        return modify
    return decorator


def fold(decorators, modifier=identity):
    """Fold decorators over a modifier, one after another.

       The last decorator folded is the outermost, and so its
       transformation is applied first: fold([d1, d2, d3]) applies d3,
       d2, d1, and then the base modifier.
    """
    return functools.reduce(
        lambda modifier, decorator: decorator(modifier),
        decorators,
        modifier,
    )


def chain(*decorators):
    """Compose decorators into a modifier that applies them in order."""
    return fold(reversed(decorators))


def set_url_host(address, api_version):
    """Point the request at address and prefix its path with api_version.

       The scheme is chosen by literal prefix of address; an address
       without "http://" or "https://" yields a scheme-less request, and
       is used as the host verbatim.
    """
    if address.startswith('http://'):
        scheme = 'http'
    elif address.startswith('https://'):
        scheme = 'https'
    else:
        scheme = ''
    prefix = scheme + '://'
    if address.startswith(prefix):
        host = address[len(prefix):]
    else:
        host = address

    def rewrite(request):
        path = request.path
        if path.startswith('/'):
            path = path[1:]
        request.host = host
        request.path = '%s/%s' % (api_version, path)
        request.scheme = scheme
        return request

    return make_decorator(rewrite)


def add_header(name, value):
    def add(request):
        request.add_header(name, value)
        return request
    return make_decorator(add)


def set_basic_auth(username, password):
    credentials = base64.b64encode(
        ('%s:%s' % (username, password)).encode('utf-8')
    ).decode('ascii')
    authorization = 'Basic ' + credentials

    def set_auth(request):
        request.set_header('Authorization', authorization)
        return request

    return make_decorator(set_auth)
