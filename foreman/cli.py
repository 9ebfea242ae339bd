"""Send a request to a Foreman server."""

__all__ = [
    'main',
    'run',
]

import argparse
import logging
import os
import sys

import requests

from foreman import clients


LOG = logging.getLogger(__name__)
LOG.addHandler(logging.NullHandler())


_LOG_FORMAT = '%(asctime)s: %(levelname)s: %(name)s: %(message)s'


_METHODS = ('GET', 'HEAD', 'POST', 'PUT', 'DELETE')


def main(argv, *, environ=os.environ, output=None, _session=None):
    parser = argparse.ArgumentParser(prog='foreman', description=__doc__)
    add_arguments(parser, environ)
    args = parser.parse_args(argv[1:])
    if output is None:
        output = sys.stdout
    configure_logging(args)

    client = clients.Client(make_options(args, session=_session))
    method = getattr(client, args.method.lower())
    kwargs = {}
    if args.data is not None:
        kwargs['body'] = args.data
    if args.timeout is not None:
        kwargs['timeout'] = args.timeout
    try:
        response = method(args.resource, **kwargs)
    except (ValueError, requests.RequestException):
        LOG.error('could not %s %s', args.method, args.resource, exc_info=True)
        return 1

    print('%s %s' % (response.status_code, response.reason), file=output)
    for name, value in response.headers.items():
        print('%s: %s' % (name, value), file=output)
    if args.method != 'HEAD' and response.text:
        print(file=output)
        print(response.text, file=output)
    return 0


def add_arguments(parser, environ):
    parser.add_argument(
        '-v', '--verbose', action='count', default=0,
        help='verbose output')
    parser.add_argument(
        '--address', default=environ.get('FOREMAN_ADDRESS', ''),
        help="""set Foreman address (default: $FOREMAN_ADDRESS or %s)
             """ % clients.DEFAULT_ADDRESS)
    parser.add_argument(
        '--api-version', default=environ.get('FOREMAN_API_VERSION', ''),
        help="""set API version (default: $FOREMAN_API_VERSION or %s)
             """ % clients.DEFAULT_API_VERSION)
    parser.add_argument(
        '--username', default=environ.get('FOREMAN_USERNAME', ''),
        help="""set basic auth username (default: $FOREMAN_USERNAME)""")
    parser.add_argument(
        '--password', default=environ.get('FOREMAN_PASSWORD', ''),
        help="""set basic auth password (default: $FOREMAN_PASSWORD)""")
    parser.add_argument(
        '--timeout', type=float,
        help="""set request timeout in seconds""")
    parser.add_argument(
        '--data',
        help="""set request body""")
    parser.add_argument(
        'method', type=str.upper, choices=_METHODS,
        help="""HTTP method""")
    parser.add_argument(
        'resource',
        help="""resource path, such as /hosts""")


def configure_logging(args):
    if args.verbose == 0:
        level = logging.WARNING
    elif args.verbose == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=_LOG_FORMAT)


def make_options(args, *, session=None):
    return clients.Options(
        address=args.address,
        api_version=args.api_version,
        username=args.username,
        password=args.password,
        session=session,
    )


def run():
    sys.exit(main(sys.argv))
