import unittest

import argparse
import io

import requests

from foreman import cli
from foreman import clients

from tests.mocks import *


class CliTest(unittest.TestCase):

    def parse(self, argv, environ):
        parser = argparse.ArgumentParser()
        cli.add_arguments(parser, environ)
        return parser.parse_args(argv)

    def test_make_options(self):
        args = self.parse(['head', '/hosts'], {})
        self.assertEqual('HEAD', args.method)
        self.assertEqual('/hosts', args.resource)
        self.assertEqual(clients.Options(), cli.make_options(args))

        args = self.parse(['get', '/hosts'], {
            'FOREMAN_ADDRESS': 'https://example.org',
            'FOREMAN_API_VERSION': 'v1',
            'FOREMAN_USERNAME': 'bob',
            'FOREMAN_PASSWORD': 'pw',
        })
        self.assertEqual(
            clients.Options('https://example.org', 'v1', 'bob', 'pw'),
            cli.make_options(args),
        )

        args = self.parse(
            ['--address', 'http://x', '--username', 'alice', 'get', '/'],
            {'FOREMAN_ADDRESS': 'https://example.org'},
        )
        self.assertEqual('http://x', args.address)
        self.assertEqual('alice', args.username)

    def test_main(self):
        session = MockSession({
            ('HEAD', 'https://example.org/v2/hosts'): (
                200, b'', {'Content-Length': '0'},
            ),
            ('GET', 'https://example.org/v2/hosts'): (
                200, b'[]', {'Content-Type': 'application/json'},
            ),
        })
        environ = {
            'FOREMAN_ADDRESS': 'https://example.org',
            'FOREMAN_USERNAME': 'bob',
            'FOREMAN_PASSWORD': 'pw',
        }

        output = io.StringIO()
        self.assertEqual(0, cli.main(
            ['foreman', 'head', '/hosts'],
            environ=environ, output=output, _session=session,
        ))
        self.assertEqual('200 OK\nContent-Length: 0\n', output.getvalue())
        self.assertEqual(
            'Basic Ym9iOnB3', session._logs[-1].headers['Authorization'])

        output = io.StringIO()
        self.assertEqual(0, cli.main(
            ['foreman', '--timeout', '5', 'get', '/hosts'],
            environ=environ, output=output, _session=session,
        ))
        self.assertEqual(
            '200 OK\nContent-Type: application/json\n\n[]\n',
            output.getvalue(),
        )
        self.assertDictEqual({'timeout': 5.0}, session._send_kwargs[-1])

    def test_main_error(self):
        session = MockSession({
            ('GET', 'http://localhost:3000/v2/hosts'):
            requests.ConnectionError('connection refused'),
        })
        output = io.StringIO()
        with self.assertLogs(cli.__name__, level='ERROR'):
            self.assertEqual(1, cli.main(
                ['foreman', 'get', '/hosts'],
                environ={}, output=output, _session=session,
            ))
        self.assertEqual('', output.getvalue())


if __name__ == '__main__':
    unittest.main()
