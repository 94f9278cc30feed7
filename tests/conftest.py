"""
Pytest configuration and fixtures for larknotice tests.
"""

import ssl
from datetime import datetime

import httpx
import pytest
import trustme

TEST_HOSTNAME = "lark.test"


@pytest.fixture(scope="session")
def ca() -> trustme.CA:
    """A throwaway certificate authority nobody trusts."""
    return trustme.CA()


@pytest.fixture
def self_signed_server_context(ca: trustme.CA) -> ssl.SSLContext:
    """Server context presenting a certificate from the untrusted CA."""
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
    ca.issue_cert(TEST_HOSTNAME).configure_cert(context)
    return context


@pytest.fixture
def expired_server_context(ca: trustme.CA) -> ssl.SSLContext:
    """Server context presenting a certificate that expired long ago."""
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
    cert = ca.issue_cert(
        TEST_HOSTNAME,
        not_before=datetime(2000, 1, 1),
        not_after=datetime(2001, 1, 1),
    )
    cert.configure_cert(context)
    return context


def tls_handshake(
    client_context: ssl.SSLContext,
    server_context: ssl.SSLContext,
    hostname: str = TEST_HOSTNAME,
) -> ssl.SSLObject:
    """
    Run a TLS handshake entirely in memory and return the client side.

    Raises whatever ssl error the client raises during the handshake.
    """
    client_in, client_out = ssl.MemoryBIO(), ssl.MemoryBIO()
    server_in, server_out = ssl.MemoryBIO(), ssl.MemoryBIO()
    client = client_context.wrap_bio(client_in, client_out, server_hostname=hostname)
    server = server_context.wrap_bio(server_in, server_out, server_side=True)

    client_done = server_done = False
    for _ in range(10):
        if not client_done:
            try:
                client.do_handshake()
                client_done = True
            except ssl.SSLWantReadError:
                pass
        server_in.write(client_out.read())

        if not server_done:
            try:
                server.do_handshake()
                server_done = True
            except ssl.SSLWantReadError:
                pass
        client_in.write(server_out.read())

        if client_done and server_done:
            return client
    raise AssertionError("TLS handshake did not complete")


def mock_transport(status_code: int = 200, json_body=None, text: str = "", requests: list = None):
    """MockTransport answering every request with the given response, recording requests."""

    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        if json_body is not None:
            return httpx.Response(status_code, json=json_body)
        return httpx.Response(status_code, text=text)

    return httpx.MockTransport(handler)
