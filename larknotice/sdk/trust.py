"""Certificate trust policies applied to outbound SSL contexts."""

import logging
import ssl
from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence, Union

logger = logging.getLogger(__name__)

# Low-level handle a check may be bound to: a connected socket or an in-memory TLS object.
Connection = Union[ssl.SSLSocket, ssl.SSLObject]


class TrustManager(ABC):
    """
    Common interface for certificate trust policies.

    The check methods raise ``ssl.SSLCertVerificationError`` when a chain is
    not trusted. ``conn`` is optional and carries the socket or SSL object the
    handshake runs on, when the caller has one.
    """

    @abstractmethod
    def check_client_trusted(
        self,
        chain: Sequence[Any],
        auth_type: str,
        conn: Optional[Connection] = None,
    ) -> None:
        ...

    @abstractmethod
    def check_server_trusted(
        self,
        chain: Sequence[Any],
        auth_type: str,
        conn: Optional[Connection] = None,
    ) -> None:
        ...

    @abstractmethod
    def get_accepted_issuers(self) -> tuple:
        """Issuers whose certificates this policy accepts."""
        ...

    @abstractmethod
    def install(self, context: ssl.SSLContext) -> None:
        """Apply this policy to an SSL context."""
        ...


class BypassingTrustManager(TrustManager):
    """
    Trust manager that accepts every certificate chain from every peer.

    No chain walk, hostname check or expiry check is performed. Only use this
    against test servers with self-signed or otherwise untrusted certificates,
    never in production.
    """

    def _trust_all(self, chain: Sequence[Any], auth_type: str, conn: Optional[Connection]) -> bool:
        return True

    def check_client_trusted(
        self,
        chain: Sequence[Any],
        auth_type: str,
        conn: Optional[Connection] = None,
    ) -> None:
        self._trust_all(chain, auth_type, conn)

    def check_server_trusted(
        self,
        chain: Sequence[Any],
        auth_type: str,
        conn: Optional[Connection] = None,
    ) -> None:
        self._trust_all(chain, auth_type, conn)

    def get_accepted_issuers(self) -> tuple:
        return ()

    def install(self, context: ssl.SSLContext) -> None:
        # check_hostname has to be cleared before verify_mode can drop to CERT_NONE
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
        logger.debug("Installed certificate bypass on SSL context %r", context)
