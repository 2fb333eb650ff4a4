"""
API key Auth Gate.

When no key is configured the gate is open: every caller is authorized,
including callers sending no credential at all. Once a key is configured,
a call is authorized only if its credential equals the key exactly.
"""

import hmac
import logging
from typing import Optional

from pydantic import SecretStr

logger = logging.getLogger(__name__)

# Header carrying the caller's credential on the HTTP transport
API_KEY_HEADER = "X-Api-Key"


class AuthGate:
    """
    Validates caller credentials against the configured API key.

    The stdio transport never consults the gate; it is only reachable by a
    co-located process that is already trusted.

    Attributes:
        enabled: True when a key is configured.
    """

    def __init__(self, api_key: Optional[SecretStr | str] = None) -> None:
        if isinstance(api_key, SecretStr):
            api_key = api_key.get_secret_value()
        self._secret = api_key or ""
        if not self._secret:
            logger.info("No API key configured, HTTP transport is open")

    @property
    def enabled(self) -> bool:
        return bool(self._secret)

    def authorize(self, credential: Optional[str]) -> bool:
        """
        Decide whether a credential grants access.

        Args:
            credential: Value of the credential header, if any.

        Returns:
            True when the gate is open or the credential matches the key.
        """
        if not self._secret:
            return True
        if not credential:
            return False
        return hmac.compare_digest(credential.encode("utf-8"), self._secret.encode("utf-8"))
