"""Per-request context.

Every request handled by the API gets its own ``RequestContext``: a request
id, a logger annotated with request fields, and the provisioning client.
Managers receive it explicitly instead of reaching for ambient state.
"""

from __future__ import annotations

import base64
import uuid
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from loguru import Logger

    from pillar.api.cloud.base import CloudClient

_STD_B32 = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
_ID_B32 = "ybndrfg8ejkmcpqxot1uwisza345h769"
_ID_TRANSLATION = str.maketrans(_STD_B32, _ID_B32)


def new_id() -> str:
    """Return a random 26-character identifier.

    A UUID4 encoded with a human-friendly base32 alphabet, padding stripped.
    """
    encoded = base64.b32encode(uuid.uuid4().bytes).decode("ascii")
    return encoded.translate(_ID_TRANSLATION)[:26]


@dataclass(frozen=True)
class RequestContext:
    """Request-scoped data threaded through managers."""

    request_id: str
    logger: Logger
    cloud_client: CloudClient

    def with_fields(self, **fields: Any) -> RequestContext:
        """Return a copy whose logger carries additional fields."""
        return replace(self, logger=self.logger.bind(**fields))
