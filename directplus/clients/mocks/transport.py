"""
Direct Plus: MOCK transport.

⚠️  This is a mock implementation for development and testing.
    It never opens a connection. Replies are either taken from a scripted
    queue or generated as approved answers with fresh call/transaction numbers.
"""

import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Union
from urllib.parse import parse_qsl, urlencode

from directplus.contracts.interfaces import Transport

logger = logging.getLogger(__name__)


@dataclass
class RecordedPost:
    url: str
    body: str

    @property
    def fields(self) -> Dict[str, str]:
        return dict(parse_qsl(self.body, keep_blank_values=True))


def build_reply(**fields: str) -> bytes:
    """Encode a reply the way the processor does (ISO-8859-1 form encoding)."""
    return urlencode({k.upper(): v for k, v in fields.items()}, encoding="iso-8859-1").encode("ascii")


class MockTransport(Transport):
    """
    Mock Direct Plus transport.

    Parameters
    ----------
    replies : list
        Raw reply bodies (bytes/str) or exceptions, consumed in order.
        When exhausted, an approved reply is generated.
    """

    def __init__(self, replies: Optional[List[Union[bytes, str, Exception]]] = None):
        self._replies = list(replies or [])
        self.calls: List[RecordedPost] = []
        logger.info("[DIRECTPLUS MOCK] Transport initialised (%d scripted replies)", len(self._replies))

    def queue(self, reply: Union[bytes, str, Exception]) -> None:
        self._replies.append(reply)

    async def post(self, url: str, body: str) -> bytes:
        self.calls.append(RecordedPost(url=url, body=body))

        if self._replies:
            reply = self._replies.pop(0)
            if isinstance(reply, Exception):
                raise reply
            return reply.encode("iso-8859-1") if isinstance(reply, str) else reply

        return self._approved_reply(self.calls[-1].fields)

    def _approved_reply(self, request: Dict[str, str]) -> bytes:
        reply = {
            "numtrans": f"{random.randint(0, 9_999_999_999):010d}",
            "numappel": f"{random.randint(0, 9_999_999_999):010d}",
            "numquestion": request.get("NUMQUESTION", ""),
            "site": request.get("SITE", ""),
            "rang": request.get("RANG", ""),
            "autorisation": "XXXXXX",
            "codereponse": "00000",
            "commentaire": "Demande traitée avec succès",
            "refabonne": request.get("REFABONNE", ""),
        }
        if request.get("PORTEUR"):
            reply["porteur"] = f"SLDLrcsLMPC{random.randint(0, 99999):05d}"
        return build_reply(**reply)
