"""Base types for Lark card notifications."""

import json
from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class Card:
    """A Lark interactive card: config, header and a free-form element tree."""
    config: Optional[dict] = None
    header: Optional[dict] = None
    elements: Any = None  # arbitrary JSON-compatible tree

    def to_dict(self) -> dict:
        """Return the card as a plain dict, leaving out unset parts."""
        return {
            key: value
            for key, value in (
                ("config", self.config),
                ("header", self.header),
                ("elements", self.elements),
            )
            if value is not None
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)


@dataclass
class SendResult:
    """Outcome of delivering a card to a webhook."""
    ok: bool
    status_code: Optional[int] = None
    code: Optional[int] = None
    message: str = ""
