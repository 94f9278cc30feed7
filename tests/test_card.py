"""Tests for the card data carrier."""

import json

from larknotice.sdk import Card


class TestCard:
    """Card is a transparent carrier: no validation, no reshaping."""

    def test_empty_card(self) -> None:
        assert Card().to_dict() == {}

    def test_unset_parts_omitted(self) -> None:
        card = Card(elements=[{"tag": "hr"}])
        assert card.to_dict() == {"elements": [{"tag": "hr"}]}

    def test_nested_elements_pass_through(self) -> None:
        elements = [
            {"tag": "div", "fields": [{"is_short": True, "text": {"tag": "lark_md", "content": "**Job**"}}]},
            {"tag": "note", "elements": [1, 2.5, None, "x", False]},
        ]
        card = Card(config={"wide_screen_mode": True}, header={"template": "red"}, elements=elements)
        data = card.to_dict()
        assert data["elements"] is elements
        assert data["config"] == {"wide_screen_mode": True}
        assert data["header"] == {"template": "red"}

    def test_scalar_elements_accepted(self) -> None:
        assert Card(elements="plain").to_dict() == {"elements": "plain"}
        assert Card(elements=0).to_dict() == {"elements": 0}

    def test_to_json_keeps_unicode(self) -> None:
        card = Card(header={"title": {"tag": "plain_text", "content": "构建成功"}})
        raw = card.to_json()
        assert "构建成功" in raw
        assert json.loads(raw) == card.to_dict()
