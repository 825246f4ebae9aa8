from __future__ import annotations

from core.source_keys import build_source_key, chat_id_from_source_key, expand_source_key_variants


def test_build_source_key_prefers_username() -> None:
    assert build_source_key("MyGroup", -100123) == "@mygroup"
    assert build_source_key(None, -100123) == "chat_id:-100123"
    assert build_source_key("", 42) == "chat_id:42"


def test_chat_id_from_source_key() -> None:
    assert chat_id_from_source_key("chat_id:-100123") == -100123
    assert chat_id_from_source_key("@group") is None
    assert chat_id_from_source_key("chat_id:abc") is None


def test_expand_chat_id_variants_positive() -> None:
    variants = expand_source_key_variants("chat_id:123")
    assert "chat_id:123" in variants
    assert "chat_id:-123" in variants
    assert "chat_id:-1000000000123" in variants


def test_expand_chat_id_variants_negative_100() -> None:
    variants = expand_source_key_variants("chat_id:-100987654321")
    assert "chat_id:-100987654321" in variants
    assert "chat_id:987654321" in variants


def test_expand_username_is_lowercased() -> None:
    assert expand_source_key_variants("@MyGroup") == {"@mygroup"}
