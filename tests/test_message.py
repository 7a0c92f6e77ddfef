import json

import pytest

from peerchat.message import Message, decode_message, encode_message


def make_message(**overrides):
    values = dict(sender="alice", content="hello", timestamp="now", token="token")
    values.update(overrides)
    return Message(**values)


def test_round_trip():
    message = make_message(content="привет, мир")
    assert decode_message(encode_message(message)) == message


def test_ids_are_unique():
    assert make_message().id != make_message().id or False
    ids = {make_message().id for _ in range(50)}
    assert len(ids) == 50


def test_field_order_on_the_wire():
    payload = json.loads(encode_message(make_message()))
    assert list(payload) == ["id", "sender", "content", "timestamp", "token"]


def test_encoding_keeps_non_ascii():
    text = encode_message(make_message(content="чат"))
    assert "чат" in text


def test_extra_fields_ignored():
    text = json.dumps(
        {"id": "x", "sender": "s", "content": "c", "timestamp": "t", "token": "token", "extra": 1}
    )
    assert decode_message(text) == Message(
        id="x", sender="s", content="c", timestamp="t", token="token"
    )


def test_missing_field_rejected():
    with pytest.raises(ValueError):
        decode_message(json.dumps({"id": "x", "sender": "s", "content": "c", "timestamp": "t"}))


def test_non_string_field_rejected():
    with pytest.raises(ValueError):
        decode_message(
            json.dumps({"id": 1, "sender": "s", "content": "c", "timestamp": "t", "token": "token"})
        )


def test_not_json_rejected():
    with pytest.raises(ValueError):
        decode_message("Неверный токен")


def test_not_an_object_rejected():
    with pytest.raises(ValueError):
        decode_message("[1, 2, 3]")