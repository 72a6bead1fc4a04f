import dataclasses

import pytest

from countlink.messages import Message, MessageId


def test_counter_message_keeps_value():
    message = Message(MessageId.COUNTER, 42)
    assert message.id is MessageId.COUNTER
    assert message.value == 42


def test_message_without_data_has_no_value():
    assert Message(MessageId.WIFI_OK).value is None


def test_identifiers_follow_source_order():
    names = [Message(number).id.name for number in range(7)]
    assert names == [
        "GOT_IP",
        "WIFI_DISCONN",
        "WIFI_ENDW",
        "WIFI_OK",
        "WIFI_KO",
        "COUNTER",
        "TCP_ENDW",
    ]
    assert Message(0).id is MessageId.GOT_IP


def test_plain_integer_id_is_converted():
    assert Message(MessageId.COUNTER.value, 1).id is MessageId.COUNTER


def test_unknown_id_is_rejected():
    with pytest.raises(ValueError):
        Message(99)


@pytest.mark.parametrize("value", [-1, 256])
def test_value_out_of_byte_range_is_rejected(value):
    with pytest.raises(ValueError):
        Message(MessageId.COUNTER, value)


def test_messages_compare_by_content():
    assert Message(MessageId.COUNTER, 7) == Message(MessageId.COUNTER, 7)
    assert Message(MessageId.COUNTER, 7) != Message(MessageId.COUNTER, 8)


def test_message_is_immutable():
    message = Message(MessageId.WIFI_KO)
    with pytest.raises(dataclasses.FrozenInstanceError):
        message.value = 3
    assert message.value is None
    assert message.id is MessageId.WIFI_KO