import pytest

from boshops.core.errors import DecodeError
from boshops.core.stream import RawRecord, decode_record, split_records


@pytest.mark.parametrize("body", [b"", "", None, b"\n\n  \n"])
def test_split_records_empty_body(body):
    assert list(split_records(body)) == []


def test_split_records_keeps_order_and_skips_blank_lines():
    body = b'{"n": 1}\n\n{"n": 2}\r\n   \n{"n": 3}'

    records = list(split_records(body))

    assert [r.index for r in records] == [0, 2, 4]
    assert [decode_record(r)["n"] for r in records] == [1, 2, 3]


def test_split_records_is_restartable():
    stream = split_records('{"n": 1}\n{"n": 2}\n')

    assert list(stream) == list(stream)
    assert len(list(stream)) == 2


def test_decode_record_reports_line_index():
    with pytest.raises(DecodeError, match="line 4") as excinfo:
        decode_record(RawRecord(index=4, text=b'{"n": '))

    assert excinfo.value.index == 4


@pytest.mark.parametrize("text", [b"[1, 2]", b'"vm"', b"\xff\xfe"])
def test_decode_record_rejects_non_objects(text: bytes):
    with pytest.raises(DecodeError) as excinfo:
        decode_record(RawRecord(index=0, text=text))

    assert excinfo.value.index == 0
