import pytest

from apple_books_highlights.decoders import (
    JsonRowDecoder,
    SeparatedRowDecoder,
    get_decoder,
)


def test_separated_decoder_recovers_field_matrix() -> None:
    rows = [
        ["B1", "A1", "Great quote"],
        ["B1", "A2", "Another line"],
        ["B2", "A3", "Third"],
    ]
    raw = "".join("|||".join(row) + "@@@" for row in rows)

    assert SeparatedRowDecoder().decode(raw) == rows


def test_separated_decoder_keeps_newlines_and_whitespace() -> None:
    raw = "B1|||A1|||  first line\nsecond line \n@@@"

    assert SeparatedRowDecoder().decode(raw) == [["B1", "A1", "  first line\nsecond line \n"]]


def test_separated_decoder_discards_empty_chunks() -> None:
    assert SeparatedRowDecoder().decode("") == []
    assert SeparatedRowDecoder().decode("@@@@@@B1|||A1|||x@@@@@@") == [["B1", "A1", "x"]]


def test_separated_decoder_command_options() -> None:
    decoder = SeparatedRowDecoder(row_separator="##", field_separator="%%")

    assert decoder.command_options() == ["-cmd", ".separator %% ##"]
    assert decoder.decode("a%%b##c%%d##") == [["a", "b"], ["c", "d"]]


def test_separated_decoder_rejects_empty_separator() -> None:
    with pytest.raises(ValueError):
        SeparatedRowDecoder(row_separator="")


def test_json_decoder_preserves_column_order() -> None:
    raw = (
        '[{"ZASSETID":"B1","ZAUTHOR":"Jane Doe","ZTITLE":"My Book"},\n'
        '{"ZASSETID":"B2","ZAUTHOR":null,"ZTITLE":"Text with ||| and @@@"}]\n'
    )

    assert JsonRowDecoder().decode(raw) == [
        ["B1", "Jane Doe", "My Book"],
        ["B2", "", "Text with ||| and @@@"],
    ]


def test_json_decoder_handles_empty_output() -> None:
    assert JsonRowDecoder().decode("") == []
    assert JsonRowDecoder().command_options() == ["-json"]


def test_get_decoder() -> None:
    assert isinstance(get_decoder("separator"), SeparatedRowDecoder)
    assert isinstance(get_decoder("json"), JsonRowDecoder)
    with pytest.raises(ValueError):
        get_decoder("csv")


def test_json_decoder_rejects_non_row_payloads() -> None:
    with pytest.raises(ValueError):
        JsonRowDecoder().decode('{"ZASSETID": "B1"}')
    with pytest.raises(ValueError):
        JsonRowDecoder().decode('[{"ZASSETID": "B1"}, "stray"]')
