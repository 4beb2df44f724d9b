import pytest
from hypothesis import given
from hypothesis import strategies as st

from textedit.buffer import LineBuffer, TextBuffer, TextRow, is_space


def _rows(buf):
    start = 0
    rows = []
    while start < len(buf):
        row = buf.layout_row(start)
        rows.append((start, row))
        start += row.num_chars
    return rows


def test_str_and_len_match_initial_text():
    buf = LineBuffer("hello\nworld")
    assert str(buf) == "hello\nworld"
    assert len(buf) == len("hello\nworld")


def test_line_buffer_satisfies_protocol():
    buf = LineBuffer("x")
    assert isinstance(buf, TextBuffer)
    assert buf.char_at(0) == "x"


def test_row_includes_trailing_newline():
    buf = LineBuffer("ab\ncd", char_width=2.0)
    row = buf.layout_row(0)
    assert row.num_chars == 3
    assert buf.char_at(row.num_chars - 1) == "\n"
    assert row.x1 == 4.0


def test_last_row_runs_to_end():
    buf = LineBuffer("ab\ncd")
    row = buf.layout_row(3)
    assert row.num_chars == len(buf) - 3


def test_row_past_end_is_empty():
    buf = LineBuffer("abc")
    assert buf.layout_row(len(buf)).num_chars == 0


def test_row_height_uses_line_height():
    buf = LineBuffer("abc", line_height=7.5)
    row = buf.layout_row(0)
    assert row.ymax - row.ymin == 7.5
    assert row.baseline_y_delta == 7.5


def test_newline_has_no_width():
    buf = LineBuffer("a\n", char_width=3.0)
    assert buf.char_width(0, 1) == 0.0
    assert buf.char_width(0, 0) == 3.0


def test_callable_width():
    buf = LineBuffer("aW", char_width=lambda ch: 5.0 if ch == "W" else 1.0)
    assert buf.char_width(0, 1) == 5.0
    assert buf.layout_row(0).x1 == buf.char_width(0, 0) + buf.char_width(0, 1)


def test_insert_respects_max_length():
    buf = LineBuffer("abc", max_length=4)
    assert buf.insert(1, "xy") is False
    assert str(buf) == "abc"
    assert buf.insert(3, "d") is True
    assert str(buf) == "abcd"


def test_initial_text_too_long():
    with pytest.raises(ValueError):
        LineBuffer("abcdef", max_length=3)


def test_negative_max_length():
    with pytest.raises(ValueError):
        LineBuffer("", max_length=-1)


def test_char_at_out_of_range():
    buf = LineBuffer("ab")
    with pytest.raises(IndexError):
        buf.char_at(2)
    with pytest.raises(IndexError):
        buf.char_at(-1)


def test_delete_out_of_range():
    buf = LineBuffer("ab")
    with pytest.raises(IndexError):
        buf.delete(1, 5)
    with pytest.raises(ValueError):
        buf.delete(0, -1)


def test_insert_out_of_range():
    buf = LineBuffer("ab")
    with pytest.raises(IndexError):
        buf.insert(3, "x")


def test_text_row_defaults():
    row = TextRow()
    assert (row.x0, row.x1, row.num_chars) == (0.0, 0.0, 0)


@pytest.mark.parametrize("ch, expected", [(" ", True), ("\t", True), ("\n", True), ("a", False), ("", False)])
def test_is_space(ch, expected):
    assert is_space(ch) is expected


text_strategy = st.text(alphabet="ab \n", max_size=40)


@given(text_strategy)
def test_rows_cover_whole_text(text):
    buf = LineBuffer(text)
    rows = _rows(buf)
    assert sum(row.num_chars for _, row in rows) == len(text)
    for start, row in rows:
        assert row.num_chars > 0
        chunk = text[start : start + row.num_chars]
        assert "\n" not in chunk[:-1]


@given(text_strategy, st.floats(min_value=0.5, max_value=10))
def test_row_width_is_sum_of_char_widths(text, width):
    buf = LineBuffer(text, char_width=width)
    for start, row in _rows(buf):
        total = sum(buf.char_width(start, i) for i in range(row.num_chars))
        assert row.x1 == pytest.approx(total)


@given(text_strategy, st.data())
def test_insert_delete_round_trip(text, data):
    buf = LineBuffer(text)
    index = data.draw(st.integers(min_value=0, max_value=len(text)))
    extra = data.draw(st.text(alphabet="xyz\n", max_size=10))
    assert buf.insert(index, extra)
    assert str(buf) == text[:index] + extra + text[index:]
    buf.delete(index, len(extra))
    assert str(buf) == text