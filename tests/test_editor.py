import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from textedit.buffer import LineBuffer
from textedit.editor import TextEditState
from textedit.keys import KeyMap

KM = KeyMap()


def type_text(state, buf, text):
    for ch in text:
        state.key(buf, ord(ch))


def make(text="", single_line=False, **kwargs):
    buf = LineBuffer(text, **kwargs)
    state = TextEditState(single_line=single_line)
    return state, buf


def test_typing_inserts_and_moves_cursor():
    state, buf = make()
    type_text(state, buf, "hello")
    assert str(buf) == "hello"
    assert state.cursor == len("hello")


def test_single_line_ignores_newline():
    state, buf = make(single_line=True)
    type_text(state, buf, "a\nb")
    assert str(buf) == "ab"


def test_backspace_and_delete():
    state, buf = make()
    type_text(state, buf, "abc")
    state.key(buf, KM.backspace)
    assert str(buf) == "ab"
    state.key(buf, KM.text_start)
    state.key(buf, KM.delete)
    assert str(buf) == "b"
    assert state.cursor == 0


def test_shift_left_selects_and_backspace_deletes_selection():
    state, buf = make()
    type_text(state, buf, "abcd")
    state.key(buf, KM.left | KM.shift)
    state.key(buf, KM.left | KM.shift)
    assert state.selection == (2, 4)
    state.key(buf, KM.backspace)
    assert str(buf) == "ab"
    assert not state.has_selection()


def test_left_with_selection_moves_to_start():
    state, buf = make()
    type_text(state, buf, "abcd")
    state.key(buf, KM.left | KM.shift)
    state.key(buf, KM.left | KM.shift)
    state.key(buf, KM.left)
    assert state.cursor == 2
    assert not state.has_selection()


def test_cut_reports_whether_selection_existed():
    state, buf = make()
    type_text(state, buf, "xyz")
    assert state.cut(buf) is False
    state.key(buf, KM.text_start | KM.shift)
    assert state.cut(buf) is True
    assert str(buf) == ""


def test_paste_replaces_selection():
    state, buf = make()
    type_text(state, buf, "hello")
    state.key(buf, KM.line_start | KM.shift)
    assert state.paste(buf, "bye") is True
    assert str(buf) == "bye"
    assert state.cursor == len("bye")


def test_paste_refused_by_buffer_can_be_undone():
    state, buf = make(max_length=4)
    type_text(state, buf, "abc")
    state.key(buf, KM.left | KM.shift)
    assert state.paste(buf, "12345") is False
    assert str(buf) == "ab"
    state.key(buf, KM.undo)
    assert str(buf) == "abc"


def test_undo_redo_round_trip():
    state, buf = make()
    type_text(state, buf, "abc")
    state.key(buf, KM.undo)
    assert str(buf) == "ab"
    state.key(buf, KM.redo)
    assert str(buf) == "abc"
    assert state.cursor == len("abc")


def test_shifted_undo_does_nothing():
    state, buf = make()
    type_text(state, buf, "ab")
    state.key(buf, KM.undo | KM.shift)
    assert str(buf) == "ab"


def test_insert_mode_overwrites_and_undo_restores():
    state, buf = make("abc")
    state.key(buf, KM.insert)
    assert state.insert_mode is True
    state.key(buf, ord("X"))
    assert str(buf) == "Xbc"
    state.key(buf, KM.undo)
    assert str(buf) == "abc"


def test_down_and_up_keep_column():
    text = "abc\ndef"
    state, buf = make(text)
    state.cursor = text.index("b")
    state.key(buf, KM.down)
    assert state.cursor == text.index("e")
    state.key(buf, KM.up)
    assert state.cursor == text.index("b")


def test_down_on_last_line_does_nothing():
    text = "abc\ndef"
    state, buf = make(text)
    state.cursor = text.index("e")
    state.key(buf, KM.down)
    assert state.cursor == text.index("e")


def test_down_stops_at_end_of_shorter_line():
    text = "abcdef\nxy\nz"
    state, buf = make(text)
    state.cursor = text.index("f")
    state.key(buf, KM.down)
    assert state.cursor == text.index("\nz")


def test_single_line_up_down_act_as_left_right():
    state, buf = make("abc", single_line=True)
    state.cursor = 1
    state.key(buf, KM.down)
    assert state.cursor == 2
    state.key(buf, KM.up)
    assert state.cursor == 1


def test_page_down_moves_several_rows():
    text = "a\nb\nc\nd"
    state, buf = make(text)
    state.row_count_per_page = 2
    state.key(buf, KM.page_down)
    assert state.cursor == text.index("c")


def test_line_start_and_end():
    text = "abc\ndef"
    state, buf = make(text)
    state.cursor = text.index("e")
    state.key(buf, KM.line_start)
    assert state.cursor == text.index("d")
    state.key(buf, KM.line_end)
    assert state.cursor == len(text)


def test_shift_line_end_selects_rest_of_line():
    text = "abc\ndef"
    state, buf = make(text)
    state.cursor = text.index("b")
    state.key(buf, KM.line_end | KM.shift)
    assert state.selection == (text.index("b"), text.index("\n"))


def test_text_end_shift_selects_everything_from_cursor():
    state, buf = make("hello")
    state.key(buf, KM.text_end | KM.shift)
    assert state.selection == (0, len("hello"))


def test_word_movement():
    text = "hello world foo"
    state, buf = make(text)
    state.key(buf, KM.text_end)
    state.key(buf, KM.word_left)
    assert state.cursor == text.index("foo")
    state.key(buf, KM.word_left)
    assert state.cursor == text.index("world")
    state.key(buf, KM.word_right)
    assert state.cursor == text.index("foo")


def test_click_locates_characters():
    text = "abc\ndef"
    state, buf = make(text)
    state.click(buf, 1.2, 0.5)
    assert state.cursor == text.index("b")
    state.click(buf, 50.0, 0.5)
    assert state.cursor == text.index("\n")
    state.click(buf, 2.2, 1.5)
    assert state.cursor == text.index("f")
    state.click(buf, 0.0, 50.0)
    assert state.cursor == len(text)


def test_drag_extends_selection():
    text = "abcdef"
    state, buf = make(text, single_line=True)
    state.click(buf, 1.0, 0.0)
    state.drag(buf, 4.0, 99.0)
    assert state.selection == (text.index("b"), text.index("e"))


def test_clamp_after_outside_edit():
    state, buf = make("abcdef")
    state.select_start, state.select_end, state.cursor = 4, 6, 6
    buf.delete(2, 4)
    state.clamp(buf)
    assert state.cursor == len(buf)
    assert not state.has_selection()


def test_reset_forgets_history():
    state, buf = make()
    type_text(state, buf, "ab")
    state.reset(single_line=True)
    state.key(buf, KM.undo)
    assert str(buf) == "ab"
    assert state.single_line is True
    assert state.cursor == 0


@settings(max_examples=60)
@given(st.text(alphabet="ab \n", max_size=40))
def test_undo_everything_then_redo_everything(text):
    state, buf = make()
    type_text(state, buf, text)
    for _ in text:
        state.key(buf, KM.undo)
    assert str(buf) == ""
    for _ in text:
        state.key(buf, KM.redo)
    assert str(buf) == text


_KEYS = [
    KM.left, KM.right, KM.up, KM.down, KM.page_up, KM.page_down,
    KM.line_start, KM.line_end, KM.text_start, KM.text_end,
    KM.delete, KM.backspace, KM.undo, KM.redo, KM.word_left, KM.word_right,
    KM.insert, ord("a"), ord(" "), ord("\n"),
]