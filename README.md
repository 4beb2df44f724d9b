# textedit

The editing core of a text widget. You handle drawing and storing the text;
`textedit` turns mouse and keyboard input into inserts, deletes, cursor
moves, selection changes and undo/redo steps.

It supports single-line and multi-line fields, insert (overwrite) mode,
moving by word, page up and page down, and a bounded undo/redo history.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Concepts

- **Buffer**: anything that behaves like `textedit.buffer.TextBuffer`. It
  has `len()`, and `layout_row`, `char_width`, `char_at`, `delete` and
  `insert` (which returns False when the text does not fit).
  `LineBuffer` is a ready-made buffer: a string split into rows at newlines,
  every character the same width (or a width given by a callable taking the
  character), newlines of zero width, and an optional `max_length`.
  `str(buffer)` gives its text.
- **TextRow**: what `layout_row(start)` returns for one displayed row:
  `x0`, `x1`, `baseline_y_delta`, `ymin`, `ymax` and `num_chars`.
- **KeyMap** (`textedit.keys`): how integer key codes are read. Printable
  input is the character's code point, below `char_limit`; editing commands
  (`left`, `right`, `up`, `down`, `page_up`, `page_down`, `line_start`,
  `line_end`, `text_start`, `text_end`, `delete`, `backspace`, `undo`,
  `redo`, `word_left`, `word_right`, `insert`, and the optional secondary
  `line_start2`, `line_end2`, `text_start2`, `text_end2`) are codes at or
  above it. `shift` is a single bit OR-ed into a command to extend the
  selection. `base`, `is_shifted` and `key_to_char` decode a key.
- **TextEditState** (`textedit.editor`): one per text field. It holds
  `cursor`, `select_start`/`select_end` (and the ordered `selection`
  pair), `insert_mode`, `single_line`, `row_count_per_page` (set it above
  zero for page up/down), the preferred x for vertical moves, and its undo
  history `undostate`.

## Example

```python
from textedit.buffer import LineBuffer
from textedit.editor import TextEditState
from textedit.keys import KeyMap

keys = KeyMap()
buf = LineBuffer("hello world", char_width=8.0, line_height=16.0, max_length=256)
state = TextEditState(single_line=True, keymap=keys)

state.click(buf, 41.0, 4.0)      # cursor between "hello" and " world"
state.paste(buf, ",")            # "hello, world"
state.undo(buf)                  # back to "hello world"
state.redo(buf)                  # "hello, world" again
print(str(buf), state.cursor)    # hello, world 6

state.key(buf, keys.text_end)                 # cursor to the end
state.key(buf, keys.word_left | keys.shift)   # select "world"
state.cut(buf)                                # "hello, "
```

Mouse input goes through `click` and `drag`, keyboard input through
`key(buffer, code)`. `cut` deletes the selection (copy it out of the buffer
first if you need it); `paste` inserts text over the selection.

## Lower-level pieces

- `textedit.navigation`: `locate_coord` (position to character index),
  `find_charpos` (character index to a `FindState` with position and row),
  `is_word_boundary`, `move_word_left`, `move_word_right`.
- `textedit.undo`: `UndoState` and `UndoRecord`, the fixed-capacity
  undo/redo store used by the editor. By default it keeps 99 records and
  999 characters, dropping the oldest entries when space runs out.

## What it does not do

`textedit` draws nothing and reads no input devices; it has no clipboard
access and no command-line program. `LineBuffer` does not wrap words: rows
end only at newlines. For wrapping or proportional fonts, supply your own
buffer with its own `layout_row` and `char_width`.