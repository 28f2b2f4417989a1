# paneplex

Pieces of a terminal workspace manager, for Python 3.10+ on POSIX systems.
The package has no third-party dependencies.

## What is in it

- **`paneplex.theme`**: colours and styles. `Palette` (with
  `default_palette()`), `PaletteColor` (RGB or 256-colour), `Style`
  (`bold()`, `dimmed()`, `reversed()`, `paint(text)` wraps text in SGR
  escape sequences), `InputMode`, `ModeInfo` (mode, keybindings as
  `(key, description)` pairs, palette, capabilities, session name) and
  `LinePart` (rendered text plus its on-screen width).
- **Status bar** (`paneplex.status_bar.StatusBar`): `update(mode_info)` stores
  the current mode; `render(rows, cols)` returns two lines. The first shows
  ` Ctrl +` followed by the mode shortcuts (LOCK, PANE, TAB, RESIZE, SCROLL,
  SESSION, QUIT), in full, as single letters, or not at all, whichever fits.
  The second shows the keybindings of the current mode: full descriptions,
  then only their first words, then as many as fit followed by ` ... `. In
  normal mode it shows a navigation tip, in locked mode
  ` -- INTERFACE LOCKED -- `. The pieces are also available as
  `paneplex.status_first_line.superkey` / `ctrl_keys` and
  `paneplex.status_second_line.keybinds`.
- **Tab bar** (`paneplex.tab_bar.TabBar`, `TabInfo`): `update_tabs(tabs)`,
  `update_mode(mode_info)` and `render(rows, cols)`, which returns one line
  (or an empty string when there are no tabs). `paneplex.tab_line.tab_line`
  keeps the active tab visible, adds neighbouring tabs while they fit, and
  collapses the rest into `← +N` / `+N →` markers after a ` Paneplex `
  (optionally `(session) `) prefix. Tabs with synchronised panes are marked
  `(Sync)`; an unnamed active tab in rename mode shows `Enter name...`.
- **File browser pane** (`paneplex.strider.Strider`): lists a directory,
  directories first. `handle_key(key)` takes a character or `"Up"`, `"Down"`,
  `"Left"`, `"Right"`: `k`/`j` move, `l`/Enter/Right enter a directory or
  return the path of the chosen file, `h`/Left go to the parent, `.` toggles
  hidden files. The cursor position is remembered per directory.
  `render(rows, cols)` returns the listing with sizes (`pretty_bytes`) and the
  selected line highlighted.
- **Input handling** (`paneplex.input_handler`): `parse_events(data)` splits
  raw terminal bytes into `Key`, `MouseEvent` or unrecognised `bytes`, each
  with its source bytes. `InputHandler` / `input_loop` read input, honour
  bracketed paste, turn keys into `Action`s through a `key_to_actions`
  callable you supply, translate mouse presses, releases and holds, and send
  actions through the `os_input` object's `send_to_server`. Pane and tab
  commands block until `CommandIsExecuting.unblock_input_thread()` is called
  (`paneplex.command_is_executing`). Quit and detach end the loop.
- **Terminal access** (`paneplex.client_os`): `get_client_os_input()`
  returns a `ClientOsInputOutput` for the terminal on stdin, with raw mode
  on and off, terminal size (`get_terminal_size_using_fd`), reading stdin,
  mouse reporting on and off, signal handling (resize and quit signals), and
  an action repeater that resends an action until stdin is readable
  (`StdinPoller`).
- **Sessions** (`paneplex.sessions`): `get_sessions(sock_dir)` lists the
  live session sockets in a directory and removes ones nobody listens on;
  `list_sessions`, `get_active_session`, `assert_session` and
  `assert_session_ne` build on it and raise `SessionError` on failure. The
  current session is read from `PANEPLEX_SESSION_NAME`.
- **Asset installation** (`paneplex.install.populate_data_dir`): writes
  assets and a `VERSION` file under a data directory, rewriting all assets
  when the recorded version differs and otherwise only missing ones.

## Examples

Rendering the bars:

```python
from paneplex.status_bar import StatusBar
from paneplex.tab_bar import TabBar, TabInfo

print(StatusBar().render(2, 80), end="")

bar = TabBar()
bar.update_tabs([TabInfo(0, "Tab #1", active=True), TabInfo(1, "Tab #2")])
print(bar.render(1, 80), end="")
```

Parsing terminal input:

```python
from paneplex.input_handler import parse_events

for event, raw in parse_events(b"\x1bh\x1b[A"):
    print(event, raw)
```

Listing live sessions:

```python
from paneplex.sessions import SessionError, list_sessions

try:
    print(list_sessions("/tmp/paneplex/sockets"))
except SessionError as err:
    print(err)
```

Installing default assets on first run or after an upgrade:

```python
from pathlib import Path
from paneplex.install import populate_data_dir

populate_data_dir(
    Path.home() / ".local/share/paneplex",
    {"plugins/example.bin": b"..."},
    "0.1.0",
)
```

Coordinating an input thread with a worker:

```python
from paneplex.command_is_executing import CommandIsExecuting

gate = CommandIsExecuting()
gate.blocking_input_thread()
# ... another thread calls gate.unblock_input_thread() when done ...
gate.wait_until_input_thread_is_unblocked()
```

## What it does not do

- There is no command-line program and no server: nothing here starts
  sessions, runs shells in panes, or draws the panes themselves.
- There is no messaging between a client and a server. `InputHandler`
  expects an `os_input` object with `send_to_server`, which
  `ClientOsInputOutput` does not provide; you supply it.
- There are no built-in keybindings or configuration files: the mapping from
  keys to actions is the `key_to_actions` callable you pass in.
- The plugins render to strings; they are not loaded into any host.

## Tests

The test suite uses pytest: `pip install -e .[test]` and then `pytest`.