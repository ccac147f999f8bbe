import pytest

from formedit.events import (
    EventStream,
    Key,
    KeyboardEvent,
    MouseAction,
    MouseEvent,
    parse_keycode,
)


class TestKeyboard:
    @pytest.mark.parametrize(
        "code,expected",
        [
            ("\r", [KeyboardEvent(Key.ENTER)]),
            ("\n", [KeyboardEvent(Key.ENTER)]),
            ("\r\n", [KeyboardEvent(Key.ENTER)]),
            ("\t", [KeyboardEvent(Key.TAB)]),
            ("\x1b", [KeyboardEvent(Key.ESCAPE)]),
            ("\x1b\x1b", [KeyboardEvent(Key.ESCAPE, alt=True)]),
            ("\x7f", [KeyboardEvent(Key.BACKSPACE)]),
            ("\x08", [KeyboardEvent(Key.BACKSPACE)]),
            ("\x01", [KeyboardEvent("a", ctrl=True)]),
            ("\x0b", [KeyboardEvent("k", ctrl=True)]),
            ("\x1bb", [KeyboardEvent("b", alt=True)]),
            ("\x1b[A", [KeyboardEvent(Key.ARROW_UP)]),
            ("\x1bOB", [KeyboardEvent(Key.ARROW_DOWN)]),
            ("\x1b[1;2C", [KeyboardEvent(Key.ARROW_RIGHT, shift=True)]),
            ("\x1b[1;5D", [KeyboardEvent(Key.ARROW_LEFT, ctrl=True)]),
            ("\x1b[1;3D", [KeyboardEvent(Key.ARROW_LEFT, alt=True)]),
            ("\x1b\x1b[D", [KeyboardEvent(Key.ARROW_LEFT, alt=True)]),
            ("\x1b[Z", [KeyboardEvent(Key.SHIFT_TAB)]),
            ("\x1b[H", [KeyboardEvent(Key.HOME)]),
            ("\x1b[1~", [KeyboardEvent(Key.HOME)]),
            ("\x1b[4~", [KeyboardEvent(Key.END)]),
            ("\x1b[F", [KeyboardEvent(Key.END)]),
            ("\x1b[3~", [KeyboardEvent(Key.DELETE)]),
            ("\x1b[5~", [KeyboardEvent(Key.PAGE_UP)]),
            ("\x1b[6;2~", [KeyboardEvent(Key.PAGE_DOWN, shift=True)]),
            ("\x1bOP", [KeyboardEvent(Key.F1)]),
            ("\x1b[11~", [KeyboardEvent(Key.F1)]),
            ("\x1b[21~", [KeyboardEvent(Key.F10)]),
            ("\x1b[99~", []),
            ("é", [KeyboardEvent("é")]),
            ("\x00", []),
            (
                "a\x1b[Cb",
                [
                    KeyboardEvent("a"),
                    KeyboardEvent(Key.ARROW_RIGHT),
                    KeyboardEvent("b"),
                ],
            ),
        ],
    )
    def test_parse(self, code, expected):
        assert parse_keycode(code) == expected

    def test_is_plain(self):
        assert KeyboardEvent("a").is_plain
        assert not KeyboardEvent(Key.ARROW_UP, shift=True).is_plain
        assert not KeyboardEvent("a", ctrl=True).is_plain

    def test_hashable(self):
        assert {KeyboardEvent("a"): 1}[KeyboardEvent("a")] == 1

    @pytest.mark.parametrize(
        "key,expected", [(Key.PAGE_UP, "Page Up"), (Key.F10, "F10"), (Key.TAB, "Tab")]
    )
    def test_str(self, key, expected):
        assert str(key) == expected


class TestMouse:
    @pytest.mark.parametrize(
        "code,expected",
        [
            ("\x1b[<0;1;1M", [MouseEvent(0, 0, MouseAction.LEFT_DOWN)]),
            ("\x1b[<0;10;5m", [MouseEvent(9, 4, MouseAction.LEFT_UP)]),
            ("\x1b[<4;1;1M", [MouseEvent(0, 0, MouseAction.LEFT_DOWN, shift=True)]),
            ("\x1b[<64;3;4M", [MouseEvent(2, 3, MouseAction.SCROLL_UP)]),
            ("\x1b[<65;3;4M", [MouseEvent(2, 3, MouseAction.SCROLL_DOWN)]),
            ("\x1b[<32;1;1M", []),
            ("\x1b[<2;1;1M", []),
            ("\x1b[<1;1;1m", []),
        ],
    )
    def test_parse(self, code, expected):
        assert parse_keycode(code) == expected


class TestEventStream:
    def test_click(self):
        stream = EventStream(lambda: "")
        events = stream.feed("\x1b[<0;2;3M") + stream.feed("\x1b[<0;2;3m")
        assert events == [
            MouseEvent(1, 2, MouseAction.LEFT_DOWN),
            MouseEvent(1, 2, MouseAction.LEFT_UP),
            MouseEvent(1, 2, MouseAction.LEFT_CLICK),
        ]

    def test_drag_is_not_a_click(self):
        stream = EventStream(lambda: "")
        events = stream.feed("\x1b[<0;2;3M\x1b[<0;5;3m")
        assert [e.action for e in events] == [MouseAction.LEFT_DOWN, MouseAction.LEFT_UP]

    def test_up_without_down(self):
        stream = EventStream(lambda: "")
        assert len(stream.feed("\x1b[<0;2;3m")) == 1

    def test_iterate(self):
        codes = iter(["ab", "\x1b[A", "\r"])
        events = list(EventStream(codes.__next__))
        assert events == [
            KeyboardEvent("a"),
            KeyboardEvent("b"),
            KeyboardEvent(Key.ARROW_UP),
            KeyboardEvent(Key.ENTER),
        ]
