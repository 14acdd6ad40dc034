from __future__ import annotations

import random

from femto.buffer import Buffer, Viewport


def make_buffer(*lines: bytes, row: int = 0, col: int = 0) -> Buffer:
    buffer = Buffer.from_lines(lines)
    buffer.move_to(row, col)
    return buffer


def test_backspace_at_line_start_merges_with_previous_line() -> None:
    buffer = make_buffer(b"ab", b"cd", row=1, col=0)

    assert buffer.delete_backward() is True

    assert buffer.document.snapshot() == (b"abcd",)
    assert buffer.cursor == (0, 2)


def test_newline_splits_line_at_cursor() -> None:
    buffer = make_buffer(b"abcd", row=0, col=2)

    buffer.insert_newline()

    assert buffer.document.snapshot() == (b"ab", b"cd")
    assert buffer.cursor == (1, 0)


def test_newline_on_empty_document_creates_one_line() -> None:
    buffer = Buffer()

    buffer.insert_newline()

    assert buffer.document.snapshot() == (b"",)
    assert buffer.cursor == (0, 0)


def test_newline_past_last_line_appends_empty_line() -> None:
    buffer = make_buffer(b"a")
    buffer.move_down()
    assert buffer.cursor == (1, 0)

    buffer.insert_newline()

    assert buffer.document.snapshot() == (b"a", b"")
    assert buffer.cursor == (2, 0)


def test_backspace_at_document_start_is_noop() -> None:
    buffer = make_buffer(b"abc")

    assert buffer.delete_backward() is False

    assert buffer.document.snapshot() == (b"abc",)
    assert buffer.dirty is False


def test_delete_at_end_of_last_line_is_noop() -> None:
    buffer = make_buffer(b"ab", b"cd", row=1, col=2)

    assert buffer.delete_forward() is False

    assert buffer.document.snapshot() == (b"ab", b"cd")
    assert buffer.dirty is False


def test_delete_forward_removes_character_under_cursor() -> None:
    buffer = make_buffer(b"abc", row=0, col=1)

    assert buffer.delete_forward() is True

    assert buffer.document.snapshot() == (b"ac",)
    assert buffer.cursor == (0, 1)


def test_delete_forward_at_line_end_joins_next_line() -> None:
    buffer = make_buffer(b"ab", b"cd", row=0, col=2)

    buffer.delete_forward()

    assert buffer.document.snapshot() == (b"abcd",)
    assert buffer.cursor == (0, 2)


def test_insert_char_past_last_line_appends_a_line() -> None:
    buffer = Buffer()

    buffer.insert_char(ord("x"))

    assert buffer.document.snapshot() == (b"x",)
    assert buffer.cursor == (0, 1)
    assert buffer.dirty is True


def test_horizontal_movement_wraps_between_lines() -> None:
    buffer = make_buffer(b"ab", b"c", row=0, col=2)

    assert buffer.move_right() is True
    assert buffer.cursor == (1, 0)

    assert buffer.move_left() is True
    assert buffer.cursor == (0, 2)


def test_move_right_stops_at_end_of_last_line() -> None:
    buffer = make_buffer(b"ab", row=0, col=2)

    assert buffer.move_right() is False
    assert buffer.cursor == (0, 2)


def test_vertical_movement_clamps_column() -> None:
    buffer = make_buffer(b"abcdef", b"ab", row=0, col=5)

    buffer.move_down()

    assert buffer.cursor == (1, 2)


def test_move_down_can_reach_line_after_last() -> None:
    buffer = make_buffer(b"abc", row=0, col=3)

    assert buffer.move_down() is True
    assert buffer.cursor == (1, 0)
    assert buffer.move_down() is False


def test_home_end_and_paging() -> None:
    lines = [f"line {i}".encode() for i in range(50)]
    buffer = Buffer.from_lines(lines, viewport=Viewport(rows=10, cols=40))

    buffer.move_end()
    assert buffer.cursor == (0, 6)
    buffer.move_home()
    assert buffer.cursor == (0, 0)

    buffer.page_down()
    assert buffer.cursor[0] == 19
    buffer.scroll()
    assert buffer.viewport.row_offset == 10

    buffer.page_up()
    assert buffer.cursor[0] == 0


def test_cursor_column_stays_in_line_bounds_under_random_edits() -> None:
    rng = random.Random(7)
    buffer = make_buffer(b"hello", b"world")

    for _ in range(300):
        choice = rng.randrange(6)
        if choice == 0:
            buffer.insert_char(rng.choice(b"ab\t"))
        elif choice == 1:
            buffer.delete_backward()
        elif choice == 2:
            buffer.delete_forward()
        elif choice == 3:
            buffer.move_left()
        elif choice == 4:
            buffer.move_right()
        elif rng.random() < 0.5:
            buffer.move_up()
        else:
            buffer.move_down()

        row, col = buffer.cursor
        assert 0 <= row <= buffer.document.line_count
        assert 0 <= col <= buffer.document.line_length(row)


def test_mirror_reports_rendered_rows_and_screen_cursor() -> None:
    buffer = Buffer.from_lines(
        [b"\tab", b"cd"], filename="notes.txt", viewport=Viewport(rows=4, cols=20)
    )
    buffer.move_to(0, 1)
    buffer.scroll()

    mirror = buffer.mirror()

    assert mirror.rows == (b"  ab", b"cd", None, None)
    assert mirror.line_numbers == (1, 2, None, None)
    assert mirror.screen_cursor == (0, 2)
    assert mirror.filename == "notes.txt"
    assert mirror.margin == 0


def test_line_numbers_shift_screen_columns_without_moving_cursor() -> None:
    lines = [b"x"] * 12
    buffer = Buffer.from_lines(lines, line_numbers=True, viewport=Viewport(rows=5, cols=20))
    buffer.move_to(0, 1)

    buffer.scroll()
    mirror = buffer.mirror()

    assert mirror.margin == 3
    assert mirror.text_cols == 17
    assert mirror.screen_cursor == (0, 4)
    assert buffer.cursor == (0, 1)
