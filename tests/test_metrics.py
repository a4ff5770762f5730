from placenotes.metrics import (
    CHAR_WIDTH,
    LINE_HEIGHT,
    MIN_HEIGHT,
    MIN_WIDTH,
    PADDING,
    measure,
    split_lines,
)


def test_empty_text_is_one_line_at_minimum_size() -> None:
    assert split_lines("") == [""]
    assert measure("") == (MIN_WIDTH, MIN_HEIGHT)


def test_short_text_is_clamped_to_minimums() -> None:
    assert measure("A") == (MIN_WIDTH, MIN_HEIGHT)


def test_size_follows_longest_line_and_line_count() -> None:
    text = "x" * 20 + "\nshort\n"
    width, height = measure(text)
    assert width == CHAR_WIDTH * 20 + PADDING
    assert height == LINE_HEIGHT * 3 + PADDING


def test_line_break_styles_are_normalised() -> None:
    assert split_lines("a\r\nb\rc\nd") == ["a", "b", "c", "d"]
    assert measure("a\r\nb") == measure("a\nb")


def test_width_is_monotonic_in_longest_line() -> None:
    previous = measure("")[0]
    for n in range(1, 60):
        width = measure("m" * n)[0]
        assert width >= previous
        previous = width


def test_height_is_monotonic_in_line_count() -> None:
    previous = measure("")[1]
    for n in range(1, 30):
        height = measure("\n".join(["l"] * n))[1]
        assert height >= previous
        previous = height


def test_never_below_minimums() -> None:
    for text in ["", " ", "\n", "ab", "a\nb", "\t"]:
        width, height = measure(text)
        assert width >= MIN_WIDTH
        assert height >= MIN_HEIGHT
