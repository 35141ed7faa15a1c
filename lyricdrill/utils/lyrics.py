"""Lyrics text helpers."""


def lyrics_to_lines(text: str) -> list[list[str]]:
    """
    Split raw lyrics into lines of words.

    Surrounding whitespace is stripped first; each remaining line is split
    on runs of whitespace. Blank inner lines become empty word lists, so
    line indices match the original text.

    Examples:
        >>> lyrics_to_lines("I love you\\nyou love me")
        [['I', 'love', 'you'], ['you', 'love', 'me']]
    """
    return [line.split() for line in text.strip().split("\n")]
