"""Parser combinators working directly on the source text: there is no separate token stream.

A parser is any callable parser(state, pos) -> (new_pos, value). On a mismatch it raises Mismatch through
ParseState.fail and consumes nothing: positions are plain offsets, so a caller backtracks by simply retrying from the
offset it already holds. ParseState remembers the furthest offset any parser failed at, which is what gets reported
to the user once the whole parse fails.
"""

from arrowlang.lang.error import ParseError

WHITESPACE = frozenset(" \t\r\n")


class Mismatch(Exception):
    """Internal signal that a parser did not match at position. Never escapes parse_prefix/parse_all."""

    def __init__(self, position, expected):
        super().__init__(position, expected)
        self.position = position
        self.expected = expected


class ParseState:
    """Source text being parsed and the furthest failure seen so far."""

    def __init__(self, source):
        self.source = source
        self.furthest = -1
        self.expected = []  # descriptions of what would have matched at self.furthest

    def fail(self, position, expected):
        """Records a failure at position and raises Mismatch."""
        if position > self.furthest:
            self.furthest = position
            self.expected = [expected]
        elif position == self.furthest and expected not in self.expected:
            self.expected.append(expected)
        raise Mismatch(position, expected)

    def error(self):
        """ParseError describing the furthest failure."""
        position = max(self.furthest, 0)
        expected = " or ".join(self.expected) if self.expected else "valid input"
        return ParseError(self.source, position, expected)


def parse_prefix(parser, source, pos=0):
    """Runs parser on source from pos, returning (new_pos, value). Raises ParseError on mismatch."""
    state = ParseState(source)
    try:
        return parser(state, pos)
    except Mismatch:
        raise state.error() from None


def parse_all(parser, source):
    """Runs parser on the whole of source, returning its value. Raises ParseError on mismatch or leftover input."""
    state = ParseState(source)
    try:
        pos, result = parser(state, 0)
        end_of_input(state, pos)
    except Mismatch:
        raise state.error() from None
    return result


def end_of_input(state, pos):
    if pos != len(state.source):
        state.fail(pos, "end of input")
    return pos, None


def literal(text):
    """Matches text exactly."""
    expected = f"'{text}'"

    def parse(state, pos):
        if state.source.startswith(text, pos):
            return pos + len(text), text
        state.fail(pos, expected)

    return parse


def keyword(word, word_chars):
    """Matches word only if it is not immediately followed by one of word_chars."""
    expected = f"'{word}'"

    def parse(state, pos):
        end = pos + len(word)
        if state.source.startswith(word, pos) and (end == len(state.source) or state.source[end] not in word_chars):
            return end, word
        state.fail(pos, expected)

    return parse


def char_in(chars, expected):
    """Matches one character in chars."""

    def parse(state, pos):
        if pos < len(state.source) and state.source[pos] in chars:
            return pos + 1, state.source[pos]
        state.fail(pos, expected)

    return parse


def char_not_in(chars, expected):
    """Matches one character that is not in chars."""

    def parse(state, pos):
        if pos < len(state.source) and state.source[pos] not in chars:
            return pos + 1, state.source[pos]
        state.fail(pos, expected)

    return parse


def take_while(predicate, expected):
    """Matches the longest nonempty run of characters satisfying predicate."""

    def parse(state, pos):
        end = pos
        while end < len(state.source) and predicate(state.source[end]):
            end += 1
        if end == pos:
            state.fail(pos, expected)
        return end, state.source[pos:end]

    return parse


def ws(state, pos):
    """Skips zero or more whitespace characters. Never fails."""
    while pos < len(state.source) and state.source[pos] in WHITESPACE:
        pos += 1
    return pos, None


def sequence(*parsers):
    """Matches every parser in order, returning a tuple of their values."""

    def parse(state, pos):
        values = []
        for parser in parsers:
            pos, result = parser(state, pos)
            values.append(result)
        return pos, tuple(values)

    return parse


def alternative(*parsers):
    """Tries parsers in order and commits to the first one that matches."""

    def parse(state, pos):
        for parser in parsers:
            try:
                return parser(state, pos)
            except Mismatch:
                continue
        raise Mismatch(pos, "alternative")  # each branch has already recorded what it expected

    return parse


def optional(parser, default=None):
    """Matches parser if possible, otherwise matches nothing and returns default."""

    def parse(state, pos):
        try:
            return parser(state, pos)
        except Mismatch:
            return pos, default

    return parse


def many(parser):
    """Matches parser zero or more times, returning a list of values."""

    def parse(state, pos):
        values = []
        while True:
            try:
                new_pos, result = parser(state, pos)
            except Mismatch:
                return pos, values
            if new_pos == pos:  # zero-width match would loop forever
                return pos, values
            pos = new_pos
            values.append(result)

    return parse


def sep_by(parser, separator, trailing=False):
    """Matches zero or more parser separated by separator, returning a list of values. If trailing, a separator may
    follow the last value.
    """

    def parse(state, pos):
        try:
            pos, first = parser(state, pos)
        except Mismatch:
            return pos, []

        values = [first]
        while True:
            try:
                after_sep, __ = separator(state, pos)
            except Mismatch:
                return pos, values

            try:
                pos, result = parser(state, after_sep)
            except Mismatch:
                return (after_sep if trailing else pos), values
            values.append(result)

    return parse


def mapped(parser, func):
    """Matches parser and returns func(value)."""

    def parse(state, pos):
        pos, result = parser(state, pos)
        return pos, func(result)

    return parse


def value(result, parser):
    """Matches parser and returns result instead of its value."""
    return mapped(parser, lambda __: result)


def wrapped(opening, parser, closing):
    """Matches opening, parser, closing and returns the value of parser only."""
    return mapped(sequence(opening, parser, closing), lambda values: values[1])


def labelled(parser, expected):
    """Matches parser. If it fails without getting past pos, the failure is reported as expected instead of whatever
    parser's branches expected.
    """

    def parse(state, pos):
        furthest, expecting = state.furthest, list(state.expected)
        try:
            return parser(state, pos)
        except Mismatch:
            if state.furthest <= pos:
                state.furthest, state.expected = furthest, expecting
                state.fail(pos, expected)
            raise

    return parse


def recognized(parser):
    """Matches parser and returns the source text it consumed."""

    def parse(state, pos):
        new_pos, __ = parser(state, pos)
        return new_pos, state.source[pos:new_pos]

    return parse


def located(parser):
    """Matches parser and returns (offset, value), offset being where the value starts after any whitespace."""

    def parse(state, pos):
        start, __ = ws(state, pos)
        new_pos, result = parser(state, pos)
        return new_pos, (start, result)

    return parse
