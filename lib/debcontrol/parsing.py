# Copyright (C) 2024 The debcontrol authors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

r"""Paragraph grammar for control files

A control file is a series of paragraphs separated by blank lines.  Each
paragraph is a series of fields::

    # Comments start with a hash and may appear anywhere
    Package: foo
    Description: short description
     continuation lines start with a space or a tab
    # and comments do not end a value
     so this line still belongs to Description

The functions in this module parse one paragraph at a time from a str.
parse_streaming() treats the end of the text as "the rest has not arrived
yet", while parse_finish() treats it as the end of the file:

>>> parse_streaming('Package: foo\n\nPackage: bar\n')
Item(remaining='Package: bar\n', paragraph=Paragraph([Field(name='Package', value='foo')]))
>>> parse_streaming('Package: bar\n')
INCOMPLETE
>>> parse_finish('Package: bar\n')
Paragraph([Field(name='Package', value='bar')])
"""

import re
import sys

from debcontrol.errors import ControlSyntaxError
from debcontrol.types import Field, INCOMPLETE, Item, Paragraph

try:
    from typing import List, Optional, Tuple, Union, TYPE_CHECKING
except ImportError:  # pragma: no cover
    TYPE_CHECKING = False

if TYPE_CHECKING:
    from debcontrol.types import _Incomplete


# From Policy 5.1:
#
#    The field name is composed of US-ASCII characters excluding control
#    characters, space, and colon (i.e., characters in the ranges U+0021
#    (!) through U+0039 (9), and U+003B (;) through U+007E (~),
#    inclusive). Field names must not begin with the comment character
#    (U+0023 #), nor with the hyphen character (U+002D -).
#
# Anything outside of that (including non-ASCII letters) is rejected.
_RE_FIELD_LINE = re.compile(r'''
    (?P<field_name>                            # Capture group for the field name
        [\x21\x22\x24-\x2C\x2E-\x39\x3B-\x7E]  # First character
        [\x21-\x39\x3B-\x7E]*                  # Subsequent characters (if any)
    )
    (?P<separator> : )
''', re.VERBOSE)
_RE_FIELD_NAME_CHARS = re.compile(r'[\x21-\x39\x3B-\x7E]*')

_HORIZONTAL_WHITESPACE = ' \t'
# A CR of a CRLF line ending is insignificant whitespace as well
_TRAILING_WHITESPACE = ' \t\r'

_LINE_BLANK = 'blank'
_LINE_COMMENT = 'comment'
_LINE_CONTINUATION = 'continuation'
_LINE_FIELD = 'field'


def _classify_line(text, pos, line, in_field):
    # type: (str, int, str, bool) -> Tuple[str, Optional[str], str]
    """Determine the kind of a complete line

    Returns (kind, field name, value).  The value is already stripped of
    surrounding whitespace; for comment and blank lines it is empty.

    Any line starting with a space or a tab continues the current field,
    even if there is nothing else on it.  Only outside of a field such a
    line counts as blank.
    """
    first = line[:1]
    if in_field and first and first in _HORIZONTAL_WHITESPACE:
        # The leading whitespace is the continuation marker itself
        return _LINE_CONTINUATION, None, line.strip(_TRAILING_WHITESPACE)
    if not line.strip(_TRAILING_WHITESPACE):
        return _LINE_BLANK, None, ''
    if first == '#':
        return _LINE_COMMENT, None, ''
    if first in _HORIZONTAL_WHITESPACE:
        # Continuation line without a field to continue
        raise ControlSyntaxError(text[pos:])
    m = _RE_FIELD_LINE.match(line)
    if m is None:
        raise ControlSyntaxError(text[pos:])
    return _LINE_FIELD, m.group('field_name'), line[m.end():].strip(_TRAILING_WHITESPACE)


def _check_partial_line(text, pos, in_field):
    # type: (str, int, bool) -> None
    """Reject a line without line ending if no continuation can make it valid

    Only used in streaming mode, where the rest of the line may not have
    arrived yet.  Returning normally means the line is still undecided.
    """
    line = text[pos:]
    if not line.strip(_TRAILING_WHITESPACE) or line[0] == '#':
        return
    if line[0] in _HORIZONTAL_WHITESPACE:
        if not in_field:
            raise ControlSyntaxError(line)
        return
    if _RE_FIELD_NAME_CHARS.match(line).end() == len(line):
        # The name itself may not be complete yet.
        return
    if _RE_FIELD_LINE.match(line) is None:
        raise ControlSyntaxError(line)


def _build_field(name, values):
    # type: (str, List[str]) -> Field
    # Empty lines are kept between other lines, but a value never starts or
    # ends with one (e.g. "Files:" with the data on continuation lines).
    return Field(sys.intern(name), '\n'.join(values).strip('\n'))


def _parse_paragraph(text, pos, final):
    # type: (str, int, bool) -> Union[_Incomplete, Tuple[Optional[Paragraph], int]]
    """Parse one paragraph of text starting at pos

    Leading blank and comment lines are skipped.  The paragraph ends at the
    first blank line after a field, which is consumed (further blank lines
    are left for the next call).  When final is False, reaching the end of
    the text without a terminator gives INCOMPLETE.  Otherwise the end of
    the text terminates the paragraph.

    Returns INCOMPLETE or (paragraph or None, position after the paragraph).
    """
    end = len(text)
    fields = []  # type: List[Field]
    current_name = None  # type: Optional[str]
    current_values = []  # type: List[str]

    while pos < end:
        newline = text.find('\n', pos)
        if newline < 0:
            if not final:
                _check_partial_line(text, pos, current_name is not None)
                return INCOMPLETE
            line = text[pos:]
            next_pos = end
        else:
            line = text[pos:newline]
            next_pos = newline + 1

        kind, name, value = _classify_line(text, pos, line, current_name is not None)
        if kind == _LINE_BLANK:
            if current_name is not None:
                fields.append(_build_field(current_name, current_values))
                return Paragraph(fields), next_pos
        elif kind == _LINE_CONTINUATION:
            current_values.append(value)
        elif kind == _LINE_FIELD:
            assert name is not None
            if current_name is not None:
                fields.append(_build_field(current_name, current_values))
            current_name = name
            current_values = [value]
        pos = next_pos

    if not final:
        # One more continuation line (or comment) could still arrive.
        return INCOMPLETE
    if current_name is None:
        return None, pos
    fields.append(_build_field(current_name, current_values))
    return Paragraph(fields), pos


def parse_streaming(text):
    # type: (str) -> Union[Item, _Incomplete]
    """Parse the next paragraph from text that may continue later

    :param text: The input available so far.
    :return: Item(remaining, paragraph) if a paragraph and its terminating
      blank line were found, INCOMPLETE if the text is a valid start of a
      paragraph (including empty text and text with only blank or comment
      lines).
    :raises ControlSyntaxError: if the text can never become valid, no
      matter what follows.  Field names are checked as soon as the
      character after them is known, even on a line without line ending.
    """
    result = _parse_paragraph(text, 0, False)
    if result is INCOMPLETE:
        return INCOMPLETE
    paragraph, pos = result
    return Item(text[pos:], paragraph)


def parse_finish(text):
    # type: (str) -> Optional[Paragraph]
    """Parse the last paragraph of a file

    The end of the text is a definite paragraph terminator.  Trailing blank
    and comment lines are fine, but the text must not contain more than one
    paragraph.

    :return: The paragraph or None if the text contains no fields.
    :raises ControlSyntaxError: on invalid syntax, including a field name
      without colon at the end of the text.
    """
    paragraph, pos = _parse_paragraph(text, 0, True)
    rest, end = _parse_paragraph(text, pos, True)
    if rest is not None:
        raise ControlSyntaxError(text[pos:],
                                 'Unexpected paragraph after the final paragraph: "{line}"'.format(
                                     line=rest[0].name))
    assert end == len(text)
    return paragraph


def parse_complete(text):
    # type: (str) -> List[Paragraph]
    r"""Parse all paragraphs of a control file held in memory

    >>> [p.get('Package') for p in parse_complete('Package: foo\n\n\nPackage: bar')]
    ['foo', 'bar']

    :raises ControlSyntaxError: for the first syntax error in the text.
    """
    paragraphs = []  # type: List[Paragraph]
    pos = 0
    while True:
        paragraph, pos = _parse_paragraph(text, pos, True)
        if paragraph is None:
            return paragraphs
        paragraphs.append(paragraph)
