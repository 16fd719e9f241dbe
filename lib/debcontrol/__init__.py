"""Incremental parser for Debian control files (deb822)

Quick start::

    from debcontrol import iter_paragraphs, parse_complete

    with open('debian/control', 'rb') as fd:
        for paragraph in iter_paragraphs(fd):
            print(paragraph.get('Package'))

    paragraphs = parse_complete(text)

See debcontrol.buffering for the low level streaming protocol and
debcontrol.parsing for parsing paragraphs out of a str.
"""

# The "from X import Y as Y" form is what mypy --strict wants for re-exports.
# pylint: disable=useless-import-alias
from debcontrol.buffering import (
    BufParse as BufParse,
    DEFAULT_CHUNK_SIZE as DEFAULT_CHUNK_SIZE,
    iter_paragraphs as iter_paragraphs,
)
from debcontrol.errors import (
    ControlEncodingError as ControlEncodingError,
    ControlParseError as ControlParseError,
    ControlSyntaxError as ControlSyntaxError,
)
from debcontrol.parsing import (
    parse_complete as parse_complete,
    parse_finish as parse_finish,
    parse_streaming as parse_streaming,
)
from debcontrol.types import (
    Field as Field,
    INCOMPLETE as INCOMPLETE,
    Item as Item,
    Paragraph as Paragraph,
)

__all__ = [
    'BufParse',
    'DEFAULT_CHUNK_SIZE',
    'iter_paragraphs',
    'ControlEncodingError',
    'ControlParseError',
    'ControlSyntaxError',
    'parse_complete',
    'parse_finish',
    'parse_streaming',
    'Field',
    'INCOMPLETE',
    'Item',
    'Paragraph',
]
