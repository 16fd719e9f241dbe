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

"""Incremental parsing of control files from a byte stream

BufParse reads a source in chunks of a fixed size and hands out one
paragraph at a time, so arbitrarily large files (such as a Packages index)
can be processed without reading them into memory first.

The low level protocol consists of two methods.  try_next() returns a
Paragraph, INCOMPLETE (call buffer() and try again) or None (the input is
exhausted):

>>> import io
>>> parser = BufParse(io.BytesIO(SAMPLE_CONTROL), 16)
>>> while True:
...     result = parser.try_next()
...     if result is None:
...         break
...     if result is INCOMPLETE:
...         parser.buffer()
...         continue
...     print(result.get('Package'))
ostree
libostree-1-1

Iterating over the parser does the same:

>>> [p.get('Architecture') for p in BufParse(io.BytesIO(SAMPLE_CONTROL))]
[None, 'any']
"""

import logging

from debcontrol._util import decode_valid_prefix
from debcontrol.errors import ControlEncodingError
from debcontrol.parsing import _parse_paragraph, parse_finish
from debcontrol.types import INCOMPLETE

try:
    from typing import BinaryIO, Iterator, Optional, Union, TYPE_CHECKING
except ImportError:  # pragma: no cover
    TYPE_CHECKING = False

if TYPE_CHECKING:
    from debcontrol.types import _Incomplete, Paragraph


# The amount of bytes requested from the source per call to buffer()
DEFAULT_CHUNK_SIZE = 4096


logger = logging.getLogger('debcontrol.buffering')


class BufParse:
    """A streaming control file parser that buffers input internally

    :param source: Where the bytes come from.  Any object with a
      readinto(buffer) method returning the number of bytes read (0 at the
      end of the input) will do, such as a file opened in binary mode or
      io.BytesIO.  The parser never closes the source.
    :param chunk_size: How many bytes to request per call to buffer().

    Encoding and syntax errors are final: calling try_next() again after
    one of them raises the same error again.  Errors from the source are
    passed through unchanged, and buffer() may be retried after them.
    """

    def __init__(self, source, chunk_size=DEFAULT_CHUNK_SIZE):
        # type: (BinaryIO, int) -> None
        if chunk_size < 1:
            raise ValueError("chunk_size must be at least 1 (got {chunk_size})".format(
                chunk_size=chunk_size))
        self._source = source
        self._chunk_size = chunk_size
        self._buffer = bytearray()
        self._pos = 0
        self._exhausted = False
        # The valid UTF-8 prefix of the pending bytes, decoded once per chunk.
        # _text_pos is the part of _text that try_next() already consumed.
        self._text = None  # type: Optional[str]
        self._text_pos = 0
        self._decode_error = None  # type: Optional[UnicodeDecodeError]
        self._error_at = 0

    @property
    def exhausted(self):
        # type: () -> bool
        """True once the source reported that it has no more data"""
        return self._exhausted

    def buffer(self):
        # type: () -> None
        """Read the next chunk of input into the buffer

        Bytes already consumed by try_next() are discarded first.
        """
        del self._buffer[:self._pos]
        self._pos = 0
        self._text = None

        end = len(self._buffer)
        read = 0
        self._buffer.extend(bytes(self._chunk_size))
        try:
            with memoryview(self._buffer) as view, view[end:] as free:
                read = self._source.readinto(free)
        finally:
            # Also on errors, so the committed bytes stay as they were
            del self._buffer[end + read:]

        logger.debug("Read %d bytes (%d bytes pending)", read, len(self._buffer))
        if read == 0:
            if not self._exhausted:
                logger.debug("Input exhausted")
            self._exhausted = True

    def try_next(self):
        # type: () -> Union[Paragraph, _Incomplete, None]
        """Try to parse the next paragraph from the buffered input

        * If the result is None, all input has been parsed.  Future calls
          will continue to return None.
        * If the result is INCOMPLETE, there is not enough buffered input to
          make a parsing decision.  Call buffer() to read more input.
        * Otherwise, the result is the next Paragraph.  Call try_next()
          again after processing it.

        :raises ControlSyntaxError: if the input is not a valid control file.
        :raises ControlEncodingError: if the input is not valid UTF-8.
        """
        text = self._decoded_text()
        pos = self._text_pos

        # Same as parse_streaming(), without slicing the rest of the buffer
        # for every paragraph.
        result = _parse_paragraph(text, pos, False)
        if result is not INCOMPLETE:
            paragraph, next_pos = result
            self._pos += len(text[pos:next_pos].encode('utf-8'))
            self._text_pos = next_pos
            return paragraph

        if not self._exhausted:
            return INCOMPLETE

        # No more input will arrive to complete a sequence.
        err = self._decode_error
        if err is not None:
            raise ControlEncodingError(self._error_at - self._pos, err.reason) from err
        paragraph = parse_finish(text[pos:])
        self._pos = len(self._buffer)
        self._text_pos = len(text)
        return paragraph

    def _decoded_text(self):
        # type: () -> str
        if self._text is None:
            # A multi-byte character may be split across chunks, so anything
            # after the first invalid byte is left until more input arrives.
            with memoryview(self._buffer) as view, view[self._pos:] as pending:
                self._text, self._decode_error = decode_valid_prefix(pending)
            if self._decode_error is not None:
                self._error_at = self._pos + self._decode_error.start
            self._text_pos = 0
        return self._text

    def __iter__(self):
        # type: () -> Iterator[Paragraph]
        while True:
            result = self.try_next()
            if result is None:
                return
            if result is INCOMPLETE:
                self.buffer()
                continue
            yield result


def iter_paragraphs(source, chunk_size=DEFAULT_CHUNK_SIZE):
    # type: (BinaryIO, int) -> Iterator[Paragraph]
    """Iterate over the paragraphs read from source

    :param source: A file opened in binary mode (or any other object with a
      readinto method).
    :param chunk_size: How many bytes to read at a time.
    """
    yield from BufParse(source, chunk_size)
