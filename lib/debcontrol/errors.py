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

"""Exceptions raised while parsing control files"""


class ControlParseError(ValueError):
    """The input could not be parsed as a control file

    Neither of the subclasses is recoverable: parsing the same data again
    raises the same error.
    """

    is_user_error = True


class ControlSyntaxError(ControlParseError):
    """The input is not valid control file syntax, whatever follows it

    :ivar remaining: the input from the start of the offending line to the
      end of the input that was given to the parser.
    :ivar line: the offending line (without line ending).
    """

    def __init__(self, remaining, message=None):
        # type: (str, str) -> None
        self.remaining = remaining
        self.line = remaining.split('\n', 1)[0]
        if message is None:
            message = 'Syntax or Parse error on the line: "{line}"'.format(
                line=self.line.replace('\r', '\\r'))
        super().__init__(message)


class ControlEncodingError(ControlParseError):
    """The input is not valid UTF-8

    :ivar position: offset of the first offending byte in the data that was
      being decoded.
    :ivar reason: the reason given by the codec.
    """

    def __init__(self, position, reason):
        # type: (int, str) -> None
        self.position = position
        self.reason = reason
        super().__init__('Invalid UTF-8 in input at byte {position}: {reason}'.format(
            position=position, reason=reason))
