import logging

try:
    from typing import Callable, Optional, Tuple, Union, TYPE_CHECKING
except ImportError:  # pragma: no cover
    TYPE_CHECKING = False


if TYPE_CHECKING:
    from debcontrol.types import Paragraph


def decode_valid_prefix(data):
    # type: (Union[bytes, bytearray, memoryview]) -> Tuple[str, Optional[UnicodeDecodeError]]
    """Decode the longest prefix of data that is valid UTF-8

    The error describing the first invalid byte is returned alongside the
    text (None if the data was valid).  Whether that byte is a multi-byte
    sequence cut short by a chunk boundary or genuine garbage is the
    caller's decision.

    data may be any bytes-like object; a memoryview is decoded without
    copying it first.
    """
    try:
        return str(data, 'utf-8'), None
    except UnicodeDecodeError as e:
        return str(data[:e.start], 'utf-8'), e


def print_paragraph(paragraph,  # type: Paragraph
                    *,
                    output_function=None,  # type: Optional[Callable[[str], None]]
                    ):
    # type: (...) -> None
    """Debugging aid, which dumps a paragraph one line at a time

    Continuation lines are indented by a single space, so the output reads
    like the control file the paragraph came from (minus comments).

    :param paragraph: The paragraph to dump
    :param output_function: Callable that receives a single str argument and is responsible
      for "displaying" that line. The callable may be invoked multiple times (one per line
      of output).  Defaults to logging.info if omitted.
    """
    if output_function is None:
        output_function = logging.info
    for field in paragraph:
        lines = field.value.split('\n')
        output_function(field.name + ': ' + lines[0] if lines[0] else field.name + ':')
        for line in lines[1:]:
            output_function(' ' + line)
