import collections

try:
    from typing import (
        Any, Dict, Iterable, Iterator, List, Optional,
    )
except ImportError:  # pragma: no cover
    pass


Field = collections.namedtuple('Field', ['name', 'value'])
Field.__doc__ = """A single field of a paragraph

The name is a plain str spelled as in the input.  Field names are case
insensitive in control files, so use the lookups of Paragraph (which fold
the case) rather than comparing names directly.  The value has
continuation lines joined with a newline and never starts nor ends with one.
"""


# The outcome of a streaming parse step that recognized a full paragraph.
# "remaining" is the part of the input after the paragraph terminator.
Item = collections.namedtuple('Item', ['remaining', 'paragraph'])


class _Incomplete:
    """Marker for "the input so far is valid, but more is needed to decide"

    There is exactly one instance: INCOMPLETE.  Compare with "is".
    """

    __slots__ = ()

    _instance = None  # type: Optional[_Incomplete]

    def __new__(cls):
        # type: () -> _Incomplete
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        # type: () -> str
        return 'INCOMPLETE'

    def __reduce__(self):
        # type: () -> str
        return 'INCOMPLETE'


INCOMPLETE = _Incomplete()


class Paragraph:
    """An ordered, immutable sequence of fields

    Fields are kept in the order they appeared in the input.  A control file
    is not supposed to repeat a field in a paragraph, but the parser does not
    enforce that; the lookup helpers return the first occurrence and
    get_all() exposes the rest.
    """

    __slots__ = ('_fields',)

    def __init__(self, fields=()):
        # type: (Iterable[Field]) -> None
        self._fields = tuple(fields)

    @property
    def fields(self):
        # type: () -> List[Field]
        return list(self._fields)

    def __iter__(self):
        # type: () -> Iterator[Field]
        return iter(self._fields)

    def __len__(self):
        # type: () -> int
        return len(self._fields)

    def __getitem__(self, index):
        # type: (int) -> Field
        return self._fields[index]

    def __contains__(self, name):
        # type: (Any) -> bool
        if not isinstance(name, str):
            return False
        key = name.lower()
        return any(f.name.lower() == key for f in self._fields)

    def __eq__(self, other):
        # type: (Any) -> Any
        if not isinstance(other, Paragraph):
            return NotImplemented
        return self._fields == other._fields

    def __hash__(self):
        # type: () -> int
        return hash(self._fields)

    def __repr__(self):
        # type: () -> str
        return '{clsname}({fields!r})'.format(clsname=self.__class__.__name__,
                                              fields=list(self._fields))

    def names(self):
        # type: () -> List[str]
        return [f.name for f in self._fields]

    def get(self, name, default=None):
        # type: (str, Optional[str]) -> Optional[str]
        """Value of the first field called name (case-insensitive)"""
        key = name.lower()
        for f in self._fields:
            if f.name.lower() == key:
                return f.value
        return default

    def get_all(self, name):
        # type: (str) -> List[str]
        key = name.lower()
        return [f.value for f in self._fields if f.name.lower() == key]

    def as_dict(self):
        # type: () -> Dict[str, str]
        """Plain dict of the paragraph (first occurrence of a field wins)

        The keys have the spelling of the input, which makes
        the result suitable for json.dumps and friends.
        """
        result = {}  # type: Dict[str, str]
        seen = set()
        for f in self._fields:
            key = f.name.lower()
            if key in seen:
                continue
            seen.add(key)
            result[f.name] = f.value
        return result
