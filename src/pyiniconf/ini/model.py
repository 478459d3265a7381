# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/10 00:57:10
# @Author : Kariko Lin

"""
Basically INI Structure with array rows and commented rows support.

A document is a table of `Section`s, each holding `Row`s,
and every row holds one or more `Value`s:

    ```ini
    plain = value     ; goes to `__default__` if no section declared.

    [section]
    key = 1
    tag[] = a         ; repeating `key[]` makes an array row.
    tag[] = b
    ;old = 0          ; commented rows are kept, and dumped back.
    ```

As for the line grammar, just see `ini.parser`.
"""

import math
import re
import sys
from collections.abc import Callable, Iterator
from io import StringIO
from typing import TextIO

DEFAULT_SECTION = '__default__'

# leading numeric content, like what strtol() / strtod() accepts.
_P_INT = re.compile(r'\s*([+-]?\d+)', re.ASCII)
_P_REAL = re.compile(
    r'\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?'
    r'|inf(?:inity)?|nan))',
    re.IGNORECASE | re.ASCII)
_P_HEX = re.compile(
    r'\s*([+-]?0x(?:[0-9a-f]+(?:\.[0-9a-f]*)?|\.[0-9a-f]+)(?:p[+-]?\d+)?)',
    re.IGNORECASE | re.ASCII)


def _parse_leading[N](
    text: str, pattern: re.Pattern[str],
    converter: Callable[[str], N], default: N
) -> N:
    """Convert the numeric prefix of `text`, or give `default` if none."""
    if (m := pattern.match(text)) is None:
        return default
    return converter(m[1])


class Value:
    """A single scalar payload, converted on demand.

    An empty `Value()` stands for "absent" in lookup results.
    """

    __slots__ = ('_value',)

    def __init__(self, value: str | None = None) -> None:
        self._value = '' if value is None else value

    def get(self) -> str:
        return self._value

    def get_int(self) -> int:
        return _parse_leading(self._value, _P_INT, int, 0)

    # python ints never overflow, so there is no real difference.
    get_long = get_int

    def get_real(self) -> float:
        # hex floats first, or `0x10` would stop at its `0`.
        if (m := _P_HEX.match(self._value)) is None:
            return _parse_leading(self._value, _P_REAL, float, 0.0)
        try:
            return float.fromhex(m[1])
        except OverflowError:
            return -math.inf if m[1].lstrip().startswith('-') else math.inf

    def get_bool(self) -> bool:
        return self._value in ('1', 'true')

    def __eq__(self, another: object) -> bool:
        if isinstance(another, Value):
            return self._value == another._value
        if isinstance(another, str):
            return self._value == another
        # bool first, since bool is an int.
        if isinstance(another, bool):
            return self.get_bool() == another
        if isinstance(another, int):
            return self.get_long() == another
        if isinstance(another, float):
            return self.get_real() == another
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __int__(self) -> int:
        return self.get_int()

    def __float__(self) -> float:
        return self.get_real()

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f'Value({self._value!r})'


class Row:
    """One key of a section, and all values given to it.

    More than one value means an array row, i.e. `key[]=...` repeated.
    """

    def __init__(
        self, key: str, value: Value | None = None, line: int = 1
    ) -> None:
        self.__key = key
        self._line = line
        self._values: list[Value] = []
        self._commented = False
        if value is not None:
            self.add_value(value)

    @property
    def key(self) -> str:
        return self.__key

    @property
    def line(self) -> int:
        """1-based line number where the key first appeared."""
        return self._line

    def add_value(self, value: Value) -> None:
        self._values.append(value)

    def get_value(self) -> Value:
        return self._values[0] if self._values else Value()

    def get_values(self) -> list[Value]:
        return self._values.copy()

    def is_array(self) -> bool:
        return len(self._values) > 1

    def is_commented(self) -> bool:
        return self._commented

    def set_commented(self, commented: bool) -> None:
        self._commented = commented

    def __lt__(self, another: 'Row') -> bool:
        return self._line < another._line

    def __gt__(self, another: 'Row') -> bool:
        return self._line > another._line

    def __repr__(self) -> str:
        return '%s { .line = %d, .cnt = %d }' % (
            self.__key, self._line, len(self._values))


class Section:
    """An INI section, i.e. `[name]`, maintaining rows in order.

    Keys are *expected* to be unique here, but it's `IniParser`
    who checks that before adding, not `add_row()`.
    """

    def __init__(self, name: str) -> None:
        self.__name = name
        self._rows: list[Row] = []

    @property
    def name(self) -> str:
        return self.__name

    def add_row(self, row: Row) -> None:
        self._rows.append(row)

    def get_row(self, key: str | Row) -> Row | None:
        """Find the row by key. The row returned is the stored one,
        so `add_value()` on it does grow this section."""
        if isinstance(key, Row):
            key = key.key
        for i in self._rows:
            if i.key == key:
                return i
        return None

    def has_row_key(self, key: str | Row) -> bool:
        return self.get_row(key) is not None

    has_row = has_row_key

    def get_rows(self) -> list[Row]:
        return self._rows.copy()

    def __getitem__(self, key: str) -> Row:
        if (row := self.get_row(key)) is None:
            raise KeyError(key)
        return row

    def __contains__(self, key: object) -> bool:
        return isinstance(key, (str, Row)) and self.has_row_key(key)

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self._rows)

    def __eq__(self, another: object) -> bool:
        if isinstance(another, Section):
            return self.__name == another.__name
        if isinstance(another, str):
            return self.__name == another
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.__name)

    def __str__(self) -> str:
        return f'[{self.__name}]'

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self.__name, len(self._rows))


class IniDocument:
    """... is a table of sections, representing a whole INI file.

    Besides the sections, a flattened `key -> Row` index is kept
    for looking keys up regardless of sections.
    The last parsed row wins, if a key appears in several sections.
    """

    def __init__(self) -> None:
        self.__sections: dict[str, Section] = {}
        self.__rows: dict[str, Row] = {}

    def new_section(self, name: str) -> Section:
        """Add an empty section, replacing the one of the same name."""
        self.__sections[name] = Section(name)
        return self.__sections[name]

    def index_row(self, row: Row) -> None:
        self.__rows[row.key] = row

    def has_section(self, name: str | Section) -> bool:
        if isinstance(name, Section):
            name = name.name
        return name in self.__sections

    def get_section(self, name: str) -> Section | None:
        return self.__sections.get(name)

    def get_row(self, name: str, key: str | None = None) -> Row | None:
        """`get_row(section, key)` searches in that section,
        while `get_row(key)` goes through the flattened index."""
        if key is None:
            return self.__rows.get(name)
        if (section := self.get_section(name)) is None:
            return None
        return section.get_row(key)

    def get_value(
        self, name: str, key: str | None = None, *,
        default: str | None = None
    ) -> Value:
        """Get the first value of a row, the same way as `get_row()`.

        If the row is missing, an empty `Value` is returned,
        or `Value(default)` if `default` given.
        """
        if (row := self.get_row(name, key)) is None:
            return Value(default)
        return row.get_value()

    def dump(self, out: TextIO | None = None) -> None:
        """Write as INI text, to `sys.stdout` if `out` not given.

        Note that an array row writes one `key[]=` line per value.
        """
        if out is None:
            out = sys.stdout
        for section in self.__sections.values():
            out.write(f'{section}\n')
            for row in section:
                mark = '[]=' if row.is_array() else '='
                for value in row.get_values():
                    if row.is_commented():
                        out.write(';')
                    out.write(f'{row.key}{mark}{value}\n')

    def dumps(self) -> str:
        with StringIO() as buf:
            self.dump(buf)
            return buf.getvalue()

    def __contains__(self, name: object) -> bool:
        return isinstance(name, (str, Section)) and self.has_section(name)

    def __len__(self) -> int:
        return len(self.__sections)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__sections)

    def __repr__(self) -> str:
        return 'IniDocument { .sections = %d, .keys = %d }' % (
            len(self.__sections), len(self.__rows))
