# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/10 01:04:45
# @Author : Kariko Lin

"""Line grammar of the INI files here, evaluated line by line:

    ```ini
    [section]           ; everything between the first `[` and last `]`.
    ;[section]          ; a header starting with `;` is skipped at all.
    key = value         ; key in `[a-z0-9_-+.]`, value is the rest verbatim.
    key[] = value       ; array row, if `key` already exists in the section.
    ;key = value        ; commented row, still parsed (`#` works as well).
    ```

Rows may be indented with spaces or tabs.
Lines matching nothing above are ignored, without any error.
"""

import logging
import re
from io import StringIO, TextIOBase
from typing import TextIO
from warnings import warn

import chardet

from .model import DEFAULT_SECTION, IniDocument, Row, Section, Value
from ..abstract import FileHandler

P_SECTION = re.compile(r'\[(.+)\]')
P_ROW = re.compile(
    r'[ \t]*[;#]*'
    r'(?P<key>[a-z0-9_\-+.]+)'
    r'(?P<array>\[\])?'
    r' *= *'
    r'(?P<value>.*)')
P_COMMENT = re.compile(r'[ \t]*[;#]')


class IniParser(FileHandler[IniDocument]):
    """Parses an INI file on construction, then answers lookups.

    If the file is unreadable, a warning would be logged
    and the parser just stays empty.
    """

    def __init__(
        self, filename: str, with_sections: bool = True, *,
        encoding: str | None = None
    ) -> None:
        super().__init__(filename, encoding)
        # kept for compatibility, sections are always recognized.
        self.with_sections = with_sections
        self._doc = IniDocument()
        self.parse(filename)

    @property
    def document(self) -> IniDocument:
        return self._doc

    @staticmethod
    def readstream(
        buf: TextIOBase | TextIO, ins: IniDocument | None = None
    ) -> IniDocument:
        """读取解码好的字符串流。

        Rows are added into `ins` if given, otherwise a new document.
        """
        if ins is None:
            ins = IniDocument()
        this_sect: Section | None = None
        for line, i in enumerate(buf, 1):
            i = i.removesuffix('\n')
            if not i:
                continue

            if m := P_SECTION.search(i):
                if i[0] != ';':
                    this_sect = ins.new_section(m[1])
                continue

            if (m := P_ROW.match(i)) is None:
                continue
            if this_sect is None:
                this_sect = ins.new_section(DEFAULT_SECTION)

            key, value = m['key'], Value(m['value'])
            commented = P_COMMENT.match(i) is not None
            row = this_sect.get_row(key)
            if row is not None and m['array']:
                row.add_value(value)
            else:
                if row is not None:
                    warn(
                        f'{this_sect} line {line}: "{key}" is already '
                        f'declared on line {row.line} without `[]`, '
                        'adding another row of the same key.')
                row = Row(key, value, line)
                this_sect.add_row(row)
            row.set_commented(commented)
            ins.index_row(row)
        return ins

    @classmethod
    def loads(cls, text: str) -> IniDocument:
        return cls.readstream(StringIO(text, newline=None))

    @staticmethod
    def _decode_file(filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if codec['encoding'] is None or codec['confidence'] < 0.8:
            codec = {'encoding': 'utf-8', 'confidence': 1.0}
        logging.debug(f'{filename}: decoding as {codec["encoding"]}')

        # fallbacks
        try:
            buf = raw.decode(codec['encoding'])
        except (UnicodeDecodeError, LookupError):
            # chardet may name a codec python doesn't have.
            buf = raw.decode('gbk')
        return StringIO(buf, newline=None)

    def parse(self, filename: str) -> None:
        """Read `filename` into the tables of this parser."""
        try:
            try:
                # when encoding is None, `open()` would fallback to system default.
                # and when encoding got wrong,
                # just `UnicodeDecodeError` and fallback to `chardet`.
                with open(filename, 'r', encoding=self._codec) as fp:
                    buf = StringIO(fp.read(), newline=None)
            except UnicodeDecodeError:
                buf = self._decode_file(filename)
        except (OSError, UnicodeDecodeError, LookupError) as e:
            logging.warning(f"Can't open file: {filename}\n  {e}")
            return
        self.readstream(buf, self._doc)

    def read(self) -> IniDocument:
        return self._doc

    def write(self, instance: IniDocument | None = None) -> None:
        """保存到 INI 文件，即`dump()`的输出。

        May raise `OSError`.
        """
        if instance is None:
            instance = self._doc
        with open(self._fn, 'w', encoding=self._codec) as fp:
            instance.dump(fp)

    def has_section(self, name: str | Section) -> bool:
        return self._doc.has_section(name)

    def get_section(self, name: str) -> Section | None:
        return self._doc.get_section(name)

    def get_row(self, name: str, key: str | None = None) -> Row | None:
        return self._doc.get_row(name, key)

    def get_value(
        self, name: str, key: str | None = None, *,
        default: str | None = None
    ) -> Value:
        return self._doc.get_value(name, key, default=default)

    def dump(self, out: TextIO | None = None) -> None:
        self._doc.dump(out)

    def dumps(self) -> str:
        return self._doc.dumps()

    def __contains__(self, name: object) -> bool:
        return name in self._doc

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f"({self._codec})"
