# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/13 01:26:18
# @Author : Kariko Lin

"""Reading and writing INI text.

Lines are scanned one at a time, like this:

    ```ini
      # comment lines and blank lines are skipped
    flat = pair before any header
    [ Section ]  # trailing comment is fine
    key = value with spaces  # the comment is cut off
    ```

Anything else (a header without `]`, garbage after `]`, a line without
the separator, an empty key or an empty value) aborts the whole read.

Comment characters and the separator are taken from the target
`IniConfig.settings` on every line, so they may differ per document.
"""

import logging
from io import StringIO
from locale import getpreferredencoding
from typing import Protocol

import chardet

from ..abstract import FileHandler
from .consts import (
    LINE_TERMINATORS,
    SECTION_FLAT,
    WHITESPACE,
    ConfigRet,
    Result,
    SectionName,
)
from .model import IniConfig, IniSection, IniSettings

__all__ = [
    'IniParseError', 'IniScanner', 'IniParser',
    'loads', 'dumps', 'read_file', 'write_file'
]

logger = logging.getLogger(__name__)


class _LineReader(Protocol):
    def readline(self) -> str: ...


class _Writer(Protocol):
    def write(self, s: str, /) -> int: ...


class IniParseError(Exception):
    """To record errors when scanning INI text."""

    def __init__(self, status: ConfigRet, lineno: int, line: str) -> None:
        super().__init__(f'line {lineno}: {status}: {line.rstrip()!r}')
        self.status = status
        self.lineno = lineno
        self.line = line


def _skip_ws(line: str, pos: int) -> int:
    while pos < len(line) and line[pos] in WHITESPACE:
        pos += 1
    return pos


def _scan(line: str, pos: int, stop: str, settings: IniSettings) -> int:
    """Advance until `stop`, a line terminator or a comment char."""
    while pos < len(line):
        ch = line[pos]
        if (ch == stop or ch in LINE_TERMINATORS
                or settings.is_comment(ch)):
            break
        pos += 1
    return pos


class IniScanner:
    """Feeds physical lines into one `IniConfig`."""

    def __init__(self, ins: IniConfig) -> None:
        self._ins = ins
        self._current: SectionName = SECTION_FLAT
        self._lineno = 0

    @property
    def current_section(self) -> SectionName:
        return self._current

    @property
    def lineno(self) -> int:
        return self._lineno

    def feed(self, line: str) -> None:
        """Raises `IniParseError` if `line` breaks the grammar."""
        self._lineno += 1
        settings = self._ins.settings
        p = _skip_ws(line, 0)
        if p == len(line) or settings.is_comment(line[p]):
            return

        if line[p] == '[':
            name = self.__section_name(line, p + 1, settings)
            ret, _ = self._ins.ensure_section(name)
            if ret is not ConfigRet.OK:
                raise IniParseError(ret, self._lineno, line)
            logger.debug('line %d: enter [%s]', self._lineno, name)
            self._current = name
        else:
            key, val = self.__key_value(line, p, settings)
            ret = self._ins.add_string(self._current, key, val)
            if ret is not ConfigRet.OK:
                raise IniParseError(ret, self._lineno, line)

    def __fail(self, status: ConfigRet, line: str) -> IniParseError:
        return IniParseError(status, self._lineno, line)

    def __section_name(
        self, line: str, p: int, settings: IniSettings
    ) -> str:
        p = _skip_ws(line, p)
        q = _scan(line, p, ']', settings)
        if q == len(line) or line[q] != ']':
            raise self.__fail(ConfigRet.PARSING, line)
        if not (name := line[p:q].rstrip(WHITESPACE)):
            raise self.__fail(ConfigRet.PARSING, line)
        # only blanks or a comment may follow the header.
        r = _skip_ws(line, q + 1)
        if r < len(line) and not settings.is_comment(line[r]):
            raise self.__fail(ConfigRet.PARSING, line)
        return name

    def __key_value(
        self, line: str, p: int, settings: IniSettings
    ) -> tuple[str, str]:
        sep = settings.keyval_sep
        q = _scan(line, p, sep, settings)
        if q == len(line) or line[q] != sep:
            raise self.__fail(ConfigRet.PARSING, line)
        if not (key := line[p:q].rstrip(WHITESPACE)):
            raise self.__fail(ConfigRet.PARSING, line)

        v = _skip_ws(line, q + 1)
        e = _scan(line, v, '', settings)
        if not (val := line[v:e].rstrip(WHITESPACE)):
            raise self.__fail(ConfigRet.INVALID_VALUE, line)
        return key, val


class IniParser(FileHandler[IniConfig]):
    def __init__(self, filename: str, encoding: str | None = None) -> None:
        super().__init__(filename)
        self._codec = encoding

    @staticmethod
    def readstream(
        buf: _LineReader, ins: IniConfig | None = None
    ) -> Result:
        """读取解码好的字符串流。

        If `ins` is None, a fresh `IniConfig` is built and dropped again on
        failure (the result value is then None). A given `ins` is filled in
        place and keeps whatever was read before the failing line.
        """
        fresh = ins is None
        if ins is None:
            ins = IniConfig()
        scanner = IniScanner(ins)
        try:
            while line := buf.readline():
                scanner.feed(line)
        except IniParseError as e:
            logger.warning('INI parsing aborted at %s', e)
            return Result(e.status, None if fresh else ins)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning('INI stream unreadable: %s', e)
            return Result(ConfigRet.FILE, None if fresh else ins)
        except MemoryError:
            return Result(ConfigRet.MEMALLOC, None if fresh else ins)
        return Result(ConfigRet.OK, ins)

    @staticmethod
    def _decode_file(filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        encoding = codec['encoding']
        if encoding is None or codec['confidence'] < 0.8:
            encoding = 'utf-8'

        # fallbacks
        try:
            buf = raw.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            buf = raw.decode('utf-8', errors='replace')
        return StringIO(buf)

    def read(self, instance: IniConfig | None = None) -> Result:
        """读取`IniParser`实例指定的文件。

        The whole file is decoded before scanning starts, so a decoding
        problem never leaves `instance` half-filled.
        """
        try:
            # when encoding is None, `open()` would fallback to system default.
            # and when encoding got wrong,
            # just `UnicodeDecodeError` and fallback to `chardet`.
            try:
                with open(self._fn, 'r', encoding=self._codec) as fp:
                    buf = StringIO(fp.read())
            except UnicodeDecodeError:
                logger.info('%s: not %s, guessing codec',
                            self._fn, self._codec or 'locale encoding')
                buf = self._decode_file(self._fn)
        except (OSError, LookupError) as e:  # LookupError: unknown codec
            logger.warning('unable to read %s: %s', self._fn, e)
            return Result(ConfigRet.FILE, instance)
        return self.readstream(buf, instance)

    @staticmethod
    def _section2str(section: IniSection, delimiter: str) -> str:
        ret = '' if section.is_flat else f'{section}\n'
        for k, v in section.items():
            ret += f'{k}{delimiter}{v}\n'
        # even empty sections get their blank line.
        return ret + '\n'

    @staticmethod
    def writestream(instance: IniConfig, buf: _Writer) -> ConfigRet:
        """Values are written verbatim: one holding a comment char or the
        separator may read back differently."""
        try:
            buf.write(IniParser._render(instance))
        except (OSError, UnicodeEncodeError) as e:
            logger.warning('INI stream unwritable: %s', e)
            return ConfigRet.FILE
        return ConfigRet.OK

    @staticmethod
    def _render(instance: IniConfig) -> str:
        delimiter = instance.settings.keyval_sep
        return ''.join(
            IniParser._section2str(section, delimiter)
            for section in instance.values())

    def write(self, instance: IniConfig) -> ConfigRet:
        """保存到*一个* INI 文件。

        The text is encoded up front: a value the codec can't hold
        leaves the target file untouched.
        """
        codec = self._codec or getpreferredencoding(False)
        try:
            raw = self._render(instance).encode(codec)
        except (UnicodeEncodeError, LookupError) as e:
            logger.warning('unable to encode %s as %s: %s',
                           self._fn, codec, e)
            return ConfigRet.FILE
        try:
            with open(self._fn, 'wb') as fp:
                fp.write(raw)
        except OSError as e:
            logger.warning('unable to write %s: %s', self._fn, e)
            return ConfigRet.FILE
        return ConfigRet.OK

    @staticmethod
    def print_settings(instance: IniConfig, buf: _Writer) -> ConfigRet:
        """Human readable, not meant to be parsed back."""
        s = instance.settings
        try:
            buf.write(
                '\n'
                'Configuration settings: \n'
                f'   Comment characters : {s.comment_chars}\n'
                f'   Key-Value separator: {s.keyval_sep}\n'
                f'   True-False strings : {s.true_str}-{s.false_str}\n'
                '\n')
        except (OSError, UnicodeEncodeError):
            return ConfigRet.FILE
        return ConfigRet.OK

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f"({self._codec})"


def loads(text: str, ins: IniConfig | None = None) -> Result:
    return IniParser.readstream(StringIO(text), ins)


def dumps(ins: IniConfig) -> str:
    buf = StringIO()
    IniParser.writestream(ins, buf)
    return buf.getvalue()


def read_file(
    filename: str, ins: IniConfig | None = None,
    encoding: str | None = None
) -> Result:
    return IniParser(filename, encoding).read(ins)


def write_file(
    ins: IniConfig, filename: str, encoding: str | None = None
) -> ConfigRet:
    return IniParser(filename, encoding).write(ins)
