# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2024/10/12 21:40:03
# @Author : Kariko Lin

from enum import Enum
from typing import Any, NamedTuple


class ConfigRet(int, Enum):
    OK = 0
    FILE = 1            # file io error (not exists, unable to open, ...)
    NO_SECTION = 2
    NO_KEY = 3
    MEMALLOC = 4
    INVALID_PARAM = 5   # e.g. empty key, wrong value type
    INVALID_VALUE = 6   # inconsistent or empty data
    PARSING = 7         # text does not fit the INI grammar

    def describe(self) -> str:
        return _RET_MESSAGES[self]

    def __str__(self) -> str:
        return self.describe()


_RET_MESSAGES = {
    ConfigRet.OK: 'OK',
    ConfigRet.FILE: 'File IO error',
    ConfigRet.NO_SECTION: 'No section',
    ConfigRet.NO_KEY: 'No key',
    ConfigRet.MEMALLOC: 'Memory allocation failed',
    ConfigRet.INVALID_PARAM: 'Invalid parameter',
    ConfigRet.INVALID_VALUE: 'Invalid value',
    ConfigRet.PARSING: 'Parse error',
}


class SectionSelector(Enum):
    # only one member: the header-less section before any `[section]`.
    FLAT = 'flat'

    def __str__(self) -> str:
        return '<flat>'


SECTION_FLAT = SectionSelector.FLAT

# what callers pass wherever a section is expected.
SectionName = str | SectionSelector


class Result(NamedTuple):
    """Status plus a value that is always usable,
    even when `status` is not `ConfigRet.OK`."""
    status: ConfigRet
    value: Any

    @property
    def ok(self) -> bool:
        return self.status is ConfigRet.OK


COMMENT_CHARS = '#'
KEYVAL_SEP = '='
STR_TRUE = '1'
STR_FALSE = '0'

# C `isspace()` in the "C" locale.
WHITESPACE = ' \t\n\v\f\r'
LINE_TERMINATORS = '\r\n'

TRUE_ALIASES = ('true', 'yes', '1')
FALSE_ALIASES = ('false', 'no', '0')
