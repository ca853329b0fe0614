# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/12 22:05:31
# @Author : Kariko Lin

"""
In-memory INI structure: sections of ordered key-value pairs.

The header-less pairs (those before any `[section]`) live in a section
selected by `SECTION_FLAT`, which always exists in a fresh `IniConfig`.

Public operations report problems through `ConfigRet` instead of raising.
Typed readers return a `Result` whose value is either the converted value
or the caller's default, so the status may be ignored safely.
"""

from collections.abc import MutableMapping
from dataclasses import dataclass, replace
from re import compile as regex
from typing import Any, Callable, Iterator, Mapping
from warnings import warn

from . import convert
from .consts import (
    COMMENT_CHARS,
    KEYVAL_SEP,
    SECTION_FLAT,
    STR_FALSE,
    STR_TRUE,
    WHITESPACE,
    ConfigRet,
    Result,
    SectionName,
    SectionSelector,
)

_EOL = regex(r'[\r\n]')


@dataclass(kw_only=True)
class IniSettings:
    """Options consulted by parsing and formatting at call time."""
    comment_chars: str = COMMENT_CHARS
    keyval_sep: str = KEYVAL_SEP
    true_str: str = STR_TRUE
    false_str: str = STR_FALSE

    def is_comment(self, ch: str) -> bool:
        return len(ch) == 1 and ch in self.comment_chars


def _is_section_name(name: object) -> bool:
    return (isinstance(name, SectionSelector)
            or (isinstance(name, str) and len(name) > 0))


def _is_key(key: object) -> bool:
    return isinstance(key, str) and len(key) > 0


class IniSection(MutableMapping[str, str]):
    """Ordered key-value pairs of one section.

    Item access here is raw: no trimming, no validation.
    Use `IniConfig.add_string()` and friends for the checked path.
    """

    def __init__(
        self, name: SectionName, /,
        pairs: Mapping[str, str] | None = None
    ) -> None:
        self._name = name
        self._data: dict[str, str] = {}
        if pairs:
            self.update(pairs)

    @property
    def name(self) -> SectionName:
        return self._name

    @property
    def is_flat(self) -> bool:
        return self._name is SECTION_FLAT

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    # existing keys keep their position.
    def __setitem__(self, key: str, value: str) -> None:
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __str__(self) -> str:
        return '' if self.is_flat else f'[{self._name}]'

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self._name, len(self._data))


class IniConfig(MutableMapping[SectionName, IniSection]):
    """INI document. Supports sections and pairs like (comments aside):

        ```ini
        key = val  # header-less, use SECTION_FLAT to reach it.

        [section]
        key233 = val666
        ```

    Sections and keys keep insertion order; names are case-sensitive.
    """

    def __init__(self, settings: IniSettings | None = None) -> None:
        # per-store copy; settings never leak between documents.
        self.settings = (
            IniSettings() if settings is None else replace(settings))
        self.__sections: dict[SectionName, IniSection] = {
            SECTION_FLAT: IniSection(SECTION_FLAT)
        }

    # --- mapping protocol ---

    def __getitem__(self, name: SectionName) -> IniSection:
        return self.__sections[name]

    def __setitem__(
        self, name: SectionName, value: IniSection | Mapping[str, str]
    ) -> None:
        if not _is_section_name(name):
            raise ValueError(f'invalid section name: {name!r}')
        # shouldn't keep ptr to external dict.
        self.__sections[name] = IniSection(name, dict(value))

    def __delitem__(self, name: SectionName) -> None:
        del self.__sections[name]

    def __contains__(self, name: object) -> bool:
        return name in self.__sections

    def __len__(self) -> int:
        return len(self.__sections)

    def __iter__(self) -> Iterator[SectionName]:
        return iter(self.__sections)

    def __repr__(self) -> str:
        return '<IniConfig { .sections = %d }>' % len(self.__sections)

    @property
    def header(self) -> IniSection | None:
        """Pairs not belonging to any named section, if still present."""
        return self.__sections.get(SECTION_FLAT)

    # --- settings ---

    def set_comment_charset(self, comment_chars: str) -> ConfigRet:
        if not isinstance(comment_chars, str):
            return ConfigRet.INVALID_PARAM
        self.settings.comment_chars = comment_chars
        return ConfigRet.OK

    def set_keyval_separator(self, sep: str) -> ConfigRet:
        if not isinstance(sep, str) or len(sep) != 1:
            return ConfigRet.INVALID_PARAM
        self.settings.keyval_sep = sep
        return ConfigRet.OK

    def set_bool_strings(self, true_str: str, false_str: str) -> ConfigRet:
        if not (isinstance(true_str, str) and true_str
                and isinstance(false_str, str) and false_str):
            return ConfigRet.INVALID_PARAM
        self.settings.true_str = true_str
        self.settings.false_str = false_str
        return ConfigRet.OK

    # --- lookup ---

    def find_section(self, name: SectionName) -> IniSection | None:
        if not _is_section_name(name):
            return None
        return self.__sections.get(name)

    def has_section(self, name: SectionName) -> bool:
        return self.find_section(name) is not None

    def ensure_section(self, name: SectionName) -> Result:
        """Get the section, appending a new empty one if it's missing."""
        if not _is_section_name(name):
            return Result(ConfigRet.INVALID_PARAM, None)
        if name not in self.__sections:
            self.__sections[name] = IniSection(name)
        return Result(ConfigRet.OK, self.__sections[name])

    def find_entry(self, section: SectionName, key: str) -> Result:
        if not _is_key(key):
            return Result(ConfigRet.INVALID_PARAM, None)
        if (sect := self.find_section(section)) is None:
            return Result(ConfigRet.NO_SECTION, None)
        if key not in sect:
            return Result(ConfigRet.NO_KEY, None)
        return Result(ConfigRet.OK, sect[key])

    def section_count(self) -> int:
        """Number of sections, not counting an empty flat section."""
        flat = self.__sections.get(SECTION_FLAT)
        if flat is not None and len(flat) == 0:
            return len(self.__sections) - 1
        return len(self.__sections)

    def key_count(self, section: SectionName) -> int:
        """Number of keys in `section`, or -1 if there's no such section."""
        if (sect := self.find_section(section)) is None:
            return -1
        return len(sect)

    # --- removal ---

    def remove_key(self, section: SectionName, key: str) -> ConfigRet:
        if not _is_key(key):
            return ConfigRet.INVALID_PARAM
        if (sect := self.find_section(section)) is None:
            return ConfigRet.NO_SECTION
        if key not in sect:
            return ConfigRet.NO_KEY
        del sect[key]
        return ConfigRet.OK

    def remove_section(self, name: SectionName) -> ConfigRet:
        if self.find_section(name) is None:
            return ConfigRet.NO_SECTION
        if name is SECTION_FLAT:
            warn('移除了无名小节（文件头部的游离键值对），之后不会自动重建；'
                 '再写入游离键值对会把它追加到所有小节之后。')
        del self.__sections[name]
        return ConfigRet.OK

    # --- writers ---

    def add_string(
        self, section: SectionName, key: str, value: str
    ) -> ConfigRet:
        """Insert or replace. The value gets whitespace-trimmed
        and cut at its first line break."""
        if not (_is_key(key) and isinstance(value, str)):
            return ConfigRet.INVALID_PARAM
        ret, sect = self.ensure_section(section)
        if ret is not ConfigRet.OK:
            return ret
        value = _EOL.split(value.lstrip(WHITESPACE), 1)[0]
        sect[key] = value.rstrip(WHITESPACE)
        return ConfigRet.OK

    def add_int(self, section: SectionName, key: str, value: int) -> ConfigRet:
        if (not isinstance(value, int)
                or not convert.INT_MIN <= value <= convert.INT_MAX):
            return ConfigRet.INVALID_PARAM
        return self.add_string(section, key, convert.format_int(value))

    def add_uint(
        self, section: SectionName, key: str, value: int
    ) -> ConfigRet:
        if (not isinstance(value, int)
                or not 0 <= value <= convert.UINT_MAX):
            return ConfigRet.INVALID_PARAM
        return self.add_string(section, key, convert.format_int(value))

    def add_float(
        self, section: SectionName, key: str, value: float
    ) -> ConfigRet:
        if not isinstance(value, (int, float)):
            return ConfigRet.INVALID_PARAM
        try:
            text = convert.format_float(value)
        except OverflowError:
            return ConfigRet.INVALID_PARAM
        return self.add_string(section, key, text)

    def add_double(
        self, section: SectionName, key: str, value: float
    ) -> ConfigRet:
        if not isinstance(value, (int, float)):
            return ConfigRet.INVALID_PARAM
        return self.add_string(section, key, convert.format_double(value))

    def add_bool(
        self, section: SectionName, key: str, value: bool
    ) -> ConfigRet:
        return self.add_string(
            section, key,
            self.settings.true_str if value else self.settings.false_str)

    # --- readers ---

    def read_string(
        self, section: SectionName, key: str, default: str = ''
    ) -> Result:
        ret, raw = self.find_entry(section, key)
        if ret is not ConfigRet.OK:
            return Result(ret, default)
        return Result(ConfigRet.OK, raw)

    def __read_number(
        self, section: SectionName, key: str, default: Any,
        parse: Callable[[str], convert.Conversion]
    ) -> Result:
        ret, raw = self.find_entry(section, key)
        if ret is not ConfigRet.OK:
            return Result(ret, default)
        conv = parse(raw)
        if not conv.is_complete(raw):
            return Result(ConfigRet.INVALID_VALUE, default)
        return Result(ConfigRet.OK, conv.value)

    def read_int(
        self, section: SectionName, key: str, default: int = 0
    ) -> Result:
        return self.__read_number(section, key, default, convert.parse_int)

    def read_uint(
        self, section: SectionName, key: str, default: int = 0
    ) -> Result:
        return self.__read_number(section, key, default, convert.parse_uint)

    def read_float(
        self, section: SectionName, key: str, default: float = 0.0
    ) -> Result:
        return self.__read_number(section, key, default, convert.parse_float)

    def read_double(
        self, section: SectionName, key: str, default: float = 0.0
    ) -> Result:
        return self.__read_number(
            section, key, default, convert.parse_double)

    def read_bool(
        self, section: SectionName, key: str, default: bool = False
    ) -> Result:
        ret, raw = self.find_entry(section, key)
        if ret is not ConfigRet.OK:
            return Result(ret, default)
        val = convert.parse_bool(
            raw, self.settings.true_str, self.settings.false_str)
        if val is None:
            return Result(ConfigRet.INVALID_VALUE, default)
        return Result(ConfigRet.OK, val)
