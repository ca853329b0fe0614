# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/13 02:03:10
# @Author : Kariko Lin

import logging

from .ini import (
    ConfigRet, Result, SECTION_FLAT, SectionSelector,
    IniSettings, IniSection, IniConfig,
    IniParseError, IniScanner, IniParser,
    loads, dumps, read_file, write_file
)

__all__ = [
    'ConfigRet', 'Result', 'SECTION_FLAT', 'SectionSelector',
    'IniSettings', 'IniSection', 'IniConfig',
    'IniParseError', 'IniScanner', 'IniParser',
    'loads', 'dumps', 'read_file', 'write_file'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
