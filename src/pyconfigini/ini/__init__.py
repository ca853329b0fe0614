# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/13 01:58:22
# @Author : Kariko Lin

from .consts import ConfigRet, Result, SECTION_FLAT, SectionSelector
from .model import IniSettings, IniSection, IniConfig
from .parser import (
    IniParseError,
    IniScanner,
    IniParser,
    loads,
    dumps,
    read_file,
    write_file
)
