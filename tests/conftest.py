# -*- encoding: utf-8 -*-
# @File   : conftest.py
# @Time   : 2024/10/13 14:20:51
# @Author : Kariko Lin

import pytest

from pyconfigini import IniConfig

SAMPLE_INI = """\
# sample for round trips
name = flat value

[owner]
title = INI Example   # trailing comment
organization=Acme Widgets Inc.

[database]
server = 192.0.2.62
port   = 143
file = payroll.dat
enabled = Yes
ratio = 0.75
"""


@pytest.fixture
def cfg() -> IniConfig:
    return IniConfig()


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_INI
