# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2023/11/14 20:01:52
# @Author : Chloride

import logging

from .ini import DEFAULT_SECTION, IniDocument, IniParser, Row, Section, Value

__all__ = [
    'IniParser', 'IniDocument', 'Section', 'Row', 'Value',
    'DEFAULT_SECTION'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
