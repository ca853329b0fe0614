# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2024/10/12 21:32:40
# @Author : Kariko Lin

from abc import ABCMeta, abstractmethod
from typing import Generic, TypeVar

from .ini.consts import ConfigRet, Result

T = TypeVar('T')


class FileHandler(Generic[T], metaclass=ABCMeta):
    """Binds a document type to one path on disk.

    Failures come back as `ConfigRet` statuses, never as exceptions."""
    def __init__(self, filename: str) -> None:
        self._fn = filename

    @abstractmethod
    def read(self, instance: T | None = None) -> Result:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> ConfigRet:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._fn
