"""팔레트 최적화 예외 타입"""
from __future__ import annotations


class PaletteError(ValueError):
    """모든 최적화 예외의 공통 부모. ValueError를 잡던 호출부와 호환된다."""


class InvalidColorError(PaletteError):
    pass


class InvalidParameterError(PaletteError):
    pass


class EmptyInputError(PaletteError):
    pass
