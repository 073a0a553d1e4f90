"""Исключения таблицы неттинга.

Построение графа (add_counterparty / add_claim) и оптимизация никогда
не бросают исключений: невалидные аргументы молча игнорируются.
Исключения возникают только на границах ввода-вывода:
- чтение матрицы требований (InputIOError / InputFormatError)
- сериализация графа (EncodeError / DecodeError)
"""

from typing import Optional


class NettingError(Exception):
    """Базовое исключение пакета netting."""
    pass


# =============================================================================
# INPUT
# =============================================================================


class InputError(NettingError):
    """Ошибка чтения входной матрицы. Частичный результат не используется."""
    pass


class InputIOError(InputError):
    """Файл матрицы отсутствует или не читается."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read matrix file {path!r}: {reason}")


class InputFormatError(InputError):
    """Токен матрицы не является числом."""

    def __init__(self, token: str, position: int, path: Optional[str] = None):
        self.token = token
        self.position = position
        self.path = path
        where = f" in {path!r}" if path else ""
        super().__init__(
            f"Cannot parse token {token!r} at position {position}{where} as a number"
        )


# =============================================================================
# CODEC
# =============================================================================


class CodecError(NettingError):
    """Базовая ошибка сериализации графа."""
    pass


class DecodeError(CodecError):
    """Payload не является корректным сериализованным графом."""
    pass


class EncodeError(CodecError):
    """Граф повреждён и не может быть сериализован.

    При нормальном построении через add_claim не возникает; появление
    означает нарушение инвариантов модели.
    """
    pass
