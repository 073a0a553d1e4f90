"""Чтение матрицы требований из текстового файла.

Формат: числа через любые пробельные символы, построчная N×N матрица,
N = floor(sqrt(число токенов)); лишние токены игнорируются.
Ячейка (j, i) > 0 превращается в требование j → i.
"""

import logging
import math
from pathlib import Path
from typing import List, Optional, Union

from src.netting.errors import InputFormatError, InputIOError

logger = logging.getLogger(__name__)


def parse_matrix_tokens(text: str, source: Optional[str] = None) -> List[float]:
    """
    Разбор текста на список float.

    Args:
        text: Содержимое файла
        source: Имя источника для сообщений об ошибке

    Raises:
        InputFormatError: Если токен не является числом (частичный список
            не возвращается)
    """
    values: List[float] = []
    for position, token in enumerate(text.split()):
        try:
            values.append(float(token))
        except ValueError as exc:
            raise InputFormatError(token, position, source) from exc
    return values


def read_matrix_tokens(path: Union[str, Path]) -> List[float]:
    """
    Чтение файла матрицы.

    Raises:
        InputIOError: Файл отсутствует или не читается
        InputFormatError: Токен не является числом
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InputIOError(str(path), str(exc)) from exc

    values = parse_matrix_tokens(text, source=str(path))
    logger.debug("Read %d tokens from %s", len(values), path)
    return values


def matrix_dimension(values: List[float]) -> int:
    """N = floor(sqrt(len(values)))."""
    return math.isqrt(len(values))
