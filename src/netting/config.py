"""Конфигурация таблицы неттинга."""

from dataclasses import dataclass
from typing import Final, Optional

from src.core.math.numerical_safeguards import EPS_AMOUNT, is_valid_float, validate_positive

# Значение L1/L2 метрик, когда в таблице нет ни одной пары контрагентов
NORM_UNDEFINED_SENTINEL: Final[float] = -1.0

# Ширина ячейки текстового отчёта (как "%9.f")
REPORT_CELL_WIDTH_DEFAULT: Final[int] = 9


@dataclass(frozen=True)
class NettingConfig:
    """Параметры оптимизации и отчётности.

    - max_passes: число проходов отмены циклов за один вызов optimize().
      1 — однопроходная семантика (пропуск конфликтующих циклов),
      None — повторять проходы, пока в графе остаются циклы.
    - conservation_tolerance: допуск для проверки sum(H) == 0
    - norm_undefined_sentinel: значение L1/L2 при N < 2
    - report_cell_width: ширина ячейки в to_text()
    """
    max_passes: Optional[int] = 1
    conservation_tolerance: float = EPS_AMOUNT
    norm_undefined_sentinel: float = NORM_UNDEFINED_SENTINEL
    report_cell_width: int = REPORT_CELL_WIDTH_DEFAULT

    def __post_init__(self) -> None:
        if self.max_passes is not None and self.max_passes < 1:
            raise ValueError(f"max_passes must be >= 1 or None, got {self.max_passes}")
        validate_positive(self.conservation_tolerance, "conservation_tolerance")
        if not is_valid_float(self.norm_undefined_sentinel):
            raise ValueError(
                f"norm_undefined_sentinel must be finite, got {self.norm_undefined_sentinel}"
            )
        if self.report_cell_width < 1:
            raise ValueError(f"report_cell_width must be >= 1, got {self.report_cell_width}")
