"""
NettingStats — сводная статистика таблицы неттинга

Immutable Pydantic модель, совместимая с contracts/schema/netting_stats.json.
"""

from pydantic import BaseModel, Field


class NettingStats(BaseModel):
    """
    Снапшот метрик таблицы.

    metric_l1 / metric_l2 равны sentinel-значению (по умолчанию -1.0),
    если в таблице меньше двух контрагентов. sum_of_h должен быть равен
    нулю с точностью до округления.
    """

    number_of_counter_parties: int = Field(..., ge=0, description="Число контрагентов")
    number_of_claims: int = Field(..., ge=0, description="Число требований (рёбер)")
    metric_l1: float = Field(..., description="Средняя абсолютная парная экспозиция")
    metric_l2: float = Field(..., description="Среднеквадратичная парная экспозиция")
    sum_of_h: float = Field(..., description="Сумма нетто-позиций (≈ 0)")

    model_config = {"frozen": True}

    def is_conserved(self, tolerance: float) -> bool:
        """True если сумма нетто-позиций в пределах tolerance от нуля."""
        return abs(self.sum_of_h) <= tolerance
