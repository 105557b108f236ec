"""
Indicator Engine Service Interface

Defines the contract for the indicator calculation layer.
"""

from abc import abstractmethod

from stockchart.services.base import BaseService
from stockchart.schemas.indicators import (
    ChartDataOutput,
    ChartDataRequest,
    LevelsOutput,
    LevelsRequest,
)


class IndicatorServiceInterface(BaseService[ChartDataRequest, ChartDataOutput]):
    """
    Indicator Engine Service Contract.

    INPUT: ChartDataRequest
        - bars: raw OHLCV records for one symbol
        - indicators: which catalog entries to compute

    OUTPUT: ChartDataOutput
        - bars: cleaned bars
        - series: one IndicatorSeries per requested indicator, aligned with bars
        - levels: clustered support/resistance levels
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    @abstractmethod
    async def execute(self, input_data: ChartDataRequest) -> ChartDataOutput:
        """Calculate chart series for one symbol."""
        pass

    @abstractmethod
    async def find_levels(self, input_data: LevelsRequest) -> LevelsOutput:
        """
        Detect support/resistance levels only.

        Args:
            input_data: raw bars plus optional lookback/threshold overrides

        Returns:
            Clustered levels, highest price first (empty for empty input)
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        pass
