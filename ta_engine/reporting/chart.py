"""
Renders an analysis onto a price chart: price line, Bollinger envelope,
support/resistance levels and the prediction's targets.
"""
import logging
from pathlib import Path
from typing import Optional, Union

import matplotlib.dates as mdates
import matplotlib.pyplot as plt
import pandas as pd

from ..indicators.volatility import bollinger_bands
from ..scoring.config import AnalysisParams, resolve_params
from ..shared.types import AnalysisReport, LevelKind, TimeSeries

logger = logging.getLogger(__name__)

STRENGTH_ALPHA = {"weak": 0.3, "medium": 0.55, "strong": 0.85}


class AnalysisChart:
    """Creates price charts annotated with an AnalysisReport."""

    def __init__(self, output_dir: Optional[Union[str, Path]] = None):
        """
        Initialize the chart renderer.

        Args:
            output_dir: Directory for relative output filenames (None for current directory)
        """
        self.output_dir = Path(output_dir) if output_dir else Path.cwd()

        # Set matplotlib style
        try:
            plt.style.use('seaborn-v0_8-darkgrid')
        except OSError:
            try:
                plt.style.use('seaborn-darkgrid')
            except OSError:
                plt.style.use('default')

    def plot(
        self,
        series: TimeSeries,
        report: AnalysisReport,
        params: Optional[AnalysisParams] = None,
        title: str = "Price Analysis",
        output_filename: Optional[Union[str, Path]] = None,
        figsize: tuple = (14, 8),
    ) -> Path:
        """
        Create the chart and save it as PNG.

        Args:
            series: Analyzed series
            report: Report produced by analyze() for the same series
            params: Parameters used for the analysis (Bollinger period/k)
            title: Chart title
            output_filename: Output filename or path (auto-generated if None)
            figsize: Figure size (width, height)

        Returns:
            Path to saved chart
        """
        params = resolve_params(params)
        close = series.close
        fig, ax = plt.subplots(figsize=figsize)

        ax.plot(close.index, close.values, linewidth=1.5, color='gray', alpha=0.8, label='Price')

        bands = bollinger_bands(close, params.bb_period, params.bb_k)
        if len(bands.middle) > 0:
            ax.plot(bands.middle.index, bands.middle.values, color='steelblue',
                    linewidth=1, label=f'SMA({params.bb_period})')
            ax.fill_between(bands.upper.index, bands.lower.values, bands.upper.values,
                            color='steelblue', alpha=0.12, label='Bollinger Bands')

        for kind, color in ((LevelKind.SUPPORT, 'green'), (LevelKind.RESISTANCE, 'red')):
            levels = [lvl for lvl in report.levels if lvl.kind == kind]
            for lvl in levels:
                ax.axhline(lvl.price, color=color, linestyle='--', linewidth=1,
                           alpha=STRENGTH_ALPHA[lvl.strength.value])
            if levels:
                ax.scatter(
                    [close.index[lvl.index] for lvl in levels], [lvl.price for lvl in levels],
                    color=color, marker='^' if kind == LevelKind.SUPPORT else 'v',
                    s=80, zorder=5, label=kind.value.capitalize(),
                )

        prediction = report.prediction
        ax.set_title(
            f"{title}: {prediction.direction.value} "
            f"(confidence {prediction.confidence:.0f}%, risk {prediction.risk_level.value})",
            fontsize=14, fontweight='bold',
        )
        ax.set_xlabel("Date" if isinstance(close.index, pd.DatetimeIndex) else "Sample", fontsize=12)
        ax.set_ylabel("Price", fontsize=12)
        ax.legend(loc='best', fontsize=10)
        ax.grid(True, alpha=0.3)

        if isinstance(close.index, pd.DatetimeIndex):
            ax.xaxis.set_major_formatter(mdates.DateFormatter('%Y-%m-%d'))
            ax.xaxis.set_major_locator(mdates.AutoDateLocator())
            plt.xticks(rotation=45)

        plt.tight_layout()

        if output_filename is None:
            output_filename = f"{title.lower().replace(' ', '_')}.png"
        output_path = Path(output_filename)
        if not output_path.is_absolute():
            output_path = self.output_dir / output_path
        output_path.parent.mkdir(parents=True, exist_ok=True)

        plt.savefig(output_path, dpi=150, bbox_inches='tight')
        plt.close(fig)

        logger.info(f"Chart saved to {output_path}")
        return output_path
