"""Standard output report delivery mechanism."""

import json
import sys
from typing import IO, Optional

from ..config.defaults import OutputParams
from ..data.models import RSIReading, ScreenerReport
from ..logging.config import get_logger


class StdoutReportDelivery:
    """Renders the screener header and report to stdout."""

    def __init__(self, config: Optional[OutputParams] = None,
                 stream: Optional[IO[str]] = None):
        self.config = config or OutputParams()
        self.stream = stream
        self.logger = get_logger(__name__)

    @property
    def _out(self) -> IO[str]:
        # sys.stdout may be swapped after construction
        return self.stream or sys.stdout

    def announce(self, candidate_count: int, low_threshold: float,
                 high_threshold: float) -> None:
        """Print the summary line that precedes the scan (pretty format only)."""
        if self.config.format != "pretty":
            return

        print(
            f"🔍 Checking RSI for {candidate_count} candidate symbols "
            f"(oversold < {low_threshold:g}, overbought > {high_threshold:g})...\n",
            file=self._out,
            flush=True
        )

    def deliver(self, report: ScreenerReport) -> None:
        """Print the final report."""
        print(self._format_report(report), file=self._out, flush=True)

        self.logger.debug(
            "Report printed to stdout",
            format=self.config.format,
            oversold=len(report.oversold),
            overbought=len(report.overbought)
        )

    def _format_report(self, report: ScreenerReport) -> str:
        """Format report for stdout output."""
        if self.config.format == "json":
            return json.dumps(report.to_dict())

        low = f"{report.low_threshold:g}"
        high = f"{report.high_threshold:g}"
        lines = [f"📉 Oversold (RSI below {low}):"]
        lines.extend(self._format_section(
            report.oversold,
            f"No symbols with RSI below {low} right now."
        ))
        lines.append("")
        lines.append(f"📈 Overbought (RSI above {high}):")
        lines.extend(self._format_section(
            report.overbought,
            f"No symbols with RSI above {high} right now."
        ))
        return "\n".join(lines)

    @staticmethod
    def _format_section(readings: tuple[RSIReading, ...], empty_message: str) -> list[str]:
        if not readings:
            return [empty_message]
        return [f"➡️ {reading.symbol} | RSI: {reading.rsi:.2f}" for reading in readings]
