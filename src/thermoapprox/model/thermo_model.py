import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from thermoapprox.core.exceptions import SerialNumberError
from thermoapprox.core.row import format_field
from thermoapprox.core.table import OffsetTable
from thermoapprox.data.constants import FileConstants, ProcessingConstants, TableFormat
from thermoapprox.parsing.config.model_yaml_parser import ModelConfig
from thermoapprox.parsing.io.data_handler import derive_path, load_table, save_table, save_text
from thermoapprox.visualization.plotters import plot_model

logger = logging.getLogger(__name__)


def detect_serial_number(folder: Union[str, Path],
                         pattern: str = ProcessingConstants.SERIAL_PATTERN) -> str:
    """
    Find a serial number in a folder path.
    Raises:
        SerialNumberError: If nothing in ``folder`` matches ``pattern``
    """
    match = re.search(pattern, str(folder))
    if match is None or not match.group(0):
        raise SerialNumberError(f"Can not detect serial pattern {pattern} in {folder}")
    logger.info("Detected serial number %s in %s", match.group(0), folder)
    return match.group(0)


@dataclass
class ThermoModel:
    """
    A measured offset table together with the model computed from it.

    Output files are named after ``source_path``: the cached model
    ``<stem>_auto_model.txt``, the summary ``<stem>_model.md`` and the chart
    ``<stem>_with_model.png``.
    """
    raw_data: OffsetTable
    calc_data: OffsetTable
    source_path: Path
    config: ModelConfig = field(default_factory=ModelConfig)
    serial_number: str = ""
    date: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_path(cls, path: Union[str, Path], recalc: bool,
                  model_path: Optional[Union[str, Path]] = None,
                  config: Optional[ModelConfig] = None) -> 'ThermoModel':
        """
        Load measurements and either compute the model or load a cached one.
        Args:
            path: Measurement table file
            recalc: Resample the measurements and save the result as
                ``<stem>_auto_model.txt``; otherwise load an existing model
            model_path: Model file to load instead of ``<stem>_auto_model.txt``
                (ignored when ``recalc`` is set)
            config: Grid and plot settings
        Returns:
            The model.
        """
        config = config if config is not None else ModelConfig()
        source_path = Path(path)
        raw_data = load_table(source_path)
        auto_model_path = derive_path(source_path, FileConstants.AUTO_MODEL_SUFFIX)
        if recalc:
            calc_data = raw_data.resample(config.grid)
            save_table(calc_data, auto_model_path)
        else:
            calc_data = load_table(model_path if model_path is not None else auto_model_path)
        logger.info("Model for %s: %d measured row(s), %d model row(s)",
                    source_path, len(raw_data), len(calc_data))
        return cls(raw_data=raw_data, calc_data=calc_data, source_path=source_path, config=config)

    def with_serial_number(self, serial_number: str) -> None:
        self.serial_number = serial_number

    # --- Markdown summary ---
    def markdown(self) -> str:
        """Model rows as a Markdown grid with one column per grid point."""
        rows = self.calc_data.rows
        lines = [
            "|      |" + "".join(f"  {i:2} |" for i in range(len(rows))),
            "|:-----|" + "----:|" * len(rows),
            "| temp |" + "".join(f" {format_field(row.temp):>3} |" for row in rows),
            "| dx   |" + "".join(f" {format_field(row.x):>3} |" for row in rows),
            "| dy   |" + "".join(f" {format_field(row.y):>3} |" for row in rows),
        ]
        return "".join(line + TableFormat.LINE_SEPARATOR for line in lines)

    def __str__(self) -> str:
        return self.markdown()

    def md(self) -> Path:
        return save_text(self.markdown(), derive_path(self.source_path, FileConstants.MARKDOWN_SUFFIX))

    # --- Firmware export ---
    def ct_file_name(self) -> str:
        if not self.serial_number:
            raise SerialNumberError("A serial number is required for the .ct export")
        d = self.date
        return (f"{FileConstants.CT_PREFIX}_{self.serial_number}_"
                f"{d.year}-{d.month}-{d.day}_{d.hour}-{d.minute}{FileConstants.CT_EXTENSION}")

    def ct(self, directory: Optional[Union[str, Path]] = None) -> Path:
        """Write the model table to the timestamped .ct file in ``directory`` (default: cwd)."""
        directory = Path(directory) if directory is not None else Path.cwd()
        return save_table(self.calc_data, directory / self.ct_file_name())

    # --- Chart ---
    @property
    def plot_title(self) -> str:
        return f"{self.serial_number} ({self.date.day}.{self.date.month}.{self.date.year})"

    def plot(self) -> Optional[Path]:
        if not self.config.plot_enabled:
            logger.info("Plotting disabled by configuration")
            return None
        return plot_model(
            derive_path(self.source_path, FileConstants.PLOT_SUFFIX),
            self.plot_title,
            self.raw_data.offset_pairs('x'),
            self.calc_data.offset_pairs('x'),
            self.raw_data.offset_pairs('y'),
            self.calc_data.offset_pairs('y'),
            config=self.config,
        )
