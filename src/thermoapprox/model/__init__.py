"""Model orchestration: loading, computing and exporting offset models."""

from .thermo_model import ThermoModel, detect_serial_number

__all__ = [
    "ThermoModel",
    "detect_serial_number"
]
