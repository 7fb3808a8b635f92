"""Command-line entry point for computing and checking offset models."""

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import List, Optional

from thermoapprox.core.exceptions import ThermoApproxError
from thermoapprox.model.thermo_model import ThermoModel, detect_serial_number
from thermoapprox.parsing.config.model_yaml_parser import load_model_config

logger = logging.getLogger(__name__)

# Value of --serial-number when given without an argument
DETECT_SERIAL = ""


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="thermoapprox",
        description="Fit temperature calibration offsets and resample them into a model table",
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("-p", "--predict", metavar="CSV FILE",
                      help="Compute the model from a measurement file and save it as <name>_auto_model.txt")
    mode.add_argument("-v", "--validate", metavar="FILE", nargs="+",
                      help="Measurement file and, optionally, the model file to check it against "
                           "(default <name>_auto_model.txt)")
    parser.add_argument("-s", "--serial-number", dest="serial_number", metavar="SERIAL NUMBER",
                        nargs="?", const=DETECT_SERIAL, default=None,
                        help="Write the .ct export; without a value the serial number is taken "
                             "from the working directory name")
    parser.add_argument("-c", "--config", metavar="YAML FILE", help="Model configuration file")
    parser.add_argument("--no-plot", dest="no_plot", action="store_true", help="Do not render the chart")
    parser.add_argument("--log-level", dest="log_level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level (default WARNING)")
    args = parser.parse_args(argv)
    if args.validate is not None and len(args.validate) > 2:
        parser.error("--validate takes a measurement file and at most one model file")
    return args


def run(args: argparse.Namespace) -> ThermoModel:
    config = load_model_config(args.config)
    if args.no_plot:
        config = dataclasses.replace(config, plot_enabled=False)
    if args.predict is not None:
        model = ThermoModel.from_path(args.predict, recalc=True, config=config)
    else:
        path, *model_path = args.validate
        model = ThermoModel.from_path(path, recalc=False, model_path=model_path[0] if model_path else None,
                                      config=config)
    if args.serial_number is not None:
        serial = args.serial_number or detect_serial_number(Path.cwd(), config.serial_pattern)
        model.with_serial_number(serial)
        model.ct()
    model.plot()
    model.md()
    return model


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format='%(levelname)s: %(message)s')
    try:
        run(args)
    except (ThermoApproxError, OSError, ValueError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
