"""
main.py

Bootstrap entry point for the sensor exporter. Parses the command line,
loads configuration, sets up logging, builds the configured sensors and
serves their metrics until interrupted.

Configuration and hardware initialisation errors end the process with exit
status 1 before anything is served.
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from sensor_exporter.__version__ import __version__
from sensor_exporter.config_loader import ConfigLoader
from sensor_exporter.exceptions import ConfigurationError
from sensor_exporter.inputs.input_manager import InputManager
from sensor_exporter.inputs.sensors.descriptor import parse_descriptors
from sensor_exporter.logging_setup import setup_logging
from sensor_exporter.server import MetricsServer
from sensor_exporter.telemetry import build_registry


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="sensor-exporter",
        description="Prometheus exporter for I2C temperature and humidity sensors.",
        epilog=(
            "Sensor descriptor: MODEL[,address=<uint8>][,bus=<int>]"
            "[,repeatability=low|medium|high][,temp_offset=<float>][,humidity_offset=<float>]. "
            "Supported models: BME280, BMP180, BMP280, BMP388, SHT30, SHT31, SHT35."
        ),
    )
    parser.add_argument(
        "--web.listen-address",
        dest="listen_address",
        help="Address on which to expose metrics and web interface (default :9775).",
    )
    parser.add_argument(
        "--web.telemetry-path",
        dest="metrics_path",
        help="Path under which to expose metrics (default /metrics).",
    )
    parser.add_argument("--config", help="Path to a JSON config file.")
    parser.add_argument("--log-level", dest="log_level", help="Log level (default INFO).")
    parser.add_argument("--log-dir", dest="log_dir", help="Directory for a rotating log file.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("sensors", nargs="*", metavar="SENSOR", help="Sensor descriptor.")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Run the exporter. Returns the process exit status.
    """
    args = parse_args(argv)

    bootstrap_logger = logging.getLogger("bootstrap")
    bootstrap_logger.setLevel(logging.INFO)
    if not bootstrap_logger.handlers:
        bootstrap_logger.addHandler(logging.StreamHandler())

    bootstrap_logger.info(f"Sensor exporter v{__version__}")

    try:
        config = ConfigLoader(logger=bootstrap_logger, path=args.config).as_dict()
    except (ConfigurationError, OSError, ValueError) as e:
        bootstrap_logger.error(f"Failed to load configuration: {e}")
        return 1

    for key in ("listen_address", "metrics_path", "log_level", "log_dir"):
        value = getattr(args, key)
        if value:
            config[key] = value
    if args.sensors:
        config["sensors"] = args.sensors

    logger = setup_logging(
        log_dir=config["log_dir"],
        log_file_name="sensor_exporter.log",
        log_level=config["log_level"],
    )

    if not config["metrics_path"].startswith("/"):
        logger.error(f"Invalid telemetry path {config['metrics_path']!r}: must start with '/'")
        return 1

    if not config["sensors"]:
        logger.error("No sensors configured. Pass sensor descriptors or set 'sensors' in the config file.")
        return 1

    try:
        sensor_configs = parse_descriptors(config["sensors"])
        input_manager = InputManager(sensor_configs=sensor_configs, logger=logger)
    except ConfigurationError as e:
        logger.error(str(e))
        return 1
    except Exception as e:
        logger.error(f"Failed to initialise sensors: {e}")
        return 1

    try:
        registry = build_registry(input_manager.collectors)
        server = MetricsServer(config["listen_address"], config["metrics_path"], registry)
    except (ConfigurationError, OSError) as e:
        logger.error(f"Failed to start metrics server: {e}")
        input_manager.close()
        return 1

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutdown requested by user.")
    finally:
        server.close()
        input_manager.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
