"""
sensor_exporter

Prometheus exporter for I2C temperature and humidity sensors.
"""

PACKAGE_LOGGER_NAME = "sensor_exporter"
