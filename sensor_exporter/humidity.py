"""
humidity.py

Conversion from relative to absolute humidity.

The humidity definitions and the ideal gas law give:

    1. AH = m_water / V
    2. RH = p_water / p*_water
    3. p_water = (m_water / V) * R_water * T

    => AH = RH * p*_water / (R_water * T)

with AH the absolute humidity, p*_water the saturation vapour pressure of
water, R_water the specific gas constant for water vapour and T the
temperature in Kelvin.
"""

import math

R = 8.31446261815324  # molar gas constant in kg * m² / (s² * K * mol)
M_WATER = 0.01801528  # molar mass of water in kg / mol
R_WATER = R / M_WATER  # specific gas constant for water vapour in m² / (s² * K)


def saturation_vapor_pressure_water(temperature_celsius: float) -> float:
    """
    Saturation vapour pressure of water in hectopascal (Arden Buck equation).

    The Buck equation is the most accurate of the common formulations around
    room temperature.
    """
    t = temperature_celsius
    return 6.1121 * math.exp((18.678 - t / 234.5) * (t / (257.14 + t)))


def absolute_humidity(relative_humidity: float, temperature_celsius: float) -> float:
    """
    Absolute humidity in g/m³ for a relative humidity in percent and a
    temperature in Celsius. The result is not rounded.
    """
    temperature_kelvin = temperature_celsius + 273.15
    return (
        1000
        * relative_humidity
        * saturation_vapor_pressure_water(temperature_celsius)
        / (R_WATER * temperature_kelvin)
    )
