import logging

import numpy as np

from .hardware import measure_temperature

logger = logging.getLogger(__name__)

FAN_OFF_TEMP = 40.0
FAN_FULL_TEMP = 60.0
DUTY_CYCLE_MIN = 0
DUTY_CYCLE_MAX = 255


def map_to_duty_cycle(temp: float) -> int:
    """Map a Celsius temperature onto an 8-bit fan duty cycle.

    Off at or below FAN_OFF_TEMP, full at or above FAN_FULL_TEMP, and a
    linear ramp in between (12.75 per degree) rounded up. NaN is treated as
    an overheat and gets full speed.
    """
    if np.isnan(temp):
        logger.warning("Temperature is NaN, running fan at full speed")
        return DUTY_CYCLE_MAX
    if temp <= FAN_OFF_TEMP:
        return DUTY_CYCLE_MIN
    if temp >= FAN_FULL_TEMP:
        return DUTY_CYCLE_MAX

    ramp = np.interp(temp, [FAN_OFF_TEMP, FAN_FULL_TEMP], [DUTY_CYCLE_MIN, DUTY_CYCLE_MAX])
    duty_cycle = int(np.ceil(ramp))
    logger.debug(f"Temp {temp:.1f}°C -> duty cycle {duty_cycle}")
    return duty_cycle


def measure_duty_cycle() -> int:
    """Read the SoC temperature and map it in one step."""
    return map_to_duty_cycle(measure_temperature())
