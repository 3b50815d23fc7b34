import logging
import subprocess
from typing import Optional

logger = logging.getLogger(__name__)

# The kernel thermal zone can be inaccurate on Raspberry Pi SoCs; vcgencmd
# asks the VideoCore firmware for an instantaneous reading instead.
VCGENCMD = "vcgencmd"
MEASURE_TEMP_ARG = "measure_temp"

# Returned when the tool output cannot be parsed. Indistinguishable from a
# real 0.0 C reading; use parse_temperature() on read_raw_output() to tell.
SENTINEL_TEMP = 0.0


class LaunchError(OSError):
    """The temperature tool could not be started at all."""


def read_raw_output() -> str:
    """Run ``vcgencmd measure_temp`` and return its decoded stdout.

    Exit status and stderr are ignored. Raises LaunchError if the process
    cannot be spawned.
    """
    command = [VCGENCMD, MEASURE_TEMP_ARG]
    try:
        result = subprocess.run(
            command,
            capture_output=True, encoding="utf-8", errors="replace"
        )
    except OSError as e:
        logger.error(f"Failed to launch {VCGENCMD}: {e}")
        raise LaunchError(f"could not launch {' '.join(command)}: {e}") from e
    return result.stdout or ""


def parse_temperature(output: str) -> Optional[float]:
    """Parse output such as ``temp=42.8'C`` into Celsius, or None."""
    value = output.split("=")[-1]
    value = value.split("'")[0].strip()
    try:
        return float(value)
    except ValueError:
        return None


def measure_temperature() -> float:
    output = read_raw_output()
    temp = parse_temperature(output)
    if temp is None:
        logger.warning(f"Unparsable {VCGENCMD} output {output!r}, using {SENTINEL_TEMP}")
        return SENTINEL_TEMP
    logger.debug(f"SoC temperature {temp:.1f}°C")
    return temp
