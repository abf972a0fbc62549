import threading

DEFAULT_TEMPERATURE = 37  # degrees Celsius
DEFAULT_TEMPERATURE_STEP = 1


class TemperatureGauge:
    """Water temperature of the pot, adjustable from HTTP handler threads."""

    def __init__(self, degrees_celcius: int = DEFAULT_TEMPERATURE):
        self._degrees = degrees_celcius
        self._lock = threading.Lock()

    def read(self) -> int:
        with self._lock:
            return self._degrees

    def increase(self, degrees: int = DEFAULT_TEMPERATURE_STEP) -> int:
        _check_step(degrees)
        with self._lock:
            self._degrees += degrees
            return self._degrees

    def decrease(self, degrees: int = DEFAULT_TEMPERATURE_STEP) -> int:
        _check_step(degrees)
        with self._lock:
            self._degrees -= degrees
            return self._degrees


def _check_step(degrees) -> None:
    if not isinstance(degrees, int) or isinstance(degrees, bool) or degrees <= 0:
        raise ValueError("Temperature step must be a positive integer")
