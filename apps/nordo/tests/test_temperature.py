import threading

import pytest

from main import parse_args
from temperature import TemperatureGauge


class TestTemperatureGauge:
    def test_default_is_body_temperature(self):
        assert TemperatureGauge().read() == 37

    def test_increase_and_decrease(self):
        gauge = TemperatureGauge(90)
        assert gauge.increase() == 91
        assert gauge.increase(9) == 100
        assert gauge.decrease(20) == 80
        assert gauge.read() == 80

    @pytest.mark.parametrize("step", [0, -1, 1.5, "2", True])
    def test_rejects_bad_steps(self, step):
        gauge = TemperatureGauge()
        with pytest.raises(ValueError):
            gauge.increase(step)
        assert gauge.read() == 37

    def test_concurrent_increases(self):
        gauge = TemperatureGauge(0)

        def bump():
            for _ in range(1000):
                gauge.increase()

        threads = [threading.Thread(target=bump) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert gauge.read() == 4000


class TestParseArgs:
    def test_defaults(self):
        args = parse_args([])
        assert args.host == "127.0.0.1"
        assert args.port == 8030
        assert args.boil_time == 900
        assert args.initial_temperature == 37
        assert args.montroyashi_url is None

    def test_negative_boil_time_rejected(self):
        with pytest.raises(SystemExit):
            parse_args(["--boil-time", "-1"])
