#!/usr/bin/env python3
import argparse

from boiling import DEFAULT_BOIL_TIME, BoilingSessionManager
from notifier import DEFAULT_ROBOT_NAME, MontroyashiNotifier
from server import DEFAULT_HTTP_HOST, DEFAULT_HTTP_PORT, build_app, run_server
from temperature import DEFAULT_TEMPERATURE, TemperatureGauge


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Nordo Service: boil potatoes and report their softness")
    parser.add_argument('--host', type=str, default=DEFAULT_HTTP_HOST,
                        help=f'HTTP bind address (default: {DEFAULT_HTTP_HOST})')
    parser.add_argument('--port', type=int, default=DEFAULT_HTTP_PORT,
                        help=f'HTTP port (default: {DEFAULT_HTTP_PORT})')
    parser.add_argument('--boil-time', type=float, default=DEFAULT_BOIL_TIME,
                        help=f'Seconds a batch must boil to be done (default: {DEFAULT_BOIL_TIME})')
    parser.add_argument('--initial-temperature', type=int, default=DEFAULT_TEMPERATURE,
                        help=f'Starting water temperature in Celsius (default: {DEFAULT_TEMPERATURE})')
    parser.add_argument('--montroyashi-url', type=str, default=None,
                        help='URL to POST status messages to (default: print only)')

    args = parser.parse_args(argv)
    if args.boil_time < 0:
        parser.error("--boil-time must not be negative")
    return args


def main(argv=None):
    args = parse_args(argv)

    notifier = MontroyashiNotifier(DEFAULT_ROBOT_NAME, args.montroyashi_url)
    manager = BoilingSessionManager(boil_time=args.boil_time, notifier=notifier)
    temperature = TemperatureGauge(args.initial_temperature)

    print(f"Boil time: {args.boil_time}s | Water temperature: {args.initial_temperature}C")

    app = build_app(manager, temperature, notifier)
    run_server(app, args.host, args.port)


if __name__ == '__main__':
    main()
