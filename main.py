# main.py
import sys, os
sys.path.append(os.path.dirname(__file__))  # 確保能找到 config.py

import argparse
import json
import logging
import math

import requests

from utils.crashlog import setup_crashlog, log_exception, log_dir
from config import AppConfig, AudioConfig, DeviceConfig
from notes.presets import PRESETS

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _init_logging(level: str = "INFO"):
    if logging.getLogger().handlers:
        return

    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
    try:
        from logging.handlers import RotatingFileHandler
        fh = RotatingFileHandler(os.path.join(log_dir(), "melody.log"),
                                 maxBytes=2*1024*1024, backupCount=3, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(fh)
    except OSError as e:
        logging.warning("File logging disabled: %s", e)


def _positive_float(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}")
    if not math.isfinite(value) or value <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive number, got {text}")
    return value


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="melody-console",
        description="Preview a buzzer melody locally and play it on the device.",
    )
    ap.add_argument('source', nargs='?', help="preset name (%s) or a .json / .mid file" % ", ".join(sorted(PRESETS)))
    ap.add_argument('--origin', type=float, default=0.0, help="schedule start time, seconds")
    ap.add_argument('--scale', type=_positive_float, default=DeviceConfig.scale_factor,
                    help="wire duration = beats * 0.4 * 1000 * scale (default: %(default)s, milliseconds)")
    ap.add_argument('--url', default=DeviceConfig.base_url, help="console backend base URL")
    ap.add_argument('--timeout', type=float, default=DeviceConfig.timeout)
    ap.add_argument('--volume', type=float, default=AudioConfig.volume)
    ap.add_argument('--no-audio', action='store_true', help="do not play the local preview")
    ap.add_argument('--no-device', action='store_true', help="do not send the melody to the device")
    ap.add_argument('--print-schedule', action='store_true')
    ap.add_argument('--print-wire', action='store_true')
    ap.add_argument('--list-presets', action='store_true')
    ap.add_argument('--log-level', default='INFO', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_crashlog()
    _init_logging(args.log_level)

    if args.list_presets:
        for name, melody in sorted(PRESETS.items()):
            print(f"{name:8s} {len(melody):3d} notes  {float(melody.total_beats):g} beats")
        return 0
    if not args.source:
        build_parser().print_usage()
        return 2

    from app import App, load_melody

    cfg = AppConfig(
        audio=AudioConfig(volume=args.volume, enabled=not args.no_audio),
        device=DeviceConfig(base_url=args.url, timeout=args.timeout,
                            scale_factor=args.scale, enabled=not args.no_device),
    )

    app = None
    try:
        melody = load_melody(args.source)
        app = App(cfg)
        if args.print_schedule or args.print_wire:
            tones, wire = app.prepare(melody, args.origin)
            if args.print_schedule:
                for t in tones:
                    print(f"{t.frequency:9.2f} Hz  {t.start:8.3f} -> {t.stop:8.3f}")
            if args.print_wire:
                print(json.dumps([n.as_pair() for n in wire]))
        app.run(melody, args.origin)
        return 0
    except requests.RequestException as e:
        log_exception("send melody", e)
        logging.error("Device request failed: %s", e)
        return 1
    except (ValueError, KeyError) as e:
        logging.error("Invalid melody %r: %s", args.source, e)
        return 2
    except KeyboardInterrupt:
        logging.info("Interrupted")
        return 130
    finally:
        if app is not None:
            app.close()


if __name__ == '__main__':
    sys.exit(main())
