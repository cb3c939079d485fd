"""
Entry-point for the scope.  Keeps top-level script tiny.

    python main.py                      # input from radar_config.json
    python main.py --input sim          # no hardware needed
    python main.py --input serial --port /dev/ttyACM0
"""
import argparse
import logging
import sys

import pygame
from sweepradar import config, gui
from sweepradar.errors import TransportUnavailable

logging.basicConfig(
    level=logging.INFO,
    format='[%(levelname)s] %(name)s: %(message)s',
    stream=sys.stdout
)
log = logging.getLogger("main")


def main():
    parser = argparse.ArgumentParser(description="Sweep-Radar scope display.")
    parser.add_argument("--config", default=str(config.CFG_PATH),
                        help="Path to radar_config.json.")
    parser.add_argument("--input", choices=("serial", "mqtt", "sim"),
                        help="Override input_mode from the config.")
    parser.add_argument("--port", help="Override serial_port from the config.")
    args = parser.parse_args()

    cfg = config.load(args.config)
    if args.input:
        cfg["input_mode"] = args.input
    if args.port:
        cfg["serial_port"] = args.port

    pygame.init()
    try:
        app = gui.RadarGUI(cfg)
    except TransportUnavailable as exc:
        log.error("%s", exc)
        pygame.quit()
        sys.exit(1)
    app.run()
    config.save(cfg, args.config)

if __name__ == "__main__":
    main()
