#!/usr/bin/env python3
import argparse
import logging
import sys
import time
from collections import namedtuple

import serial

from rencoder.ttable import DIR_NONE, DIR_CW, DIR_CCW

logger = logging.getLogger(__name__)

DEFAULT_PORT = '/dev/ttyACM0'
DEFAULT_BAUD = 115200
MAX_PERIOD = 1000


class EncoderReport(namedtuple('EncoderReport', 'position speed')):
    """One 'position,speed' line from the Pico."""
    __slots__ = ()

    def delta(self, previous):
        if previous is None:
            return 0
        return self.position - previous.position


def direction_of(delta: int) -> int:
    if delta > 0:
        return DIR_CW
    if delta < 0:
        return DIR_CCW
    return DIR_NONE


def parse_report(line):
    """b'12,6\\r\\n' -> EncoderReport(12, 6); None for logs/noise."""
    if isinstance(line, bytes):
        line = line.decode('ascii', errors='ignore')
    s = line.strip()
    if not s or s.startswith('#'):
        return None

    parts = s.split(',')
    if len(parts) != 2:
        return None
    try:
        position = int(parts[0].strip())
        speed = int(parts[1].strip())
    except ValueError:
        return None
    if speed < 0:
        return None
    return EncoderReport(position, speed)


def format_period_command(period_ms: int) -> bytes:
    """period -> b'period,<ms>\\r\\n' (Pico tarafı geçersizi sessizce yutar)"""
    period_ms = int(period_ms)
    if not 0 < period_ms <= MAX_PERIOD:
        raise ValueError(f"period must be in 1..{MAX_PERIOD} ms, got {period_ms}")
    return f"period,{period_ms}\r\n".encode('ascii')


class SerialBridge:
    def __init__(self, port=DEFAULT_PORT, baud=DEFAULT_BAUD, echo=False, serial_factory=serial.Serial):
        self.echo = echo
        self.ser = serial_factory(port, baudrate=baud, timeout=0.02, write_timeout=0.1)
        try:
            # MicroPython USB-CDC çoğu sistemde DTR=TRUE ister
            self.ser.dtr = True
            self.ser.rts = False
            self.ser.reset_input_buffer()
        except (serial.SerialException, OSError) as e:
            logger.debug("line setup skipped: %s", e)

        self.last = None
        self.last_warn = None  # hata spam koruması
        logger.info("Opened %s @ %d", port, baud)

    def poll(self):
        """Read one line; return the new EncoderReport or None."""
        line = self.ser.readline()
        if not line:
            return None

        report = parse_report(line)
        if report is None:
            text = line.decode('ascii', errors='ignore').strip()
            if text.startswith('#'):
                logger.debug("pico%s", text[1:])
            elif text:
                self._warn(f"unparsed line: {text!r}")
            return None

        d = direction_of(report.delta(self.last))
        if self.echo:
            logger.info("ENC: pos=%d speed=%d/s", report.position, report.speed)
        elif d != DIR_NONE:
            logger.info("%s pos=%d speed=%d/s", 'CW' if d == DIR_CW else 'CCW',
                        report.position, report.speed)
        self.last = report
        return report

    def send_period(self, period_ms):
        self.ser.write(format_period_command(period_ms))
        self.ser.flush()
        logger.info("CMD → Pico: period=%d", period_ms)

    def _warn(self, msg):
        # 1 sn'de bir uyar
        now = time.monotonic()
        if self.last_warn is None or now - self.last_warn > 1.0:
            logger.warning(msg)
            self.last_warn = now

    def close(self):
        if self.ser is not None and self.ser.is_open:
            self.ser.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


def build_parser():
    p = argparse.ArgumentParser(prog='encoder-bridge',
                                description="Read rotary encoder reports from a Pico over USB-CDC.")
    p.add_argument('--port', default=DEFAULT_PORT)
    p.add_argument('--baud', type=int, default=DEFAULT_BAUD)
    p.add_argument('--period', type=int, default=None,
                   help="speed sampling period in ms (1..1000)")
    p.add_argument('--echo', action='store_true', help="log every report")
    p.add_argument('--log-level', default='INFO',
                   choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    return p


def main(argv=None, serial_factory=serial.Serial, sleep=time.sleep, max_polls=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level,
                        format='[%(levelname)s] %(asctime)s %(name)s: %(message)s')

    if args.period is not None:
        try:
            format_period_command(args.period)
        except ValueError as e:
            logger.error("%s", e)
            return 2

    try:
        bridge = SerialBridge(args.port, args.baud, args.echo, serial_factory)
    except serial.SerialException as e:
        logger.error("cannot open %s: %s", args.port, e)
        return 1

    polls = 0
    with bridge:
        if args.period is not None:
            bridge.send_period(args.period)
        try:
            # 100 Hz döngü
            while max_polls is None or polls < max_polls:
                bridge.poll()
                polls += 1
                sleep(0.01)
        except KeyboardInterrupt:
            logger.info("stopped")
    return 0


if __name__ == '__main__':
    sys.exit(main())
