from encoder_bridge.serial_bridge import (
    EncoderReport, SerialBridge, direction_of, format_period_command, parse_report,
)
