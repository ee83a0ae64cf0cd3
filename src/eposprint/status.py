"""
Printer Status Bitmask Decoding.

The printer reports its state as a 32-bit status word. Each entry of
STATUS_FLAGS is an independent test against that word. Some bits are
shared by flags that belong to different device families (for example
0x00000004 is the drawer kick-out connector on receipt printers and the
battery offline state on mobile printers); both names are reported.
"""

import json
from typing import NamedTuple


class StatusFlag(NamedTuple):
    """A named bit test over the status word."""
    name: str
    mask: int
    key: str  # key in the JSON status summary
    description: str


STATUS_FLAGS: tuple[StatusFlag, ...] = (
    StatusFlag("NO_RESPONSE", 0x00000001, "no_response", "No response from the printer"),
    StatusFlag("PRINT_SUCCESS", 0x00000002, "success", "Printing completed successfully"),
    StatusFlag("DRAWER_KICK_OUT_CONNECTOR", 0x00000004, "drawer_kick_out_connector",
               "Drawer kick-out connector pin 3 is high"),
    StatusFlag("BATTERY_OFFLINE_STATUS", 0x00000004, "battery_offline_status",
               "Offline because of remaining battery"),
    StatusFlag("OFFLINE", 0x00000008, "offline", "Offline"),
    StatusFlag("COVER_OPEN", 0x00000020, "cover_open", "The cover is open"),
    StatusFlag("PAPER_FEED_OPERATION", 0x00000040, "paper_feed_operation",
               "Paper is being fed by the feed switch"),
    StatusFlag("WAITING_ONLINE", 0x00000100, "waiting_online", "Waiting to be brought back online"),
    StatusFlag("PAPER_FEED_SWITCH_PRESSED", 0x00000200, "paper_feed_switch_pressed",
               "The paper feed switch is pressed"),
    StatusFlag("MECHANICAL_ERROR", 0x00000400, "mechanical_error", "A mechanical error occurred"),
    StatusFlag("AUTOCUTTER_ERROR", 0x00000800, "autocutter_error", "An autocutter error occurred"),
    StatusFlag("UNRECOVERABLE_ERROR", 0x00002000, "unrecoverable", "An unrecoverable error occurred"),
    StatusFlag("RECOVERABLE_ERROR", 0x00004000, "recoverable",
               "An automatically recoverable error occurred"),
    StatusFlag("ROLL_PAPER_NEAR_END", 0x00020000, "no_paper_roll_near_end_sensor",
               "No paper at the roll paper near-end sensor"),
    StatusFlag("ROLL_PAPER_END", 0x00080000, "no_paper_in_roll_paper_end_sensor",
               "No paper at the roll paper end sensor"),
    StatusFlag("BUZZER_ON", 0x01000000, "buzzer_on", "The buzzer is on"),
    StatusFlag("LABEL_WAIT_REMOVAL", 0x01000000, "label_wait_removal",
               "Waiting for the label to be removed"),
    StatusFlag("NO_PAPER_IN_PEEL_SENSOR", 0x40000000, "no_paper_in_peel_sensor",
               "No paper at the label peeling sensor"),
    StatusFlag("SPOOLER_STOPPED", 0x80000000, "spooler_stopped", "The spooler has stopped"),
)

FLAG_NAMES = frozenset(flag.name for flag in STATUS_FLAGS)


def decode_status(status: int) -> list[str]:
    """
    Decode a status word into flag names.

    Names come out in table order, not bit order, and flags sharing a
    bit are all reported.

    Example:
        >>> decode_status(251658262)
        ['PRINT_SUCCESS', 'DRAWER_KICK_OUT_CONNECTOR', 'BATTERY_OFFLINE_STATUS', 'BUZZER_ON', 'LABEL_WAIT_REMOVAL']
    """
    return [flag.name for flag in STATUS_FLAGS if status & flag.mask]


def status_summary(status: int) -> str:
    """
    Render the set flags as a compact JSON object, e.g.
    {"success":true,"buzzer_on":true}. Keys are the StatusFlag.key names.
    """
    return json.dumps(
        {flag.key: True for flag in STATUS_FLAGS if status & flag.mask},
        separators=(",", ":"),
    )
