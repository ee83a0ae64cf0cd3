"""
Printer settings persisted between runs.

Stores the printer URL, device ID and printer-side timeout so callers do
not have to repeat them for every job.
"""

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

# Config directory location
CONFIG_DIR = Path.home() / ".config" / "eposprint"
SETTINGS_FILE = CONFIG_DIR / "printer.json"

DEFAULT_DEVICE_ID = "local_printer"
DEFAULT_TIMEOUT_MS = 10000


@dataclass
class PrinterSettings:
    """Connection settings for one ePOS-Print device.

    Attributes:
        url: Base URL of the printer (e.g. "http://192.168.1.194")
        device_id: ePOS device ID; "local_printer" on most models
        timeout: Printer-side processing timeout in milliseconds
    """

    url: str
    device_id: str = DEFAULT_DEVICE_ID
    timeout: int = DEFAULT_TIMEOUT_MS


def load_settings(path: Optional[Path] = None) -> Optional[PrinterSettings]:
    """Load saved settings.

    Args:
        path: Settings file. Defaults to SETTINGS_FILE.

    Returns:
        PrinterSettings if a valid file exists, None otherwise.
    """
    path = path or SETTINGS_FILE
    if not path.exists():
        return None

    try:
        data = json.loads(path.read_text())
        return PrinterSettings(
            url=data["url"],
            device_id=data.get("device_id", DEFAULT_DEVICE_ID),
            timeout=int(data.get("timeout", DEFAULT_TIMEOUT_MS)),
        )
    except (json.JSONDecodeError, KeyError, TypeError, ValueError):
        # Invalid settings file - treat as missing
        return None


def save_settings(settings: PrinterSettings, path: Optional[Path] = None) -> None:
    """Write settings, creating the config directory if needed."""
    path = path or SETTINGS_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(settings), indent=2))


def clear_settings(path: Optional[Path] = None) -> bool:
    """Remove saved settings.

    Returns:
        True if settings were removed, False if none existed.
    """
    path = path or SETTINGS_FILE
    if path.exists():
        path.unlink()
        return True
    return False
