"""Runtime configuration and the config file reader."""

import logging
import os
import re
from dataclasses import dataclass
from typing import List, Tuple

from .errors import ConfigError
from .models import SORT_MODES

logger = logging.getLogger(__name__)

CONFIG_RE = re.compile(r"^\s*(\w+)\s*=\s*(.*?)\s*$")


@dataclass
class Config:
    """Options read from the config file or changed with :set."""

    nc_timeout: int = 500  # ms getch waits before housekeeping
    statusbar_timeout: int = 3  # s before a status message is cleared
    loglvl: int = 0
    sortmode: str = "d"
    filter_persist: bool = True
    filter_cascade: bool = True
    version: str = ""  # version of the task binary

    def set(self, name: str, value: str) -> None:
        """Parse value and assign it to option name; raise ConfigError if invalid."""
        value = value.strip()
        if name in ("nc_timeout", "statusbar_timeout", "loglvl"):
            try:
                setattr(self, name, int(value))
            except ValueError:
                raise ConfigError(f"{name} must be an integer") from None
        elif name == "sortmode":
            if len(value) != 1 or value not in SORT_MODES:
                raise ConfigError("valid sort modes are: d, n, p, or r")
            self.sortmode = value
        elif name in ("filter_persist", "filter_cascade"):
            if value not in ("0", "1"):
                raise ConfigError(f"{name} must be a 0 or 1")
            setattr(self, name, value == "1")
        elif name == "tasknc_version":
            self.version = value
        else:
            raise ConfigError(f"unknown variable: {name}")
        logger.debug("%s set to %s", name, value)

    def show(self, name: str) -> str:
        """Render option name for the status bar."""
        if name in ("filter_persist", "filter_cascade"):
            return str(int(getattr(self, name)))
        if name == "tasknc_version":
            return self.version
        if name in ("nc_timeout", "statusbar_timeout", "loglvl", "sortmode"):
            return str(getattr(self, name))
        raise ConfigError(f"unknown variable: {name}")


def parse_config(lines: List[str]) -> Tuple[Config, List[str]]:
    """Parse config file lines ('key = value', '#' comments)."""
    config = Config()
    errors: List[str] = []
    for num, line in enumerate(lines, start=1):
        line = line.split("#", 1)[0]
        if not line.strip():
            continue
        m = CONFIG_RE.match(line)
        if not m:
            errors.append(f"line {num}: unhandled config line: {line.strip()}")
            continue
        name, value = m.group(1), m.group(2)
        if name == "tasknc_version":
            errors.append(f"line {num}: unhandled config line: {line.strip()}")
            continue
        try:
            config.set(name, value)
        except ConfigError as exc:
            if str(exc).startswith("unknown variable"):
                errors.append(f"line {num}: unhandled config line: {line.strip()}")
            else:
                errors.append(f"line {num}: error parsing {name} configuration: {exc}")
    for err in errors:
        logger.error(err)
    return config, errors


def load_config(path: str) -> Tuple[Config, List[str]]:
    """Read the config file at path; a missing file yields the defaults."""
    logger.debug("config file: %s", path)
    if not os.path.exists(path):
        return Config(), [f"config file could not be opened: {path}"]
    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = f.readlines()
    except OSError as exc:
        logger.error("config file could not be opened: %s", exc)
        return Config(), [f"config file could not be opened: {exc}"]
    return parse_config(lines)
