# -------------------------------------------------------------------------------
# MIT License
#
# Copyright (c) 2023 - 2026 Advanced Micro Devices, Inc. All Rights Reserved.
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
# -------------------------------------------------------------------------------

"""Per-NIC hw_counters reader"""

import logging
import math
from pathlib import Path
from typing import NamedTuple

from ionstat.discovery import Device
from ionstat.exceptions import (
    CounterReadError,
    DeviceCountersUnavailable,
    MetricFileMissing,
    MetricParseError,
)
from ionstat.metric_definitions import MetricDefinition


class Observation(NamedTuple):
    definition: MetricDefinition
    device: Device
    value: float


def parse_counter(content: str, path: Path) -> float:
    """Parse the text of a counter file as a finite number."""
    text = content.strip()
    # float() would otherwise accept digit separators ("1_000") and non-ASCII digits
    if "_" in text or not text.isascii():
        raise MetricParseError(path, text)
    try:
        value = float(text)
    except ValueError:
        raise MetricParseError(path, text) from None
    if not math.isfinite(value):
        raise MetricParseError(path, text)
    return value


def read_counter_file(path: Path) -> float:
    try:
        with open(path, "r") as f:
            content = f.read()
    except FileNotFoundError:
        raise MetricFileMissing(path) from None
    except (OSError, UnicodeDecodeError) as e:
        raise CounterReadError(path, e) from e
    return parse_counter(content, path)


class CounterReader:
    def __init__(self, definitions):
        self.__definitions = list(definitions)
        self.__warned_missing_paths = set()

    def read(self, device: Device):
        """Yield an Observation for every counter file of device, in definition order.

        Missing counter files are logged and skipped. A parse or read failure
        stops the iteration; observations yielded before it remain valid.

        Raises:
            DeviceCountersUnavailable: device has no counters directory.
            MetricParseError: a counter file does not hold a finite number.
            CounterReadError: a counter file exists but cannot be read.
        """
        if not device.counters_path.is_dir():
            raise DeviceCountersUnavailable(device.name, device.counters_path)

        for definition in self.__definitions:
            path = device.counters_path / definition.name
            try:
                value = read_counter_file(path)
            except MetricFileMissing as e:
                self.__log_missing(device, definition, e)
                continue
            yield Observation(definition, device, value)

    def __log_missing(self, device, definition, error):
        # warn once per file, then keep quiet at debug level
        if error.path in self.__warned_missing_paths:
            logging.debug(f"{error} for NIC {device.name}, skipping {definition.name}")
            return
        self.__warned_missing_paths.add(error.path)
        logging.warning(f"{error} for NIC {device.name}, skipping {definition.name}")
