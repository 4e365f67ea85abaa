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

"""NIC discovery

Locates ionic RDMA devices exposed under the infiniband sysfs class, e.g.:

/sys/class/infiniband/ionic_0 -> ../../devices/pci0000:00/.../infiniband/ionic_0
"""

import fnmatch
import logging
from pathlib import Path
from typing import NamedTuple

from ionstat.exceptions import DiscoveryIOError, NoDevicesFound

DEFAULT_CLASS_PATH = "/sys/class/infiniband"
DEFAULT_DEVICE_PATTERN = "ionic_*"
DEFAULT_COUNTERS_SUBPATH = "ports/1/hw_counters"


class Device(NamedTuple):
    name: str
    path: Path
    counters_path: Path


def discover_devices(
    class_path=DEFAULT_CLASS_PATH, pattern=DEFAULT_DEVICE_PATTERN, counters_subpath=DEFAULT_COUNTERS_SUBPATH
):
    """Scan class_path for entries matching pattern.

    Args:
        class_path (str): Directory enumerating devices.
        pattern (str): Glob pattern applied to entry names.
        counters_subpath (str): Location of counter files relative to a device.

    Returns:
        list: Device entries sorted by name.

    Raises:
        DiscoveryIOError: class_path cannot be listed.
        NoDevicesFound: no entry matches pattern.
    """
    base = Path(class_path)
    try:
        entries = sorted(base.iterdir(), key=lambda entry: entry.name)
    except OSError as e:
        raise DiscoveryIOError(f"failed to list NIC paths in {base}: {e}") from e

    devices = []
    for entry in entries:
        if not fnmatch.fnmatchcase(entry.name, pattern):
            continue
        path = entry.resolve()
        devices.append(Device(name=entry.name, path=path, counters_path=path / counters_subpath))

    if len(devices) == 0:
        raise NoDevicesFound(f"no NICs matching {pattern} found in {base}")

    logging.info("Discovered NICs: %s" % [device.name for device in devices])
    return devices
