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

"""Error conditions raised while discovering NICs and reading hw counters.

Startup failures (DiscoveryIOError, NoDevicesFound) are fatal. The remaining
errors are raised during an update cycle and only affect a single device or
a single metric for that cycle.
"""


class IonstatError(Exception):
    pass


class DiscoveryIOError(IonstatError):
    """The NIC class directory could not be scanned."""


class NoDevicesFound(IonstatError):
    """The scan succeeded but no NIC matched the device pattern."""


class DeviceCountersUnavailable(IonstatError):
    """A discovered NIC has no hw_counters directory."""

    def __init__(self, device, path):
        super().__init__(f"NIC {device} does not have hw_counters ({path})")
        self.device = device
        self.path = path


class MetricFileMissing(IonstatError):
    """A single counter file is absent for a NIC."""

    def __init__(self, path):
        super().__init__(f"Metric file {path} missing")
        self.path = path


class CounterReadError(IonstatError):
    """A counter file exists but could not be read."""

    def __init__(self, path, reason):
        super().__init__(f"Error reading {path}: {reason}")
        self.path = path


class MetricParseError(IonstatError):
    """A counter file does not hold a finite decimal number."""

    def __init__(self, path, content):
        super().__init__(f"Error parsing value from {path}: {content!r}")
        self.path = path
        self.content = content
