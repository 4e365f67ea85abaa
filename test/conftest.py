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

import configparser

import pytest


@pytest.fixture
def class_path(tmp_path):
    """Empty stand-in for /sys/class/infiniband."""
    path = tmp_path / "infiniband"
    path.mkdir()
    return path


@pytest.fixture
def add_nic(class_path):
    """Create (or update) a fake NIC with the given hw_counters file contents."""

    def _add_nic(name, counters=None, with_counters=True):
        nic = class_path / name
        hw_counters = nic / "ports" / "1" / "hw_counters"
        if with_counters:
            hw_counters.mkdir(parents=True, exist_ok=True)
        else:
            nic.mkdir(exist_ok=True)
        for metric, content in (counters or {}).items():
            (hw_counters / metric).write_text(content)
        return nic

    return _add_nic


@pytest.fixture
def ionic_config(class_path):
    config = configparser.ConfigParser()
    config.read_dict(
        {
            "ionstat.collectors": {"interval_secs": "0.05", "enable_ionic": "True"},
            "ionstat.collectors.ionic": {
                "class_path": str(class_path),
                "device_pattern": "ionic_*",
                "counters_subpath": "ports/1/hw_counters",
            },
        }
    )
    return config
