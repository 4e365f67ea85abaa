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
import importlib.metadata
import importlib.resources
import logging
import os
import sys
from pathlib import Path


class PrefixFilter(logging.Filter):
    """Prepend a fixed prefix to every log message (used to indent registration output)."""

    def __init__(self, prefix):
        super().__init__()
        self.prefix = prefix

    def filter(self, record):
        record.msg = f"{self.prefix}{record.msg}"
        return True


def defaultConfigFile():
    return importlib.resources.files("ionstat") / "config" / "ionstat.default"


def readConfig(configFile=None):
    """Load runtime configuration.

    Search order: explicit configFile, IONSTAT_CONFIG environment variable,
    then the packaged default config.

    Args:
        configFile (str): Optional path to a runtime config file.

    Returns:
        configparser.ConfigParser: Parsed runtime configuration.
    """
    if configFile is None:
        configFile = os.environ.get("IONSTAT_CONFIG")

    config = configparser.ConfigParser()
    if configFile is None:
        with importlib.resources.as_file(defaultConfigFile()) as path:
            config.read(path)
        return config

    if not Path(configFile).is_file():
        logging.error(f"[ERROR]: Unable to find runtime config file {configFile}")
        sys.exit(1)

    config.read(configFile)
    return config


def getVersion():
    try:
        return importlib.metadata.version("ionstat")
    except importlib.metadata.PackageNotFoundError:
        return "Unknown"
