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

"""Ionic NIC hardware counters

Exports the hw_counters of every ionic RDMA device found under
/sys/class/infiniband, one metric per counter file, labeled by NIC. Gauge
metrics report the latest reading; counter metrics add every reading to a
running total. Example metrics:

lifespan{nic="ionic_0"} 3.6e+06
req_rx_cqe_err_total{nic="ionic_0"} 0.0
rx_rdma_ucast_pkts_total{nic="ionic_0"} 1.2345e+06
"""

import configparser
import logging

from ionstat.collector_base import Collector
from ionstat.counter_reader import CounterReader
from ionstat.discovery import (
    DEFAULT_CLASS_PATH,
    DEFAULT_COUNTERS_SUBPATH,
    DEFAULT_DEVICE_PATTERN,
    discover_devices,
)
from ionstat.exceptions import (
    CounterReadError,
    DeviceCountersUnavailable,
    MetricParseError,
)
from ionstat.metric_definitions import METRIC_DEFINITIONS, MetricKind
from ionstat.registry import MetricRegistry


class IONIC(Collector):
    def __init__(self, config: configparser.ConfigParser, registry: MetricRegistry, definitions=None):
        """Initialize the IONIC data collector.

        Args:
            config (configparser.ConfigParser): Cached copy of runtime configuration.
            registry (MetricRegistry): Shared metric store read by the /metrics endpoint.
            definitions (list): Metric definitions to export (defaults to METRIC_DEFINITIONS).
        """
        logging.debug(f"Initializing {self.__class__.__name__} data collector")

        self.__registry = registry
        self.__definitions = list(METRIC_DEFINITIONS if definitions is None else definitions)
        self.__reader = CounterReader(self.__definitions)
        self.__devices = []

        self.__class_path = DEFAULT_CLASS_PATH
        self.__device_pattern = DEFAULT_DEVICE_PATTERN
        self.__counters_subpath = DEFAULT_COUNTERS_SUBPATH

        # runtime config parsing
        if config.has_section("ionstat.collectors.ionic"):
            section = config["ionstat.collectors.ionic"]
            self.__class_path = section.get("class_path", self.__class_path)
            self.__device_pattern = section.get("device_pattern", self.__device_pattern)
            self.__counters_subpath = section.get("counters_subpath", self.__counters_subpath)

    @property
    def devices(self):
        return list(self.__devices)

    def registerMetrics(self):
        """Discover NICs and register metrics of interest

        Raises:
            DiscoveryIOError: NIC class directory cannot be scanned.
            NoDevicesFound: no NIC matches the configured pattern.
        """
        self.__devices = discover_devices(self.__class_path, self.__device_pattern, self.__counters_subpath)
        self.__registry.initialize(self.__definitions)

    def updateMetrics(self):
        """Read hw_counters for every NIC and apply them to the registry.

        Returns:
            int: Number of readings applied during this cycle.
        """
        applied = 0
        for device in self.__devices:
            try:
                for observation in self.__reader.read(device):
                    self.__apply(observation)
                    applied += 1
            except DeviceCountersUnavailable as e:
                logging.warning(f"{e}, skipping...")
            except (MetricParseError, CounterReadError) as e:
                logging.error(f"Error updating metrics for NIC {device.name}: {e}")
            except ValueError as e:
                logging.error(f"Error applying metrics for NIC {device.name}: {e}")
        return applied

    def __apply(self, observation):
        definition = observation.definition
        nic = observation.device.name
        if definition.kind is MetricKind.GAUGE:
            self.__registry.applyGauge(definition.name, nic, observation.value)
        elif definition.kind is MetricKind.COUNTER:
            self.__registry.applyCounterDelta(definition.name, nic, observation.value)
