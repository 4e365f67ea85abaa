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

"""Metric registry

Holds one NIC-labeled prometheus metric family per metric definition. The
update cycle is the only writer; exposition requests read concurrently. A
single lock serializes every access. Example exposition:

lifespan{nic="ionic_0"} 42.0
rx_rdma_ucast_pkts_total{nic="ionic_0"} 25.0
"""

import logging
import threading

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    disable_created_metrics,
    generate_latest,
)

from ionstat.metric_definitions import MetricKind


class MetricRegistry:
    def __init__(self, label="nic"):
        self.__label = label
        self.__lock = threading.Lock()
        self.__registry = CollectorRegistry()
        self.__gauges = {}
        self.__counters = {}

    def initialize(self, definitions):
        """Allocate one empty labeled metric family per definition.

        Calling this again discards all previously recorded series.

        Args:
            definitions (list): Ordered MetricDefinition entries.
        """
        # one sample line per counter series, no <name>_created companion
        disable_created_metrics()

        registry = CollectorRegistry()
        gauges = {}
        counters = {}
        for definition in definitions:
            if definition.kind is MetricKind.GAUGE:
                gauges[definition.name] = Gauge(
                    definition.name, definition.description, labelnames=[self.__label], registry=registry
                )
            elif definition.kind is MetricKind.COUNTER:
                counters[definition.name] = Counter(
                    definition.name, definition.description, labelnames=[self.__label], registry=registry
                )
            else:
                raise ValueError(f"Unsupported metric kind for {definition.name}: {definition.kind}")
            logging.info(f"--> [registered] {definition.name} -> {definition.description} ({definition.kind.value})")

        with self.__lock:
            self.__registry = registry
            self.__gauges = gauges
            self.__counters = counters

    def applyGauge(self, name, device, value):
        """Set the gauge series for (name, device) to value."""
        with self.__lock:
            self.__gauges[name].labels(device).set(value)

    def applyCounterDelta(self, name, device, value):
        """Add value to the accumulated counter series for (name, device).

        Raises:
            KeyError: name is not a registered counter.
            ValueError: value is negative; the series is left untouched.
        """
        if value < 0:
            raise ValueError(f"Counter {name} for {device} cannot decrease (observed {value})")
        with self.__lock:
            self.__counters[name].labels(device).inc(value)

    def snapshot(self):
        """Return {metric name: {device: value}} for every observed series."""
        result = {}
        with self.__lock:
            for family in self.__registry.collect():
                sample_name = family.name
                if family.name in self.__counters:
                    sample_name += "_total"
                series = {}
                for sample in family.samples:
                    if sample.name == sample_name:
                        series[sample.labels[self.__label]] = sample.value
                result[family.name] = series
        return result

    def generate(self):
        """Render all series in the prometheus text exposition format."""
        with self.__lock:
            return generate_latest(self.__registry)
