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

# Prometheus data collector for ionic NIC hardware counters.
#
# Supporting monitor class to implement a prometheus data collector with one
# or more custom collector(s). Collectors are sampled on a background thread
# and the resulting metric state is rendered on demand for /metrics requests.
# --

import importlib
import logging
import os
import platform
import sys
import time

from ionstat import utils
from ionstat.collector_definitions import COLLECTORS
from ionstat.exceptions import DiscoveryIOError, NoDevicesFound
from ionstat.registry import MetricRegistry
from ionstat.scheduler import DEFAULT_INTERVAL_SECS, Scheduler


class Monitor:
    def __init__(self, config, logFile=None):

        self.config = config  # cache runtime configuration

        logLevel = os.environ.get("IONSTAT_LOG_LEVEL", "INFO").upper()
        if logFile:
            hostname = platform.node().split(".", 1)[0]
            logging.basicConfig(
                format=f"[{hostname}: %(asctime)s] %(message)s",
                level=logLevel,
                filename=logFile,
                datefmt="%H:%M:%S",
            )
        else:
            logging.basicConfig(format="%(message)s", level=logLevel, stream=sys.stdout)

        if not self.config.has_section("ionstat.collectors"):
            self.config.add_section("ionstat.collectors")

        self.__interval_secs = self.config["ionstat.collectors"].getfloat("interval_secs", DEFAULT_INTERVAL_SECS)
        logging.info("Sampling interval = %s secs" % self.__interval_secs)

        # shared metric state: written by the sampling thread, read by /metrics
        self.registry = MetricRegistry()

        # initialize collection of data collectors
        self.__collectors = []
        self.__scheduler = Scheduler(self.updateAllMetrics, self.__interval_secs)

        logging.debug("Completed collector initialization (base class)")
        return

    @property
    def collectors(self):
        return list(self.__collectors)

    def initMetrics(self):
        for collector in COLLECTORS:
            runtime_option = collector["runtime_option"]
            default = collector["enabled_by_default"]
            if runtime_option:
                enabled = self.config["ionstat.collectors"].getboolean(runtime_option, default)
            else:
                enabled = default
            if enabled:
                module = importlib.import_module(collector["file"])
                cls = getattr(module, collector["className"])
                self.__collectors.append(cls(config=self.config, registry=self.registry))

        # Initialize all metrics
        prefix_filter = utils.PrefixFilter("   ")
        for collector in self.__collectors:
            logging.info("\nRegistering metrics for collector: %s" % collector.__class__.__name__)
            logging.getLogger().addFilter(prefix_filter)
            try:
                collector.registerMetrics()
            except (DiscoveryIOError, NoDevicesFound) as e:
                logging.error("")
                logging.error(f"[ERROR]: {e}")
                logging.error("")
                sys.exit(1)
            finally:
                logging.getLogger().removeFilter(prefix_filter)

        # first sample is taken by the sampling thread as soon as it starts

    def updateAllMetrics(self):
        start_time_total = time.perf_counter()

        for collector in self.__collectors:
            start_time = time.perf_counter()
            collector.updateMetrics()
            elapsed_time = time.perf_counter() - start_time
            logging.debug("%s sample completed in %.4f secs" % (collector.__class__.__name__, elapsed_time))

        elapsed_time_total = time.perf_counter() - start_time_total
        logging.debug("Sample completed in %.4f secs" % elapsed_time_total)

    def startSampling(self):
        self.__scheduler.start()

    def stopSampling(self, timeout=None):
        self.__scheduler.stop(timeout)

    def isSampling(self):
        return self.__scheduler.is_running()

    def exposition(self):
        return self.registry.generate()
