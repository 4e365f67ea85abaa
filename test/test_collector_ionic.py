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

import logging

import pytest
from prometheus_client.parser import text_string_to_metric_families

from ionstat.collector_ionic import IONIC
from ionstat.exceptions import DiscoveryIOError, NoDevicesFound
from ionstat.metric_definitions import MetricDefinition, MetricKind
from ionstat.registry import MetricRegistry

DEFINITIONS = [
    MetricDefinition("lifespan", "NIC lifespan in seconds", MetricKind.GAUGE),
    MetricDefinition("req_rx_cqe_err", "Request RX CQE Errors", MetricKind.COUNTER),
    MetricDefinition("rx_rdma_ucast_pkts", "Received RDMA Unicast Packets", MetricKind.COUNTER),
]


@pytest.fixture
def registry():
    return MetricRegistry()


@pytest.fixture
def collector(ionic_config, registry):
    return IONIC(ionic_config, registry, definitions=DEFINITIONS)


def sample_values(text):
    """Map (sample name, nic) -> value from an exposition payload."""
    values = {}
    for family in text_string_to_metric_families(text):
        for sample in family.samples:
            if "nic" in sample.labels:
                values[(sample.name, sample.labels["nic"])] = sample.value
    return values


class TestIonicCollector:
    def test_register_discovers_devices(self, collector, registry, add_nic):
        add_nic("ionic_1")
        add_nic("ionic_0")
        add_nic("mlx5_0")

        collector.registerMetrics()

        assert [device.name for device in collector.devices] == ["ionic_0", "ionic_1"]
        assert registry.snapshot() == {name: {} for name in ["lifespan", "req_rx_cqe_err", "rx_rdma_ucast_pkts"]}

    def test_register_without_devices(self, collector, add_nic):
        add_nic("mlx5_0")
        with pytest.raises(NoDevicesFound):
            collector.registerMetrics()

    def test_register_without_class_path(self, collector, class_path):
        class_path.rmdir()
        with pytest.raises(DiscoveryIOError):
            collector.registerMetrics()

    def test_gauge_and_counter_over_two_cycles(self, collector, registry, add_nic):
        add_nic("ionic_0", {"lifespan": "42\n", "rx_rdma_ucast_pkts": "10\n"})
        collector.registerMetrics()

        collector.updateMetrics()
        add_nic("ionic_0", {"rx_rdma_ucast_pkts": "15\n"})
        collector.updateMetrics()

        values = sample_values(registry.generate().decode("utf-8"))
        assert values[("lifespan", "ionic_0")] == 42.0
        assert values[("rx_rdma_ucast_pkts_total", "ionic_0")] == 25.0

    def test_counter_accumulates_every_reading(self, collector, registry, add_nic):
        add_nic("ionic_0", {"req_rx_cqe_err": "3"})
        collector.registerMetrics()

        for _ in range(4):
            collector.updateMetrics()

        assert registry.snapshot()["req_rx_cqe_err"] == {"ionic_0": 12.0}

    def test_update_returns_number_applied(self, collector, add_nic):
        add_nic("ionic_0", {"lifespan": "1", "req_rx_cqe_err": "0", "rx_rdma_ucast_pkts": "5"})
        add_nic("ionic_1", {"lifespan": "1"})
        collector.registerMetrics()

        assert collector.updateMetrics() == 4

    def test_missing_file_isolated(self, collector, registry, add_nic):
        add_nic("ionic_0", {"lifespan": "42", "rx_rdma_ucast_pkts": "10"})
        add_nic("ionic_1", {"lifespan": "7", "req_rx_cqe_err": "1", "rx_rdma_ucast_pkts": "2"})
        collector.registerMetrics()

        collector.updateMetrics()

        snapshot = registry.snapshot()
        assert snapshot["lifespan"] == {"ionic_0": 42.0, "ionic_1": 7.0}
        assert snapshot["req_rx_cqe_err"] == {"ionic_1": 1.0}
        assert snapshot["rx_rdma_ucast_pkts"] == {"ionic_0": 10.0, "ionic_1": 2.0}

    def test_parse_error_isolated_to_device(self, collector, registry, add_nic, caplog):
        add_nic("ionic_0", {"lifespan": "42", "req_rx_cqe_err": "garbage", "rx_rdma_ucast_pkts": "10"})
        add_nic("ionic_1", {"lifespan": "7", "req_rx_cqe_err": "1", "rx_rdma_ucast_pkts": "2"})
        collector.registerMetrics()

        collector.updateMetrics()

        snapshot = registry.snapshot()
        assert snapshot["lifespan"] == {"ionic_0": 42.0, "ionic_1": 7.0}
        assert snapshot["req_rx_cqe_err"] == {"ionic_1": 1.0}
        assert snapshot["rx_rdma_ucast_pkts"] == {"ionic_1": 2.0}
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "ionic_0" in errors[0].getMessage()

    def test_negative_counter_isolated_to_device(self, collector, registry, add_nic, caplog):
        add_nic("ionic_0", {"lifespan": "42", "req_rx_cqe_err": "-1", "rx_rdma_ucast_pkts": "10"})
        add_nic("ionic_1", {"rx_rdma_ucast_pkts": "2"})
        collector.registerMetrics()

        collector.updateMetrics()

        snapshot = registry.snapshot()
        assert snapshot["lifespan"] == {"ionic_0": 42.0}
        assert snapshot["req_rx_cqe_err"] == {}
        assert snapshot["rx_rdma_ucast_pkts"] == {"ionic_1": 2.0}
        assert any(r.levelno == logging.ERROR and "ionic_0" in r.getMessage() for r in caplog.records)

    def test_device_without_counters_is_retried(self, collector, registry, add_nic, caplog):
        add_nic("ionic_0", with_counters=False)
        add_nic("ionic_1", {"lifespan": "7"})
        collector.registerMetrics()

        collector.updateMetrics()
        assert registry.snapshot()["lifespan"] == {"ionic_1": 7.0}
        assert any(r.levelno == logging.WARNING and "ionic_0" in r.getMessage() for r in caplog.records)

        add_nic("ionic_0", {"lifespan": "42"})
        collector.updateMetrics()
        assert registry.snapshot()["lifespan"] == {"ionic_0": 42.0, "ionic_1": 7.0}

    def test_absent_reading_keeps_previous_value(self, collector, registry, add_nic, class_path):
        add_nic("ionic_0", {"lifespan": "42", "rx_rdma_ucast_pkts": "10"})
        collector.registerMetrics()
        collector.updateMetrics()

        counters = class_path / "ionic_0" / "ports" / "1" / "hw_counters"
        (counters / "lifespan").unlink()
        (counters / "rx_rdma_ucast_pkts").unlink()
        collector.updateMetrics()

        snapshot = registry.snapshot()
        assert snapshot["lifespan"] == {"ionic_0": 42.0}
        assert snapshot["rx_rdma_ucast_pkts"] == {"ionic_0": 10.0}

    def test_device_set_is_fixed_after_registration(self, collector, registry, add_nic):
        add_nic("ionic_0", {"lifespan": "1"})
        collector.registerMetrics()

        add_nic("ionic_1", {"lifespan": "2"})
        collector.updateMetrics()

        assert registry.snapshot()["lifespan"] == {"ionic_0": 1.0}
