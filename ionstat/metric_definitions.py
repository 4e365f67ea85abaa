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

# Ionic NIC hardware counter definitions.
#
# Each entry names a file under <device>/ports/1/hw_counters and is exported
# as a metric of the same name, labeled by NIC.
# --

from enum import Enum
from typing import NamedTuple


class MetricKind(Enum):
    GAUGE = "gauge"
    COUNTER = "counter"


class MetricDefinition(NamedTuple):
    name: str
    description: str
    kind: MetricKind


GAUGE = MetricKind.GAUGE
COUNTER = MetricKind.COUNTER

# fmt: off
METRIC_DEFINITIONS = [
    MetricDefinition("lifespan",                  "NIC lifespan in seconds",                          GAUGE),

    # Request RX errors
    MetricDefinition("req_rx_cqe_err",            "Request RX CQE Errors",                            COUNTER),
    MetricDefinition("req_rx_cqe_flush",          "Request RX CQE Flushes",                           COUNTER),
    MetricDefinition("req_rx_dup_response",       "Duplicate RX responses",                           COUNTER),
    MetricDefinition("req_rx_impl_nak_seq_err",   "Request RX NAK sequence errors",                   COUNTER),
    MetricDefinition("req_rx_inval_pkts",         "Invalid RX packets",                               COUNTER),
    MetricDefinition("req_rx_oper_err",           "Request RX operation errors",                      COUNTER),
    MetricDefinition("req_rx_pkt_seq_err",        "Packet sequence errors",                           COUNTER),
    MetricDefinition("req_rx_rmt_acc_err",        "Remote access errors",                             COUNTER),
    MetricDefinition("req_rx_rmt_req_err",        "Remote request errors",                            COUNTER),
    MetricDefinition("req_rx_rnr_retry_err",      "RNR retry errors",                                 COUNTER),

    # Request TX errors
    MetricDefinition("req_tx_loc_acc_err",        "Local TX access errors",                           COUNTER),
    MetricDefinition("req_tx_loc_oper_err",       "Local TX operation errors",                        COUNTER),
    MetricDefinition("req_tx_loc_sgl_inv_err",    "Local TX scatter-gather list invalid errors",      COUNTER),
    MetricDefinition("req_tx_mem_mgmt_err",       "TX memory management errors",                      COUNTER),
    MetricDefinition("req_tx_retry_excd_err",     "TX retries exceeded",                              COUNTER),

    # Response RX errors
    MetricDefinition("resp_rx_cqe_err",           "Response RX CQE Errors",                           COUNTER),
    MetricDefinition("resp_rx_cqe_flush",         "Response RX CQE Flushes",                          COUNTER),
    MetricDefinition("resp_rx_dup_request",       "Duplicate RX requests",                            COUNTER),
    MetricDefinition("resp_rx_inval_request",     "Invalid RX requests",                              COUNTER),
    MetricDefinition("resp_rx_loc_len_err",       "Local length errors",                              COUNTER),
    MetricDefinition("resp_rx_loc_oper_err",      "Local operation errors",                           COUNTER),
    MetricDefinition("resp_rx_outof_atomic",      "Out of atomic resources",                          COUNTER),
    MetricDefinition("resp_rx_outof_buf",         "Out of buffer space",                              COUNTER),
    MetricDefinition("resp_rx_outouf_seq",        "Out of sequence errors",                           COUNTER),
    MetricDefinition("resp_rx_s0_table_err",      "Table errors in RX response",                      COUNTER),

    # Response TX errors
    MetricDefinition("resp_tx_loc_sgl_inv_err",   "Local TX scatter-gather list invalid errors",      COUNTER),
    MetricDefinition("resp_tx_pkt_seq_err",       "Response TX Packet Sequence Errors",               COUNTER),
    MetricDefinition("resp_tx_rmt_acc_err",       "Remote TX access errors",                          COUNTER),
    MetricDefinition("resp_tx_rmt_inval_req_err", "Remote TX invalid request errors",                 COUNTER),
    MetricDefinition("resp_tx_rmt_oper_err",      "Remote TX operation errors",                       COUNTER),
    MetricDefinition("resp_tx_rnr_retry_err",     "Remote TX RNR retry errors",                       COUNTER),

    # Received RDMA traffic
    MetricDefinition("rx_rdma_cnp_pkts",          "Received RDMA Congestion Notification Packets",    COUNTER),
    MetricDefinition("rx_rdma_ecn_pkts",          "Received RDMA ECN Marked Packets",                 COUNTER),
    MetricDefinition("rx_rdma_mcast_bytes",       "Received RDMA Multicast Bytes",                    COUNTER),
    MetricDefinition("rx_rdma_mcast_pkts",        "Received RDMA Multicast Packets",                  COUNTER),
    MetricDefinition("rx_rdma_ucast_bytes",       "Received RDMA Unicast Bytes",                      COUNTER),
    MetricDefinition("rx_rdma_ucast_pkts",        "Received RDMA Unicast Packets",                    COUNTER),

    # Transmitted RDMA traffic
    MetricDefinition("tx_rdma_cnp_pkts",          "Transmitted RDMA Congestion Notification Packets", COUNTER),
    MetricDefinition("tx_rdma_mcast_bytes",       "Transmitted RDMA Multicast Bytes",                 COUNTER),
    MetricDefinition("tx_rdma_mcast_pkts",        "Transmitted RDMA Multicast Packets",               COUNTER),
    MetricDefinition("tx_rdma_ucast_bytes",       "Transmitted RDMA Unicast Bytes",                   COUNTER),
    MetricDefinition("tx_rdma_ucast_pkts",        "Transmitted RDMA Unicast Packets",                 COUNTER),
]
# fmt: on


def check_unique_names(definitions):
    """Raise ValueError if any metric name appears more than once."""
    seen = set()
    for definition in definitions:
        if definition.name in seen:
            raise ValueError(f"Duplicate metric definition: {definition.name}")
        seen.add(definition.name)


check_unique_names(METRIC_DEFINITIONS)
