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

# Prometheus exporter for ionic NIC hardware counters.
#
# Discovers NICs and registers metrics in the parent process, then serves
# /metrics through gunicorn. Sampling runs on a background thread started in
# the (single) worker after fork so it shares state with request handlers.
# --

import argparse
import logging
import sys

import gunicorn.app.base
from flask import Flask
from prometheus_client import CONTENT_TYPE_LATEST

from ionstat import utils
from ionstat.monitor import Monitor

DEFAULT_PORT = 9102


class IonstatServer(gunicorn.app.base.BaseApplication):
    def __init__(self, app, options=None):
        self.options = options or {}
        self.application = app
        super().__init__()

    def load_config(self):
        config = {key: value for key, value in self.options.items() if key in self.cfg.settings and value is not None}
        for key, value in config.items():
            self.cfg.set(key.lower(), value)

    def load(self):
        return self.application


def create_app(monitor):
    app = Flask("ionstat")

    @app.route("/metrics")
    def metrics():
        return monitor.exposition(), {"Content-Type": CONTENT_TYPE_LATEST}

    return app


def main(argv=None):
    parser = argparse.ArgumentParser(description="Prometheus exporter for ionic NIC hardware counters")
    parser.add_argument("--configfile", type=str, help="runtime config file", default=None)
    parser.add_argument("--port", type=int, help="port to listen on (overrides runtime config)", default=None)
    parser.add_argument("--logfile", type=str, help="log to file instead of stdout", default=None)
    parser.add_argument("--version", action="store_true", help="print version and exit")
    args = parser.parse_args(argv)

    if args.version:
        print(utils.getVersion())
        sys.exit(0)

    config = utils.readConfig(args.configfile)
    monitor = Monitor(config, logFile=args.logfile)
    monitor.initMetrics()

    port = args.port
    if port is None:
        port = config["ionstat.collectors"].getint("port", DEFAULT_PORT)

    def post_fork(server, worker):
        monitor.startSampling()

    app = create_app(monitor)
    options = {
        "bind": f"0.0.0.0:{port}",
        "workers": 1,
        "worker_class": "gthread",
        "threads": 4,
        "post_fork": post_fork,
    }
    logging.info(f"Serving ionic NIC metrics on :{port}")
    IonstatServer(app, options).run()


if __name__ == "__main__":
    main()
