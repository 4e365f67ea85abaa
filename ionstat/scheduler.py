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

"""Periodic sampling thread

Runs a sampling task on a dedicated daemon thread: run the task, then wait
for the interval, forever. The interval is measured from the end of one run
to the start of the next, so runs never overlap.
"""

import logging
import threading

DEFAULT_INTERVAL_SECS = 15.0


class Scheduler:
    def __init__(self, task, interval_secs=DEFAULT_INTERVAL_SECS, name="ionstat sampler"):
        if interval_secs <= 0:
            raise ValueError(f"Sampling interval must be positive (got {interval_secs})")
        self.__task = task
        self.__interval = float(interval_secs)
        self.__name = name
        self.__stop_event = threading.Event()
        self.__thread = None

    @property
    def interval(self):
        return self.__interval

    def start(self):
        if self.is_running():
            return
        self.__stop_event.clear()
        self.__thread = threading.Thread(target=self.run, daemon=True, name=self.__name)
        self.__thread.start()
        logging.info(f"--> initiated background sampling thread (interval: {self.__interval} sec)")

    def stop(self, timeout=None):
        self.__stop_event.set()
        if self.__thread is not None:
            self.__thread.join(timeout)

    def is_running(self):
        return self.__thread is not None and self.__thread.is_alive()

    def run(self):
        while not self.__stop_event.is_set():
            try:
                self.__task()
            except Exception:
                logging.exception("Sampling cycle failed")
            self.__stop_event.wait(self.__interval)
