"""Reporting package"""
from .recorder import ResultRecorder
from .test_logger import configure_logging, end_test, log_step, start_test

__all__ = ["ResultRecorder", "configure_logging", "end_test", "log_step", "start_test"]
