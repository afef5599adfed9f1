"""Runner package"""
from .base import BaseRunner
from .flow_runner import FlowRunner
from .orchestrator import SuiteOrchestrator

__all__ = ["BaseRunner", "FlowRunner", "SuiteOrchestrator"]
