"""
Processing pipeline components.

This module provides the processor classes for the CodeDispatch workflow.
Each processor implements a specific stage of the pipeline.
"""

from .base import Processor
from .discovery_processor import DiscoveryProcessor
from .dispatch_processor import DispatchProcessor

__all__ = [
    "DiscoveryProcessor",
    "DispatchProcessor",
    "Processor",
]
