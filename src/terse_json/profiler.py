"""Performance profiler for codec operations."""

import json
import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import psutil

from .types import DICTIONARY_FIELD, CompressOptions
from .codec import TerseCodec
from .proxy import to_python
from .utils.size_calculator import SizeCalculator


@dataclass
class PerformanceMetrics:
    """Performance metrics for one profiled operation."""
    operation_name: str
    start_time: float
    end_time: float
    duration: float
    input_size: int
    output_size: int
    memory_peak_mb: float
    memory_start_mb: float
    memory_end_mb: float
    cpu_percent: float
    throughput_mbps: float
    size_ratio: float


class PerformanceProfiler:
    """
    Profiler for encode, expand and proxy access timings.

    Measures wall time, resident memory and CPU usage of the current process
    with psutil.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the performance profiler.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.metrics_history: List[PerformanceMetrics] = []
        self.current_operation: Optional[str] = None
        self.start_time: Optional[float] = None
        self.start_memory: Optional[float] = None
        self.peak_memory: float = 0
        self.cpu_samples: List[float] = []
        self.input_size = 0
        self.output_size = 0
        self._process = psutil.Process()

    @contextmanager
    def profile_operation(self, operation_name: str, input_size: int = 0):
        """
        Context manager for profiling operations.

        The body may call ``record_output`` to report the produced size.

        Args:
            operation_name: Name of the operation being profiled
            input_size: Size of input data in bytes
        """
        self.start_profiling(operation_name, input_size)
        try:
            yield self
        finally:
            self.stop_profiling()

    def start_profiling(self, operation_name: str, input_size: int = 0) -> None:
        self.current_operation = operation_name
        self.input_size = input_size
        self.output_size = 0
        self.start_memory = self._rss_mb()
        self.peak_memory = self.start_memory
        self.cpu_samples = []
        # First cpu_percent call only primes the counter.
        self._process.cpu_percent()
        self.start_time = time.perf_counter()

        self.logger.debug(f"Started profiling: {operation_name}")

    def _rss_mb(self) -> float:
        return self._process.memory_info().rss / 1024 / 1024

    def record_output(self, output_size: int) -> None:
        self.output_size = output_size

    def sample_performance(self) -> None:
        """Sample current memory and CPU usage."""
        if not self.current_operation:
            return

        try:
            self.peak_memory = max(self.peak_memory, self._rss_mb())
            self.cpu_samples.append(self._process.cpu_percent())
        except psutil.Error as e:
            self.logger.warning(f"Performance sampling failed: {e}")

    def stop_profiling(self) -> PerformanceMetrics:
        """
        Stop profiling and return metrics.

        Returns:
            PerformanceMetrics object with collected data

        Raises:
            ValueError: If no profiling session is active
        """
        if not self.current_operation or self.start_time is None:
            raise ValueError("No active profiling session")

        end_time = time.perf_counter()
        duration = end_time - self.start_time

        try:
            end_memory = self._rss_mb()
            self.cpu_samples.append(self._process.cpu_percent())
        except psutil.Error:
            end_memory = self.start_memory
        self.peak_memory = max(self.peak_memory, end_memory)
        avg_cpu = sum(self.cpu_samples) / len(self.cpu_samples) if self.cpu_samples else 0.0

        throughput = (self.input_size / 1024 / 1024) / duration if duration > 0 else 0.0
        size_ratio = self.output_size / self.input_size if self.input_size > 0 else 1.0

        metrics = PerformanceMetrics(
            operation_name=self.current_operation,
            start_time=self.start_time,
            end_time=end_time,
            duration=duration,
            input_size=self.input_size,
            output_size=self.output_size,
            memory_peak_mb=self.peak_memory,
            memory_start_mb=self.start_memory,
            memory_end_mb=end_memory,
            cpu_percent=avg_cpu,
            throughput_mbps=throughput,
            size_ratio=size_ratio,
        )
        self.metrics_history.append(metrics)

        self.logger.debug(
            f"{self.current_operation}: {duration * 1000:.3f}ms, "
            f"memory peak {self.peak_memory:.1f} MB"
        )

        self.current_operation = None
        self.start_time = None
        self.start_memory = None

        return metrics

    def get_performance_summary(self) -> Dict[str, Any]:
        """
        Get summary of all recorded metrics, grouped by operation name.

        Returns:
            Dictionary with performance summary
        """
        if not self.metrics_history:
            return {"total_operations": 0}

        operations: Dict[str, Dict[str, Any]] = {}
        for m in self.metrics_history:
            entry = operations.setdefault(m.operation_name, {
                "count": 0, "total_duration": 0.0, "memory_peak_mb": 0.0,
            })
            entry["count"] += 1
            entry["total_duration"] += m.duration
            entry["memory_peak_mb"] = max(entry["memory_peak_mb"], m.memory_peak_mb)

        for entry in operations.values():
            entry["average_duration"] = entry["total_duration"] / entry["count"]

        return {
            "total_operations": len(self.metrics_history),
            "total_duration": sum(m.duration for m in self.metrics_history),
            "operations": operations,
        }

    def export_metrics(self, format: str = "json") -> str:
        """
        Export performance metrics in specified format.

        Args:
            format: Export format ("json", "csv")

        Returns:
            Formatted metrics string
        """
        if format == "json":
            return json.dumps([
                {
                    "operation": m.operation_name,
                    "duration": m.duration,
                    "input_size": m.input_size,
                    "output_size": m.output_size,
                    "memory_peak_mb": m.memory_peak_mb,
                    "cpu_percent": m.cpu_percent,
                    "size_ratio": m.size_ratio,
                }
                for m in self.metrics_history
            ], indent=2)

        elif format == "csv":
            lines = ["operation,duration,input_size,output_size,memory_peak_mb,cpu_percent,size_ratio"]
            for m in self.metrics_history:
                lines.append(f"{m.operation_name},{m.duration},{m.input_size},{m.output_size},"
                             f"{m.memory_peak_mb},{m.cpu_percent},{m.size_ratio}")
            return "\n".join(lines)

        else:
            raise ValueError(f"Unsupported export format: {format}")


def benchmark_codec(data: Any, iterations: int = 10,
                    options: Optional[CompressOptions] = None,
                    profiler: Optional[PerformanceProfiler] = None) -> Dict[str, Any]:
    """
    Measure sizes and timings of the codec on one document.

    Runs ``iterations`` rounds of encode, eager expand and full proxy access
    (materializing the view touches every node).

    Args:
        data: JSON tree to benchmark
        iterations: Rounds per operation
        options: Dictionary construction options
        profiler: Profiler to record into (a new one by default)

    Returns:
        Dictionary with ``sizes`` (from SizeCalculator.compare_sizes),
        ``keys_compressed`` and the profiler summary under ``timings``
    """
    if iterations < 1:
        raise ValueError("iterations must be at least 1")

    profiler = profiler or PerformanceProfiler()
    codec = TerseCodec(options)
    size_calculator = SizeCalculator()

    original_size = size_calculator.calculate_json_size(data)
    envelope = codec.compress(data).to_dict()
    envelope_size = size_calculator.calculate_json_size(envelope)

    for _ in range(iterations):
        with profiler.profile_operation("encode", original_size) as p:
            p.record_output(size_calculator.calculate_json_size(codec.compress(data).to_dict()))
        with profiler.profile_operation("expand", envelope_size) as p:
            codec.expand(envelope)
            p.record_output(original_size)
        with profiler.profile_operation("proxy", envelope_size) as p:
            to_python(codec.wrap(envelope))
            p.record_output(original_size)

    return {
        "sizes": size_calculator.compare_sizes(data, envelope),
        "keys_compressed": len(envelope[DICTIONARY_FIELD]),
        "timings": profiler.get_performance_summary(),
    }
