#!/usr/bin/env python3
"""
Benchmark suite for terse-json.

Compares payload savings and encode / expand / proxy timings across key
patterns and dataset shapes.
"""

import statistics
from typing import Any, Dict
from terse_json import CompressOptions
from terse_json.profiler import PerformanceProfiler, benchmark_codec


class BenchmarkSuite:
    """Benchmark suite for the terse-json codec."""

    def __init__(self, iterations: int = 20):
        """Initialize the benchmark suite."""
        self.iterations = iterations

    def create_test_dataset(self, size_category: str) -> Any:
        """Create test datasets of different sizes."""
        if size_category == "small":
            return [{"userId": i, "displayName": f"User {i}"} for i in range(20)]
        elif size_category == "medium":
            return [
                {
                    "userId": i,
                    "displayName": f"User {i}",
                    "emailAddress": f"user{i}@example.com",
                    "accountSettings": {"preferredLanguage": "en", "emailNotifications": i % 2 == 0},
                    "recentOrders": [{"orderId": j, "totalAmount": j * 3.5} for j in range(i % 5)],
                }
                for i in range(500)
            ]
        elif size_category == "large":
            return {
                "reportSections": [
                    {
                        "sectionTitle": f"Section {i}",
                        "lineItems": [
                            {"productCode": f"P{j}", "unitPrice": j * 1.25, "quantityOrdered": j % 7}
                            for j in range(200)
                        ],
                    }
                    for i in range(50)
                ]
            }
        else:
            raise ValueError(f"Unknown size category: {size_category}")

    def benchmark_key_patterns(self) -> Dict[str, Any]:
        """Benchmark the built-in key patterns on the medium dataset."""
        print("🔬 Benchmarking Key Patterns...")

        dataset = self.create_test_dataset("medium")
        results = {}
        for pattern in ("alpha", "short", "alphanumeric", "numeric", "prefixed:k"):
            print(f"   Testing {pattern}...")
            report = benchmark_codec(dataset, self.iterations, CompressOptions(key_pattern=pattern))
            results[pattern] = self._row(report)
        return results

    def benchmark_dataset_sizes(self) -> Dict[str, Any]:
        """Benchmark dataset sizes with the default options."""
        print("📊 Benchmarking Dataset Sizes...")

        results = {}
        for category in ("small", "medium", "large"):
            print(f"   Testing {category} dataset...")
            profiler = PerformanceProfiler()
            report = benchmark_codec(self.create_test_dataset(category), self.iterations, profiler=profiler)
            row = self._row(report)
            row["memory_peak_mb"] = max(m.memory_peak_mb for m in profiler.metrics_history)
            results[category] = row
        return results

    def benchmark_nested_handling(self) -> Dict[str, Any]:
        """Benchmark nested handling modes on the large dataset."""
        print("⚙️  Benchmarking Nested Handling...")

        dataset = self.create_test_dataset("large")
        results = {}
        for mode in ("deep", "shallow", "arrays", 1):
            report = benchmark_codec(dataset, self.iterations, CompressOptions(nested_handling=mode))
            results[str(mode)] = self._row(report)
        return results

    def _row(self, report: Dict[str, Any]) -> Dict[str, Any]:
        operations = report["timings"]["operations"]
        return {
            "original_kb": report["sizes"]["original_size"] / 1024,
            "compressed_kb": report["sizes"]["compressed_size"] / 1024,
            "savings_percent": report["sizes"]["savings_percent"],
            "aliases": report["keys_compressed"],
            "encode_ms": operations["encode"]["average_duration"] * 1000,
            "expand_ms": operations["expand"]["average_duration"] * 1000,
            "proxy_ms": operations["proxy"]["average_duration"] * 1000,
        }

    def print_results(self, results: Dict[str, Any], title: str):
        """Print benchmark results in a formatted table."""
        print(f"\n📈 {title}")
        print("=" * 80)

        if not results:
            print("No results available")
            return

        columns = list(next(iter(results.values())).keys())
        print(f"{'name':<14}" + "".join(f"{column:>15}" for column in columns))
        for name, row in results.items():
            cells = "".join(
                f"{value:>15.2f}" if isinstance(value, float) else f"{value:>15}"
                for value in row.values()
            )
            print(f"{name:<14}{cells}")

        savings = [row["savings_percent"] for row in results.values()]
        print(f"\nAverage savings: {statistics.mean(savings):.1f}%")

    def run(self):
        self.print_results(self.benchmark_key_patterns(), "Key Patterns (medium dataset)")
        self.print_results(self.benchmark_dataset_sizes(), "Dataset Sizes")
        self.print_results(self.benchmark_nested_handling(), "Nested Handling (large dataset)")


if __name__ == "__main__":
    BenchmarkSuite().run()
