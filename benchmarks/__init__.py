"""
Benchmark suite for jsonvalue parsing and rendering performance.

Compares jsonvalue against standard JSON libraries including:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Measures parsing and rendering speed and parsing memory usage across
different data types.
"""
