"""
Table generation timing, run explicitly:

    pytest tests/benchmarks_depth_stress.py -s
"""

import sys
import os
import time

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from cubesolver.tables import build_tables


def test_table_generation_time():
    start_time = time.time()
    build_tables()
    duration = time.time() - start_time
    print(f"\nTables generated in {duration:.2f}s")
    assert duration < 120.0
