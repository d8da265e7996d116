"""Measure rolling-window read throughput over random data."""

from __future__ import annotations

import argparse
import time

import numpy as np

from windowio import configure_logging, rolling_window


def main() -> None:
    parser = argparse.ArgumentParser(description="Benchmark rolling windows over a random buffer")
    parser.add_argument("--size", type=int, default=10 * 1024, help="Input size in bytes")
    parser.add_argument("--max-window", type=int, default=1024, help="Largest window size to try")
    parser.add_argument("--windows", type=int, default=5, help="Number of window sizes to sample")
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    configure_logging()
    rng = np.random.default_rng(args.seed)
    data = rng.integers(0, 256, size=args.size, dtype=np.uint8).tobytes()

    for window_size in np.linspace(1, args.max_window, num=args.windows, dtype=int):
        reader = rolling_window(data, int(window_size))
        buf = bytearray(int(window_size))
        count = 0
        start = time.perf_counter()
        while reader.readinto(buf):
            count += 1
        elapsed = time.perf_counter() - start
        print(f"size={args.size} window={window_size} windows={count} elapsed={elapsed:.4f}s")


if __name__ == "__main__":
    main()
