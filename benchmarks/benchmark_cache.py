import time

import numpy as np

import cachematrix


def benchmark_resolve(n, iterations=50):
    print(f"\n--- Benchmarking cached inverse (N={n}) ---")

    a_np = np.random.rand(n, n)
    # Diagonally dominant so the matrix is invertible
    a_np += np.eye(n) * n

    resolver = cachematrix.InverseResolver(trace=cachematrix.CacheTrace(enabled=False))
    cm = cachematrix.CachedMatrix(a_np)

    start = time.perf_counter()
    resolver.resolve(cm)
    miss_time = time.perf_counter() - start
    print(f"Miss (compute): {miss_time:.6f} s")

    start = time.perf_counter()
    for _ in range(iterations):
        resolver.resolve(cm)
    hit_time = (time.perf_counter() - start) / iterations
    print(f"Hit (cached):   {hit_time:.6f} s")

    start = time.perf_counter()
    for _ in range(iterations):
        np.linalg.inv(a_np)
    np_time = (time.perf_counter() - start) / iterations
    print(f"NumPy inv:      {np_time:.6f} s")

    speedup = np_time / hit_time if hit_time > 0 else 0
    print(f"Speedup:        {speedup:.1f}x")
    print(f"Stats:          {resolver.stats()}")


if __name__ == "__main__":
    for n in (10, 100, 500):
        benchmark_resolve(n)
