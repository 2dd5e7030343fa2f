import time


def now() -> float:
    return time.perf_counter()
