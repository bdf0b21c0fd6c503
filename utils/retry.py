import time
from typing import Callable, TypeVar
from utils.errors import TransientStoreError


T = TypeVar("T")


def call_with_retry(fn: Callable[[], T], max_retries: int = 0, label: str = "call", sleep: Callable[[float], None] = time.sleep) -> T:
    """Run fn, retrying TransientStoreError with exponential backoff. Other errors propagate at once."""
    if max_retries < 0:
        raise ValueError(f"max_retries cannot be negative, got {max_retries}")
    for attempt in range(max_retries + 1):
        try:
            return fn()
        except TransientStoreError as e:
            if attempt >= max_retries:
                raise
            wait_time = 2 ** attempt
            print(f"    {label} failed (attempt {attempt + 1}/{max_retries + 1}): {e}. Retrying in {wait_time}s...")
            sleep(wait_time)
