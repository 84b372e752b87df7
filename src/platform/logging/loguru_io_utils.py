from inspect import getfile, getsourcelines
from os.path import basename
from time import time
from typing import Any, Callable

from src.platform.logging.loguru_io_config import (
    TRUNCATE_LIMIT,
    call_depth_var,
    chain_start_time_var,
)


def get_chain_start_time() -> float:
    if not (start_time := chain_start_time_var.get()):
        start_time = time()
        chain_start_time_var.set(start_time)
    return start_time


def build_call_target_func_path(func: Callable[..., Any]) -> str:
    try:
        lineno = getsourcelines(func)[1]
    except (OSError, TypeError):
        lineno = 0
    return f'{basename(getfile(getattr(func, "__func__", func)))}::{func.__qualname__}:{lineno}'


def enter_call() -> None:
    call_depth_var.set(call_depth_var.get() + 1)


def reset_call_depth() -> None:
    layer = call_depth_var.get() - 1
    call_depth_var.set(layer)
    if not layer:
        chain_start_time_var.set(0)


def truncate_content(data: Any) -> Any:
    text = repr(data)
    if len(text) <= TRUNCATE_LIMIT:
        return data
    return f'{text[:TRUNCATE_LIMIT]}...(+{len(text) - TRUNCATE_LIMIT} chars)'
