from inspect import getfile, getfullargspec, getsourcelines
from os.path import basename
import re
from time import time
from typing import Any, Callable

from src.platform.logging.loguru_io_config import (
    DEPTH_LINE,
    MASK,
    SENSITIVE_KEYWORDS,
    call_depth_var,
    chain_start_time_var,
)


MAX_CONTENT_LENGTH = 1000

# Matches key=value / 'key': 'value' pairs whose key contains a sensitive keyword
_SENSITIVE_PATTERN = re.compile(
    r"""(['"]?\w*(?:%s)\w*['"]?)(\s*[=:]\s*)(['"]?)[^,'")}\s]+(['"]?)"""
    % '|'.join(sorted(SENSITIVE_KEYWORDS)),
    re.IGNORECASE,
)


def get_chain_start_time() -> float:
    if not (start_time := chain_start_time_var.get()):
        start_time = time()
        chain_start_time_var.set(start_time)
    return start_time


def fetch_layer_depth() -> str:
    return DEPTH_LINE * max(call_depth_var.get() - 1, 0)


def build_call_target_func_path(func: Callable[..., Any]) -> str:
    target = getattr(func, '__func__', func)
    try:
        lineno = getsourcelines(target)[1]
    except (OSError, TypeError):
        lineno = 0
    return f'{basename(getfile(target))}::{func.__qualname__}:{lineno}'


def reset_call_depth() -> None:
    layer = call_depth_var.get() - 1
    call_depth_var.set(layer)
    if layer <= 0:
        chain_start_time_var.set(0)


def normalize_args_kwargs(
    func: Callable[..., Any], *args: Any, **kwargs: Any
) -> tuple[tuple[Any, ...], dict[str, Any]]:
    """Drop kwargs the wrapped function cannot accept"""
    spec = getfullargspec(getattr(func, '__wrapped__', func))
    if not spec.varkw:
        accepted = set(spec.args) | set(spec.kwonlyargs)
        kwargs = {k: v for k, v in kwargs.items() if k in accepted}
    if not spec.varargs:
        args = args[: len(spec.args)]
    return args, kwargs


def mask_sensitive(data: Any) -> Any:
    if data is None or isinstance(data, (bool, int, float)):
        return data
    text = str(data)
    masked = _SENSITIVE_PATTERN.sub(lambda m: f'{m.group(1)}{m.group(2)}{m.group(3)}{MASK}{m.group(4)}', text)
    return data if masked == text else masked


def should_mask_keyword(keyword: Any, value: Any) -> Any:
    if isinstance(keyword, str) and any(word in keyword.lower() for word in SENSITIVE_KEYWORDS):
        return MASK
    return value


def truncate_content(data: Any) -> Any:
    if isinstance(data, str) and len(data) > MAX_CONTENT_LENGTH:
        return f'{data[:MAX_CONTENT_LENGTH]}...(+{len(data) - MAX_CONTENT_LENGTH} chars)'
    return data
