"""File I/O utilities for JSON operations."""
import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, Set, Union

import aiofiles

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]
Indent = Union[int, str, None]


def normalize_indent(indent: Any) -> Indent:
    """
    Normalize an indentation option.

    Positive ints and non-empty strings are kept; anything else means
    compact output and is returned as None.
    """
    if isinstance(indent, bool):
        return None
    if isinstance(indent, int):
        return indent if indent > 0 else None
    if isinstance(indent, str) and indent:
        return indent
    return None


def dumps_json(data: Any, indent: Any = None, ensure_ascii: bool = False) -> str:
    """
    Serialize data to JSON text.
    
    Args:
        data: Data to serialize (dict, list, etc.)
        indent: Indentation per nesting level; None or 0 for compact output
        ensure_ascii: Whether to escape non-ASCII characters (default: False)
        
    Returns:
        JSON text
        
    Raises:
        ValueError: If data contains a circular reference or NaN/Infinity
        TypeError: If data contains a value that is not JSON serializable
    """
    indent = normalize_indent(indent)
    separators = (',', ':') if indent is None else (',', ': ')
    return json.dumps(
        data,
        indent=indent,
        separators=separators,
        ensure_ascii=ensure_ascii,
        allow_nan=False,
    )


def loads_json(text: str) -> Any:
    """
    Parse JSON text.

    The NaN, Infinity and -Infinity literals are not JSON and are
    rejected, matching what dumps_json refuses to write.

    Raises:
        json.JSONDecodeError: If text is not valid JSON
    """
    def reject_constant(name: str) -> Any:
        raise json.JSONDecodeError(f"Unexpected token {name}", text, text.find(name))

    return json.loads(text, parse_constant=reject_constant)


def read_file_sync(filepath: PathLike) -> Any:
    """
    Load data from JSON file.
    
    Args:
        filepath: Path to JSON file
        
    Returns:
        Parsed JSON data (dict, list, etc.)
        
    Raises:
        OSError: If the file cannot be read (FileNotFoundError, PermissionError, ...)
        json.JSONDecodeError: If file contains invalid JSON
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        text = f.read()
    data = loads_json(text)
    logger.debug(f"Read JSON from {filepath}")
    return data


def write_file_sync(
    filepath: PathLike,
    data: Any,
    indent: Any = None,
    ensure_ascii: bool = False
) -> None:
    """
    Save data to JSON file, replacing any existing content.
    
    The data is serialized before the file is opened, so a serialization
    failure leaves the file untouched.
    
    Args:
        filepath: Output file path
        data: Data to save (dict, list, etc.)
        indent: JSON indentation level (default: compact)
        ensure_ascii: Whether to ensure ASCII-only output (default: False)
        
    Raises:
        ValueError, TypeError: If data cannot be serialized
        OSError: If the file cannot be written
    """
    try:
        text = dumps_json(data, indent=indent, ensure_ascii=ensure_ascii)
    except (ValueError, TypeError) as e:
        logger.debug(f"Not writing {filepath}: {e}")
        raise
    
    with open(filepath, 'w', encoding='utf-8', newline='') as f:
        f.write(text)
    logger.debug(f"Wrote JSON to {filepath} (indent={normalize_indent(indent)})")


async def read_file_async(filepath: PathLike) -> Any:
    """Asynchronous version of read_file_sync."""
    async with aiofiles.open(filepath, 'r', encoding='utf-8') as f:
        text = await f.read()
    data = loads_json(text)
    logger.debug(f"Read JSON from {filepath}")
    return data


async def write_file_async(
    filepath: PathLike,
    data: Any,
    indent: Any = None,
    ensure_ascii: bool = False
) -> None:
    """Asynchronous version of write_file_sync."""
    try:
        text = dumps_json(data, indent=indent, ensure_ascii=ensure_ascii)
    except (ValueError, TypeError) as e:
        logger.debug(f"Not writing {filepath}: {e}")
        raise
    
    async with aiofiles.open(filepath, 'w', encoding='utf-8', newline='') as f:
        await f.write(text)
    logger.debug(f"Wrote JSON to {filepath} (indent={normalize_indent(indent)})")


# Tasks started by read_file/write_file, held until they finish so the
# loop cannot drop them before the completion handler runs.
_pending_tasks: Set["asyncio.Task[None]"] = set()


class _Completion:
    """Completion handler wrapper that lets only the first outcome through."""

    def __init__(self, callback: Callable[..., Any]):
        if not callable(callback):
            raise TypeError(f"callback must be callable, got {type(callback).__name__}")
        self.callback = callback
        self.called = False

    def __call__(self, *args: Any) -> None:
        if self.called:
            return
        self.called = True
        self.callback(*args)


async def _read_with_callback(filepath: PathLike, completion: _Completion) -> None:
    try:
        data = await read_file_async(filepath)
    except Exception as e:
        completion(e, None)
        return
    completion(None, data)


async def _write_with_callback(
    filepath: PathLike,
    data: Any,
    indent: Any,
    ensure_ascii: bool,
    completion: _Completion
) -> None:
    try:
        await write_file_async(filepath, data, indent=indent, ensure_ascii=ensure_ascii)
    except Exception as e:
        completion(e)
        return
    completion(None)


def _schedule(
    operation: Awaitable[None],
    on_cancel: Callable[[], None]
) -> "asyncio.Task[None]":
    loop = asyncio.get_running_loop()
    task = loop.create_task(operation)
    _pending_tasks.add(task)
    task.add_done_callback(_pending_tasks.discard)

    def deliver_cancel(finished: "asyncio.Task[None]") -> None:
        if finished.cancelled():
            logger.debug("JSON file task cancelled before completion")
            on_cancel()

    task.add_done_callback(deliver_cancel)
    return task


def read_file(
    filepath: PathLike,
    callback: Callable[[Optional[BaseException], Any], Any]
) -> "asyncio.Task[None]":
    """
    Read a JSON file on the running event loop and report the outcome.
    
    callback is invoked exactly once, as callback(None, data) on success
    or callback(error, None) on an I/O or parse failure. If the task is
    cancelled first, error is an asyncio.CancelledError. The task is
    kept alive until it finishes, so the caller does not need to await it.
    
    Args:
        filepath: Path to JSON file
        callback: Completion handler taking (error, data)
        
    Returns:
        The scheduled task; awaiting it waits for the callback to run
        
    Raises:
        TypeError: If callback is not callable
        RuntimeError: If called without a running event loop
    """
    completion = _Completion(callback)
    # Fail before the coroutine is created when no loop is running.
    asyncio.get_running_loop()
    return _schedule(
        _read_with_callback(filepath, completion),
        lambda: completion(asyncio.CancelledError(), None),
    )


def write_file(
    filepath: PathLike,
    data: Any,
    callback: Callable[[Optional[BaseException]], Any],
    *,
    indent: Any = None,
    ensure_ascii: bool = False
) -> "asyncio.Task[None]":
    """
    Write a JSON file on the running event loop and report the outcome.
    
    callback is invoked exactly once, as callback(None) on success or
    callback(error) on a serialization or I/O failure. If the task is
    cancelled first, error is an asyncio.CancelledError. No write is
    attempted when serialization fails.
    
    Args:
        filepath: Output file path
        data: Data to save
        callback: Completion handler taking (error)
        indent: JSON indentation level, keyword only (default: compact)
        ensure_ascii: Whether to ensure ASCII-only output (default: False)
        
    Returns:
        The scheduled task; awaiting it waits for the callback to run
        
    Raises:
        TypeError: If callback is not callable
        RuntimeError: If called without a running event loop
    """
    completion = _Completion(callback)
    # Fail before the coroutine is created when no loop is running.
    asyncio.get_running_loop()
    return _schedule(
        _write_with_callback(filepath, data, indent, ensure_ascii, completion),
        lambda: completion(asyncio.CancelledError()),
    )
