# effilog

A set of building blocks for logging: loggers that dispatch to sinks, a
process-wide logger with caller locations, single-threaded task runners with
delayed and repeated tasks, chunked compression, ECDH key agreement with AES
encryption, a growable memory-mapped byte buffer, and a formatter that renders
decoded log records by a pattern.

## Installation

```
pip install .
```

Requires Python 3.10 or later, `zstandard` and `cryptography`.

## Levels, locations and messages (`effilog.common`)

- `LogLevel` – an `IntEnum`: `TRACE`, `DEBUG`, `INFO`, `WARN`, `ERROR`,
  `FATAL`, `OFF` (0 to 6).
- `level_name(level)` – `"Trace"`, `"Debug"`, `"Info"`, `"Warn"`, `"Error"`,
  `"Fatal"` or `"Off"`.
- `SourceLocation(file_name, line, func_name)` – frozen dataclass; the file
  name is cut down to the part after the last `/` (or, failing that, `\`).
- `LogMsg(level, message, location)` – frozen dataclass handed to sinks.

## Loggers and sinks

```python
from effilog.common import LogLevel
from effilog.logger import VariadicLogger, set_logger, log_info, log_debug
from effilog.sinks import ConsoleSink

logger = VariadicLogger(ConsoleSink())
set_logger(logger)
log_info("hello {}", "world")   # written
log_debug("not shown")          # below the default level INFO

logger.level = LogLevel.TRACE
log_debug("now shown")
```

- `Logger(sinks, level=LogLevel.INFO)` takes one `Sink` or an iterable of
  them. `Logger.log(level, location, message)` passes a `LogMsg` to every sink
  when `level` is at or above `logger.level` and there is at least one sink.
  `Logger.flush()` flushes every sink.
- `VariadicLogger.log(location, level, fmt, *args, **kwargs)` builds the
  message with `fmt.format(*args, **kwargs)`; formatting is skipped for
  messages below the level.
- `set_logger(logger)` / `get_logger()` hold the process-wide
  `VariadicLogger`. `log_trace`, `log_debug`, `log_info`, `log_warn`,
  `log_error` and `log_critical` (which logs at `FATAL`) log through it with
  the caller's file, line and function; they do nothing when no logger is set.
- `effilog.sinks.Sink` is the abstract sink (`log`, `set_formatter`, and a
  `flush` that does nothing by default). `ConsoleSink(stream=None)` writes to
  the given stream, or standard output, two lines per message:
  `ConsoleSink Log` and then `format:` followed by the formatted message.
- `effilog.formatters.DefaultFormatter(clock=None)` renders
  `[YYYY-mm-dd HH:MM:SS] [Level] [file:line] [PID:<pid> TID:<tid>] message`,
  taking the time from `clock()` (default `datetime.now`) at formatting time.
  `Formatter` is its abstract base.

## Tasks

- `effilog.thread_queue.ThreadQueue` – thread-safe FIFO. `push`, blocking
  `wait_pop` (raises `QueueStopped` once `stop_wait()` has been called),
  `try_pop` (raises `queue.Empty` when empty) and `empty`.
- `effilog.thread_pool.ThreadPool(thread_count)` – `start()`, `stop()`,
  `run_task(func, *args, **kwargs)` (silently dropped when the pool is not
  running) and `run_ret_task(...)`, which returns a
  `concurrent.futures.Future` and raises `RuntimeError` when the pool is not
  running. Usable as a context manager. Exceptions from tasks are logged via
  the standard `logging` module.
- `effilog.executor.Executor` – single-threaded task runners keyed by integer
  tags:

```python
from effilog.executor import Executor

with Executor() as executor:
    tag = executor.add_task_runner(1)      # a fresh tag if 1 is taken
    executor.post_task(tag, lambda: print("now"))
    executor.post_delayed_task(tag, lambda: print("later"), 0.5)
    task_id = executor.post_repeated_task(tag, lambda: print("tick"), 0.1, 3)
    future = executor.post_task_and_get_result(tag, sum, [1, 2, 3])
    print(future.result())                 # 6
```

  Delays are seconds or `datetime.timedelta`. A repeated task runs
  immediately and then after each delay, `repeat_num` times in all, until
  `cancel_repeated_task(task_id)`. An unknown tag raises `KeyError`.
  `shutdown()` stops the timer and every runner.
- `Context.get_instance()` returns one shared `Context`; `get_executor()` and
  `new_task_runner(tag)` reach its executor.

## Compression (`effilog.compress`)

Each call to `compress` returns one flushed chunk of a continuing stream, so
chunks can be decoded as they arrive; a chunk that starts a new stream resets
the decoder.

```python
from effilog.compress import ZstdCompression, ZlibCompression

codec = ZstdCompression()                  # level 5
packed = codec.compress(b"some log line")
assert codec.uncompress(packed) == b"some log line"

zcodec = ZlibCompression()                 # best compression
zcodec.reset_stream()                      # required before compress()
packed = zcodec.compress(b"some log line")
```

`compressed_bound(n)` gives the largest size a chunk of `n` bytes may take
(`n + 10` for zlib). Failures raise `ValueError`; compressing with zlib before
`reset_stream()` raises `RuntimeError`.

## Encryption (`effilog.crypt`)

```python
from effilog.crypt import AESCrypt, gen_ecdh_key, gen_ecdh_shared_secret, binary_key_to_hex

client_private, client_public = gen_ecdh_key()
server_private, server_public = gen_ecdh_key()
shared = gen_ecdh_shared_secret(client_private, server_public)
assert shared == gen_ecdh_shared_secret(server_private, client_public)
print(binary_key_to_hex(client_public))

aes = AESCrypt(shared)
ciphertext = aes.encrypt(b"some log line")
assert aes.decrypt(ciphertext) == b"some log line"
```

- Keys are on P-256: the private key as big-endian scalar bytes, the public
  key as an uncompressed point (65 bytes).
- `binary_key_to_hex` / `hex_key_to_binary` convert to and from lower-case
  hex; invalid hex raises `ValueError`.
- `AESCrypt(key)` uses AES-CBC with PKCS#7 padding; the key must be 16, 24 or
  32 bytes (else `ValueError`). A random IV is made on construction and held
  in `aes.iv`; `generate_iv()` replaces it, and `AESCrypt.generate_key()`
  returns a random 16-byte key.

## Memory-mapped buffer (`effilog.mmapper`)

```python
from effilog.mmapper import MMapper

with MMapper("cache.mmap") as cache:
    cache.push(b"record")
    print(cache.data(), cache.size(), cache.ratio())
    cache.clear()
```

The file begins with an 8-byte header (magic `0xDEADBEEF` and the content
size); an existing file with a valid header is reopened with its content. The
mapping starts at 512 KiB (or the file size, if larger) and grows in whole
pages. `resize(n)` sets the content length, `empty()` tests for no content,
and `close()` flushes and releases the mapping.

## Formatting decoded records (`effilog.decode_formatter`)

`EffectiveMsg` is a dataclass with `level`, `timestamp` (milliseconds), `pid`,
`tid`, `line`, `file_name`, `func_name` and `log_info`.
`DecodeFormatter(pattern=None).format(msg)` returns one line ending in `\n`.
`set_pattern` accepts:

| Placeholder | Field                                    |
|-------------|------------------------------------------|
| `%l`        | level                                    |
| `%D`        | timestamp as local `YYYY-MM-DD HH:MM:SS` |
| `%S`        | timestamp in seconds                     |
| `%M`        | timestamp in milliseconds                |
| `%p`        | process id                               |
| `%t`        | thread id                                |
| `%#`        | line                                     |
| `%F`        | file name                                |
| `%f`        | function name                            |
| `%v`        | log text                                 |

For example `[%l][%D:%S][%p:%t][%F:%f:%#]%v`. An unknown placeholder is kept
as written and a trailing `%` is dropped. Without a pattern (or after an empty
one) `combine_log_msg` gives `[level][timestamp][pid:tid][file:func:line]text`.

## Other helpers

- `effilog.space.Space(count, ratio=1)` – an amount of storage in units of
  `ratio` bytes, with `KILO`, `MEGA`, `GIGA` and `TERA` (powers of 1024).
  `space_cast(space, ratio)` or `Space.cast(ratio)` converts, truncating
  toward zero; spaces compare by total bytes.
- `effilog.sysutil` – `get_process_id`, `get_thread_id`, `get_page_size`,
  `get_file_size(path)` (0 for a missing file) and `local_time(timestamp)`.

## What the package does not do

There is no sink that writes log files: nothing here combines the
memory-mapped buffer, compression and encryption into on-disk log output, and
nothing rotates or removes old log files. There is also no reader for stored
binary records and no command-line decoder; `DecodeFormatter` works on
`EffectiveMsg` objects you construct yourself.

## Running the tests

```
pip install .[test]
pytest
```