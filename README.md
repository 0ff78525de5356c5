# janscompat

A small, dependency-free toolkit built around a JSON value model.

- `janscompat.utf`: strict UTF-8 helpers. `encode(codepoint)` returns the
  bytes for a code point. `check_first(byte)` gives the sequence length that a
  leading byte announces, or 0. `check_full(buffer)` decodes one whole
  multi-byte sequence. `iterate(buffer, pos)` returns `(codepoint, next_pos)`.
  `check_string(data)` tells whether bytes are valid UTF-8. Invalid input
  raises `ValueError`: overlong forms, surrogates and values past U+10FFFF.
- `janscompat.hashtable`: `HashTable`, a chained hash table. It takes
  user-supplied `hash_key` and `cmp_keys` functions and uses prime bucket
  counts. It grows when the load ratio reaches 1. Iteration groups items by
  bucket, and within a bucket the newest item comes first. Iteration
  therefore does not follow insertion order. It offers `set`, `get`,
  `remove` (which raises `KeyError` if the key is absent), `clear`, `keys`,
  `values`, `items`, `iter_from(key)` and `bucket_count()`.
- `janscompat.value`: the JSON value types.
  - `JsonObject`, `JsonArray`, `JsonString`, `JsonInteger` (wrapped to a
    signed 32-bit value) and `JsonReal`.
  - The shared constants `json_true()`, `json_false()` and `json_null()`.
  - `string_nocheck`, `equal`, `number_value` and `hash_key`, the djb2 key
    hash.
  - `copy()` and `deep_copy()` on every value.
  - Invalid operations raise `JsonError`, a subclass of `ValueError`. Bad
    indexes raise `IndexError` and missing keys raise `KeyError`.
- `janscompat.dump`: serialization through `dumps`, `dumpf` and `dump_file`.
  `DumpFlags` (`COMPACT`, `ENSURE_ASCII`, `SORT_KEYS`, `PRESERVE_ORDER`)
  controls the output, combined with `indent(width)`. `encode_string`
  quotes a single string.
- `janscompat.options`: getopt-style command-line parsing.
  - `getopt`, `getopt_long` and `getopt_long_only` each return
    `(options, operands)`.
  - `OptionParser` is an iterator that yields `(option, argument)`.
  - `LongOption` and `ArgumentKind` (`NO`, `REQUIRED`, `OPTIONAL`) describe
    long options.
  - Errors raise `OptionError`.
- `janscompat.timeutil`: `gettimeofday()` returns `(seconds, microseconds)`.
  `local_timezone()` returns a `TimeZone`. `usleep(microseconds)` sleeps.
  `filetime_to_timeval(filetime)` converts 100-ns ticks counted since 1601.

## Installation

```
pip install .
```

## Building and dumping JSON

```python
from janscompat.value import JsonObject, JsonArray, JsonInteger, JsonString, json_true
from janscompat.dump import dumps, DumpFlags, indent

doc = JsonObject()
doc.set("name", JsonString("miner"))
items = JsonArray()
items.append(JsonInteger(1))
items.append(json_true())
doc.set("items", items)

print(dumps(doc, DumpFlags.COMPACT | DumpFlags.PRESERVE_ORDER))
# {"name":"miner","items":[1,true]}

print(dumps(doc, indent(2) | DumpFlags.SORT_KEYS))
# {
#   "items": [
#     1,
#     true
#   ],
#   "name": "miner"
# }
```

Object members are written in the following order:

- Hash-table order when no flag is given.
- Sorted by key with `SORT_KEYS`.
- Insertion order with `PRESERVE_ORDER`.

Only objects and arrays can be dumped at the top level. Anything else raises
`JsonError`, and so does a container that contains itself or a string that is
not valid UTF-8.

## Parsing options

`argv[0]` is taken to be the program name and is never parsed.

```python
from janscompat.options import getopt_long, LongOption, ArgumentKind

long_options = [
    LongOption("url", ArgumentKind.REQUIRED, "o"),
    LongOption("quiet", ArgumentKind.NO, "q"),
]
parsed, operands = getopt_long(
    ["prog", "--url=localhost", "-q", "file"], "o:q", long_options
)
# parsed   == [("o", "localhost"), ("q", None)]
# operands == ["file"]
```

## What the package does not do

The package writes JSON but does not read it. There is no function that
parses JSON text into values. There is no command-line program either.

## Running the tests

```
pip install .[test]
pytest
```