# armlab

A small toolkit for exploring how programs are scanned, parsed, evaluated
and executed at the machine level.

## Modules

- `armlab.scan`: three scanners that each return a list of `Token`s ending
  with an EOT token.
  - `scan_symbols(text)` accepts only `+ - * /`.
  - `scan_arithmetic(text)` accepts integer literals and `+ - * /`,
    skipping blanks and tabs.
  - `scan(text)` is the ntlang scanner: integer literals, `+` and `-`,
    skipping blanks and tabs.

  An unknown character raises `ScanError`. `format_token` and
  `format_tokens` render tokens as `TK_NAME("value")`. `TokenStream` is a
  cursor over tokens with `get(offset)` and `accept(kind)`; accepting
  `TokenKind.ANY` always advances.
- `armlab.parse`: a recursive-descent parser for ntlang:

  ```
  program    ::= expression EOT
  expression ::= operand (operator operand)*
  operand    ::= intlit | '-' operand
  operator   ::= '+' | '-'
  ```

  `parse(text)` and `parse_program(stream)` build trees of `IntVal`,
  `UnaryOp` and `BinaryOp` nodes and raise `ParseError` on bad input.
  `format_tree(node)` renders a tree one node per line, indented with dots.
- `armlab.ntlang`: `evaluate(node)` computes a tree's value with unsigned
  32-bit wrap-around arithmetic (raising `EvalError` for an operator it
  cannot evaluate), `format_value` prints it as a signed integer, and
  `run(text)` scans, parses and evaluates in one call. `main` is the
  `ntlang` command.
- `armlab.armemu`: an emulator over a word-addressed `Memory`. `ArmState`
  holds sixteen registers, the status register and a stack, and runs from
  an entry address until the program counter becomes zero. `emulate(memory,
  entry, *args)` passes up to four arguments in r0–r3 and returns r0 as a
  signed integer. An unknown instruction raises `InvalidInstruction`.
- `armlab.cache`: `DirectMappedCache(size)` counts requests, hits, cold
  misses and hot misses; `report()` summarises them with hit and miss
  ratios, cache usage and an approximate fetch time. `PassThroughCache`
  forwards every fetch to memory. Either can be given to `ArmState`.
- `armlab.analyze`: `decode_fields(iw)` splits an instruction word into its
  data-processing fields, `classify(iw)` names its class (data processing,
  memory, branch, multiply, bx), and `analyze_code(words)` counts classes up
  to the end marker `0xE2800000` (`add r0, r0, #0`), returning an
  `Analysis` whose `report(name)` renders the counts.
- `armlab.routines`: small routines with 32-bit signed int arithmetic, such
  as `add4`, `quadratic`, `max3`, `fact`, `fib_rec`, `fib_iter`,
  `find_max`, `sum_array`, `stolower`, `substr`, `matches`, `merge`,
  `merge_sort`, `smult` and `format_array`. Routines over sequences return
  new lists.
- `armlab.bits`: `uint32_to_binstr(value)` renders a value as `0b` and 32
  binary digits.

Diagnostic output from the emulator, cache and analyser goes through the
standard `logging` module; enable the `DEBUG` level to see it.

## Installing

```
pip install .
```

## The ntlang command

```
ntlang "1 + 2 - -3"
```

This prints the scanned tokens, the parse tree and the value of the
expression. A wrong number of arguments, or a scan or parse error, prints a
message and exits with status 255.

## Using the library

```python
from armlab.parse import parse, format_tree
from armlab.ntlang import evaluate

tree = parse("10 - 4 + 1")
print(format_tree(tree))
print(evaluate(tree))   # 7
```

Running machine code in the emulator:

```python
from armlab.armemu import Memory, emulate

memory = Memory()
# add r0, r0, r1 ; bx lr
memory.load_words(0x1000, [0xE0800001, 0xE12FFF1E])
print(emulate(memory, 0x1000, 1, 2))   # 3
```

With a cache:

```python
from armlab.armemu import ArmState
from armlab.cache import DirectMappedCache

cache = DirectMappedCache(8)
state = ArmState(memory, 0x1000, [1, 2], cache)
state.run()
print(cache.report())
```

## What it does not do

- The emulator executes only `add` and `bx`; any other instruction raises
  `InvalidInstruction`. There is no assembler: code is loaded as raw
  32-bit words.
- Only the direct-mapped cache keeps statistics; there is no
  set-associative cache.
- The `ntlang` command is the only command; the other modules are used as
  a library.

## Running the tests

```
pip install ".[test]"
pytest
```