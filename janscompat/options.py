"""Command-line option parsing with short, long and long-only styles.

``argv[0]`` is taken to be the program name and is never parsed. With
permutation enabled, non-option arguments are moved behind the options
as parsing proceeds, so that :attr:`OptionParser.remaining` holds every
operand once parsing is over.
"""

from __future__ import annotations

import enum
import os
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any

INORDER = 1
"""Option value reported for an operand when the option string starts with '-'."""


class ArgumentKind(enum.Enum):
    """Whether a long option takes an argument."""

    NO = 0
    REQUIRED = 1
    OPTIONAL = 2


@dataclass(frozen=True)
class LongOption:
    """A long option; ``val`` is what is reported for it (its name by default)."""

    name: str
    has_arg: ArgumentKind = ArgumentKind.NO
    val: Any = None

    @property
    def value(self) -> Any:
        return self.name if self.val is None else self.val


class OptionError(ValueError):
    """Raised for an unknown option, a missing argument or a bad long option.

    ``code`` is ``':'`` for a missing or unwanted argument when the option
    string starts with ``':'``, and ``'?'`` otherwise. ``optopt`` is the
    offending option character or long option value, or 0 when unknown.
    """

    def __init__(self, message: str, code: str, optopt: Any) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.optopt = optopt


class OptionParser:
    """Iterate over the options in ``argv``, yielding ``(option, argument)``.

    ``option`` is the option character for short options, the long
    option's value for long ones, or :data:`INORDER` for operands when
    the option string starts with ``'-'``. ``argument`` is None when the
    option has none. An :class:`OptionError` leaves the parser usable:
    calling ``next`` again resumes after the offending option.
    """

    def __init__(
        self,
        argv: Sequence[str],
        options: str,
        long_options: Sequence[LongOption] | None = None,
        long_only: bool = False,
        permute: bool = True,
    ) -> None:
        self.argv: list[str] = list(argv)
        self.optind = 1
        self.optopt: Any = "?"
        self.long_index: int | None = None
        self._long_options = None if long_options is None else list(long_options)
        self._long_only = long_only
        self._permute = permute
        self._all_args = False
        if "POSIXLY_CORRECT" in os.environ or options.startswith("+"):
            self._permute = False
        elif options.startswith("-"):
            self._all_args = True
        if options[:1] in ("+", "-"):
            options = options[1:]
        self._options = options
        self._arg = ""
        self._pos = 0
        self._nonopt_start = -1
        self._nonopt_end = -1

    @property
    def remaining(self) -> list[str]:
        """Arguments not consumed as options or option arguments."""
        return self.argv[self.optind:]

    def __iter__(self) -> Iterator[tuple[Any, str | None]]:
        return self

    def __next__(self) -> tuple[Any, str | None]:
        result = self._step()
        if result is None:
            raise StopIteration
        return result

    # internal helpers

    @property
    def _place(self) -> str:
        return self._arg[self._pos:]

    def _clear_place(self) -> None:
        self._arg = ""
        self._pos = 0

    def _badarg(self) -> str:
        return ":" if self._options.startswith(":") else "?"

    def _fail(self, code: str, message: str, optopt: Any) -> None:
        self.optopt = optopt
        raise OptionError(message, code, optopt)

    def _permute_args(self, start: int, end: int, opt_end: int) -> None:
        argv = self.argv
        argv[start:opt_end] = argv[end:opt_end] + argv[start:end]

    def _finish_permutation(self) -> None:
        if self._nonopt_end != -1:
            self._permute_args(self._nonopt_start, self._nonopt_end, self.optind)
            self.optind -= self._nonopt_end - self._nonopt_start
        self._nonopt_start = self._nonopt_end = -1

    def _step(self) -> tuple[Any, str | None] | None:
        options = self._options
        argv = self.argv

        while not self._place:
            if self.optind >= len(argv):
                self._clear_place()
                if self._nonopt_end != -1:
                    self._finish_permutation()
                elif self._nonopt_start != -1:
                    self.optind = self._nonopt_start
                self._nonopt_start = self._nonopt_end = -1
                return None
            arg = argv[self.optind]
            self._arg, self._pos = arg, 0
            if not arg.startswith("-") or (arg == "-" and "-" not in options):
                self._clear_place()
                if self._all_args:
                    operand = argv[self.optind]
                    self.optind += 1
                    return INORDER, operand
                if not self._permute:
                    return None
                if self._nonopt_start == -1:
                    self._nonopt_start = self.optind
                elif self._nonopt_end != -1:
                    self._permute_args(self._nonopt_start, self._nonopt_end, self.optind)
                    self._nonopt_start = self.optind - (
                        self._nonopt_end - self._nonopt_start
                    )
                    self._nonopt_end = -1
                self.optind += 1
                continue
            if self._nonopt_start != -1 and self._nonopt_end == -1:
                self._nonopt_end = self.optind
            if len(arg) > 1:
                self._pos = 1
                if arg == "--":
                    self.optind += 1
                    self._clear_place()
                    self._finish_permutation()
                    return None
            break

        place = self._place
        if (
            self._long_options is not None
            and self._pos != 0
            and (place[0] == "-" or self._long_only)
        ):
            short_too = False
            if place[0] == "-":
                self._pos += 1
            elif place[0] != ":" and place[0] in options:
                short_too = True
            try:
                result = self._parse_long(short_too)
            except OptionError:
                self._clear_place()
                raise
            if result is not None:
                self._clear_place()
                return result
            place = self._place

        optchar = place[0]
        self._pos += 1
        rest = self._place
        if optchar == ":" or (optchar == "-" and rest) or optchar not in options:
            if optchar == "-" and not rest:
                return None
            if not rest:
                self.optind += 1
            self._fail("?", f"unknown option -- {optchar}", optchar)
        oli = options.index(optchar)
        following = options[oli + 1:oli + 2]

        if self._long_options is not None and optchar == "W" and following == ";":
            if not rest:
                self.optind += 1
                if self.optind >= len(argv):
                    self._clear_place()
                    self._fail(
                        self._badarg(),
                        f"option requires an argument -- {optchar}",
                        optchar,
                    )
                self._arg, self._pos = argv[self.optind], 0
            try:
                return self._parse_long(False)
            finally:
                self._clear_place()

        optarg = None
        if following != ":":
            if not rest:
                self.optind += 1
        else:
            if rest:
                optarg = rest
            elif options[oli + 2:oli + 3] != ":":
                self.optind += 1
                if self.optind >= len(argv):
                    self._clear_place()
                    self._fail(
                        self._badarg(),
                        f"option requires an argument -- {optchar}",
                        optchar,
                    )
                optarg = argv[self.optind]
            self._clear_place()
            self.optind += 1
        return optchar, optarg

    def _parse_long(self, short_too: bool) -> tuple[Any, str | None] | None:
        """Match the current text against the long options.

        Returns None when ``short_too`` is set and nothing matches.
        """
        long_options = self._long_options or []
        current = self._place
        self.optind += 1

        if "=" in current:
            name, has_equal = current.split("=", 1)
        else:
            name, has_equal = current, None

        match: int | None = None
        for index, option in enumerate(long_options):
            if not option.name.startswith(name):
                continue
            if len(option.name) == len(name):
                match = index
                break
            if short_too and len(name) == 1:
                continue
            if match is None:
                match = index
            else:
                self._fail("?", f"ambiguous option -- {name}", 0)

        if match is None:
            if short_too:
                self.optind -= 1
                return None
            self._fail("?", f"unknown option -- {current}", 0)

        option = long_options[match]
        if option.has_arg is ArgumentKind.NO and has_equal is not None:
            self._fail(
                self._badarg(), f"option doesn't take an argument -- {name}", option.value
            )
        optarg = None
        if option.has_arg in (ArgumentKind.REQUIRED, ArgumentKind.OPTIONAL):
            if has_equal is not None:
                optarg = has_equal
            elif option.has_arg is ArgumentKind.REQUIRED:
                if self.optind < len(self.argv):
                    optarg = self.argv[self.optind]
                self.optind += 1
        if option.has_arg is ArgumentKind.REQUIRED and optarg is None:
            self.optind -= 1
            self._fail(
                self._badarg(), f"option requires an argument -- {current}", option.value
            )
        self.long_index = match
        return option.value, optarg


def getopt(
    argv: Sequence[str], options: str
) -> tuple[list[tuple[Any, str | None]], list[str]]:
    """Parse short options without permutation; return options and operands."""
    parser = OptionParser(argv, options, None, long_only=False, permute=False)
    return list(parser), parser.remaining


def getopt_long(
    argv: Sequence[str], options: str, long_options: Sequence[LongOption]
) -> tuple[list[tuple[Any, str | None]], list[str]]:
    """Parse short and ``--long`` options with permutation."""
    parser = OptionParser(argv, options, long_options, long_only=False, permute=True)
    return list(parser), parser.remaining


def getopt_long_only(
    argv: Sequence[str], options: str, long_options: Sequence[LongOption]
) -> tuple[list[tuple[Any, str | None]], list[str]]:
    """Like :func:`getopt_long`, but a single '-' may also start a long option."""
    parser = OptionParser(argv, options, long_options, long_only=True, permute=True)
    return list(parser), parser.remaining