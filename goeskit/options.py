"""Command line options of the EMWIN, LRIT and packet relay tools."""

from __future__ import annotations

import enum
import getopt
import re
import sys
from dataclasses import dataclass, field
from importlib import metadata
from typing import Sequence

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

_EMWIN_USAGE = """\
Usage: {prog} [OPTIONS] [FILE...]
Extract EMWIN data from packet stream.

Options:
      --subscribe ADDR  Address of nanomsg publisher
      --mode MODE       One of raw, qbt, or emwin (default: raw)
      --out DIR         Output directory

Other:
      --help     Display this help and exit
      --version  Print version information and exit

If a nanomsg address to subscribe to is specified,
FILE arguments are not used.
"""

_LRIT_USAGE = """\
Usage: {prog} [OPTIONS] [FILE...]
Assemble LRIT files from packet stream.

Options:
      --subscribe ADDR  Address of nanomsg publisher
  -n, --dry-run         Don't write files
      --out DIR         Output directory

Filtering:
      --all             Include everything
      --images          Include image files
      --messages        Include message files
      --text            Include text files
      --dcs             Include DCS files
      --emwin           Include EMWIN files
      --vcid VCID       Process only specified VCIDs

Other:
      --help     Display this help and exit
      --version  Print version information and exit

If a nanomsg address to subscribe to is specified,
FILE arguments are not used.
"""

_PACKETS_USAGE = """\
Usage: {prog} [OPTIONS] [FILE...]
Relay and/or record packet stream.

Options:
      --subscribe ADDR    Address to subscribe to
      --publish ADDR      Address to re-publish packets to
      --vcid VCID         Virtual Channel ID to filter
                          (can be specified multiple times)

Record packet stream:
      --record            Enable recording of packet stream to disk
      --filename PATTERN  Filename pattern for packet files (see strftime(3))
                          (default: ./packets-%FT%H:%M:00.raw)

Other:
      --help     Display this help and exit
      --version  Print version information and exit

If an address to subscribe to is specified,
FILE arguments are ignored.
"""


class Mode(enum.Enum):
    """What the EMWIN tool writes out."""

    RAW = "raw"
    QBT = "qbt"
    EMWIN = "emwin"


@dataclass
class EmwinOptions:
    nanomsg: str = ""
    files: list[str] = field(default_factory=list)
    mode: Mode = Mode.RAW
    out: str = "."


@dataclass
class LritOptions:
    nanomsg: str = ""
    files: list[str] = field(default_factory=list)
    vcids: set[int] = field(default_factory=set)
    dryrun: bool = False
    out: str = "."
    images: bool = False
    messages: bool = False
    text: bool = False
    dcs: bool = False
    emwin: bool = False


@dataclass
class PacketsOptions:
    subscribe: str = ""
    publish: list[str] = field(default_factory=list)
    files: list[str] = field(default_factory=list)
    record: bool = False
    filename: str = "./packets-%FT%H:%M:00.raw"
    vcids: set[int] = field(default_factory=set)


def _args(argv: Sequence[str] | None) -> list[str]:
    return list(sys.argv[1:] if argv is None else argv)


def _invalid() -> SystemExit:
    print("Invalid option", file=sys.stderr)
    return SystemExit(1)


def _getopt(argv: list[str], shortopts: str, longopts: list[str]) -> tuple[list, list[str]]:
    try:
        return getopt.gnu_getopt(argv, shortopts, longopts)
    except getopt.GetoptError:
        raise _invalid() from None


def _usage(text: str, prog: str) -> SystemExit:
    sys.stderr.write(text.format(prog=prog) + "\n")
    return SystemExit(0)


def _version(prog: str) -> SystemExit:
    try:
        version = metadata.version("goeskit")
    except metadata.PackageNotFoundError:
        version = "unknown"
    print(f"{prog} {version}")
    return SystemExit(0)


def _stoi(value: str) -> int:
    """Parse a leading integer, rejecting text that has none."""
    match = _LEADING_INT.match(value)
    if match is None:
        raise ValueError(f"invalid integer: {value!r}")
    return int(match.group(1))


def _atoi(value: str) -> int:
    """Parse a leading integer, giving 0 for text that has none."""
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else 0


def parse_emwin_options(argv: Sequence[str] | None = None) -> EmwinOptions:
    """Parse the arguments of the EMWIN extraction tool."""
    prog = "goesemwin"
    opts = EmwinOptions()
    parsed, rest = _getopt(
        _args(argv), "n", ["subscribe=", "mode=", "out=", "help", "version"]
    )
    for name, value in parsed:
        if name == "--subscribe":
            opts.nanomsg = value
        elif name == "--mode":
            try:
                opts.mode = Mode(value)
            except ValueError:
                pass
        elif name == "--out":
            opts.out = value
        elif name == "--help":
            raise _usage(_EMWIN_USAGE, prog)
        elif name == "--version":
            raise _version(prog)
        else:
            raise _invalid()
    opts.files.extend(rest)
    return opts


def parse_lrit_options(argv: Sequence[str] | None = None) -> LritOptions:
    """Parse the arguments of the LRIT file assembler."""
    prog = "goeslrit"
    opts = LritOptions()
    parsed, rest = _getopt(
        _args(argv),
        "n",
        [
            "subscribe=", "dry-run", "out=", "all", "images", "messages",
            "text", "dcs", "emwin", "vcid=", "help", "version",
        ],
    )
    for name, value in parsed:
        if name == "--subscribe":
            opts.nanomsg = value
        elif name in ("-n", "--dry-run"):
            opts.dryrun = True
        elif name == "--out":
            opts.out = value
        elif name == "--all":
            opts.images = opts.messages = opts.text = opts.dcs = opts.emwin = True
        elif name == "--images":
            opts.images = True
        elif name == "--messages":
            opts.messages = True
        elif name == "--text":
            opts.text = True
        elif name == "--dcs":
            opts.dcs = True
        elif name == "--emwin":
            opts.emwin = True
        elif name == "--vcid":
            opts.vcids.add(_stoi(value))
        elif name == "--help":
            raise _usage(_LRIT_USAGE, prog)
        elif name == "--version":
            raise _version(prog)
        else:
            raise _invalid()
    opts.files.extend(rest)
    return opts


def parse_packets_options(argv: Sequence[str] | None = None) -> PacketsOptions:
    """Parse the arguments of the packet relay and recorder."""
    prog = "goespackets"
    opts = PacketsOptions()
    parsed, rest = _getopt(
        _args(argv),
        "",
        ["subscribe=", "vcid=", "publish=", "record", "filename=", "help", "version"],
    )
    for name, value in parsed:
        if name == "--subscribe":
            opts.subscribe = value
        elif name == "--vcid":
            opts.vcids.add(_atoi(value))
        elif name == "--publish":
            opts.publish.append(value)
        elif name == "--record":
            opts.record = True
        elif name == "--filename":
            opts.filename = value
        elif name == "--help":
            raise _usage(_PACKETS_USAGE, prog)
        elif name == "--version":
            raise _version(prog)
        else:
            raise _invalid()
    opts.files.extend(rest)
    return opts