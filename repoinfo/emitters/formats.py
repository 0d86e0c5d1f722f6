"""Renderers turning a BuildMetadataRecord into source text.

Every renderer emits the eight constants under their serialized names
(hostName, hostUser, ...) so consumers can rely on one shape regardless of
the target language.
"""

import json
from collections.abc import Callable
from pathlib import Path

from ..models import BuildMetadataRecord

GENERATED_NOTICE = "Generated by repoinfo at build time. Do not edit."

HEADER_SUFFIXES = frozenset({".h", ".hh", ".hpp", ".hxx"})

SUFFIX_FORMATS = {
    ".h": "cpp",
    ".hh": "cpp",
    ".hpp": "cpp",
    ".hxx": "cpp",
    ".cc": "cpp",
    ".cpp": "cpp",
    ".cxx": "cpp",
    ".c": "c",
    ".c2": "c",
    ".py": "python",
    ".json": "json",
}

C_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def c_string(value: str) -> str:
    """Quote ``value`` as a C/C++ string literal."""
    chars = []
    for ch in value:
        if ch in C_ESCAPES:
            chars.append(C_ESCAPES[ch])
        elif ord(ch) < 0x80 and not ch.isprintable():
            # Fixed-width octal; hex escapes would swallow following hex digits
            chars.append(f"\\{ord(ch):03o}")
        else:
            chars.append(ch)
    return '"' + "".join(chars) + '"'


def render_cpp(record: BuildMetadataRecord, output_path: Path) -> str:
    """C++ ``struct RepoInfo`` of static string members.

    Headers use C++17 inline variables so they can be included from several
    translation units. Source files declare the members in the struct and
    define them after it, which any C++ standard accepts.
    """
    constants = record.constants()
    header = output_path.suffix.lower() in HEADER_SUFFIXES
    lines = [f"// {GENERATED_NOTICE}"]
    if header:
        lines += ["// Requires C++17 (inline variables).", "#pragma once"]
    lines += [
        "",
        "#include <string>",
        "",
        "struct RepoInfo {",
    ]
    if header:
        for name, value in constants.items():
            lines.append(f"    static inline const std::string {name} = {c_string(value)};")
        lines += ["};", ""]
    else:
        for name in constants:
            lines.append(f"    static const std::string {name};")
        lines += ["};", ""]
        for name, value in constants.items():
            lines.append(f"const std::string RepoInfo::{name} = {c_string(value)};")
        lines.append("")
    return "\n".join(lines)


def render_c(record: BuildMetadataRecord, output_path: Path) -> str:
    lines = [f"/* {GENERATED_NOTICE} */", ""]
    for name, value in record.constants().items():
        lines.append(f"static const char {name}[] = {c_string(value)};")
    lines.append("")
    return "\n".join(lines)


def render_python(record: BuildMetadataRecord, output_path: Path) -> str:
    lines = [
        f'"""{GENERATED_NOTICE}"""',
        "",
        "from typing import Final",
        "",
        "",
        "class RepoInfo:",
    ]
    for name, value in record.constants().items():
        lines.append(f"    {name}: Final[str] = {value!r}")
    lines.append("")
    return "\n".join(lines)


def render_json(record: BuildMetadataRecord, output_path: Path) -> str:
    return json.dumps(record.constants(), indent=2, ensure_ascii=False) + "\n"


RENDERERS: dict[str, Callable[[BuildMetadataRecord, Path], str]] = {
    "cpp": render_cpp,
    "c": render_c,
    "python": render_python,
    "json": render_json,
}
