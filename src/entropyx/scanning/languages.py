"""Language table: extensions, comment syntax and dependency directives.

Adding a language means adding one LanguageConfig to LANGUAGES; detection,
SLOC counting and coupling counting all read from here.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import PurePath


def _csharp_using(line: str) -> bool:
    """
    Namespace ``using`` directives only.

    Accepts ``using Ns;``, ``using static Ns;`` and ``using Alias = Ns;``.
    Rejects ``using (...)`` statements and ``using var x = ...`` or
    ``using Type name = ...`` declarations.
    """
    if not line.startswith("using ") or not line.endswith(";"):
        return False

    inner = line[len("using ") : -1].strip()
    if inner.startswith("(") or inner.startswith("var "):
        return False
    if inner.startswith("static "):
        inner = inner[len("static ") :]

    space = inner.find(" ")
    if space >= 0 and not inner[space + 1 :].startswith("="):
        return False
    return True


def _java_import(line: str) -> bool:
    return line.startswith("import ") and line.endswith(";")


def _js_import(line: str) -> bool:
    return line.startswith("import ") or "require('" in line or 'require("' in line


def _python_import(line: str) -> bool:
    return line.startswith("import ") or line.startswith("from ")


def _c_include(line: str) -> bool:
    return line.startswith("#include")


def _rust_use(line: str) -> bool:
    return line.startswith("use ") or line.startswith("extern crate ")


@dataclass(frozen=True)
class LanguageConfig:
    """What the scanner needs to know about one language."""

    name: str
    extensions: tuple[str, ...]

    # "//" line comments and "/* */" blocks
    c_style_comments: bool = True

    # Extra whole-line comment prefixes (e.g. "#" for Python)
    line_comment_prefixes: tuple[str, ...] = ()

    # Predicate over a stripped line: is it an import/dependency directive?
    is_dependency: Callable[[str], bool] = field(default=lambda line: False, compare=False)


LANGUAGES: tuple[LanguageConfig, ...] = (
    LanguageConfig("Java", (".java",), is_dependency=_java_import),
    LanguageConfig("CSharp", (".cs",), is_dependency=_csharp_using),
    LanguageConfig("C", (".c", ".h"), is_dependency=_c_include),
    LanguageConfig("Cpp", (".cpp", ".cc", ".cxx", ".hpp"), is_dependency=_c_include),
    LanguageConfig("TypeScript", (".ts", ".tsx"), is_dependency=_js_import),
    LanguageConfig("JavaScript", (".js", ".jsx", ".mjs", ".cjs"), is_dependency=_js_import),
    LanguageConfig("Rust", (".rs",), is_dependency=_rust_use),
    LanguageConfig(
        "Python",
        (".py",),
        c_style_comments=False,
        line_comment_prefixes=("#",),
        is_dependency=_python_import,
    ),
)

_BY_EXTENSION: dict[str, LanguageConfig] = {
    ext: lang for lang in LANGUAGES for ext in lang.extensions
}
_BY_NAME: dict[str, LanguageConfig] = {lang.name: lang for lang in LANGUAGES}


def detect_language(path: str) -> str:
    """Language name for a file path, or "" when the extension is unknown."""
    lang = _BY_EXTENSION.get(PurePath(path).suffix.lower())
    return lang.name if lang else ""


def get_language(name: str) -> LanguageConfig | None:
    return _BY_NAME.get(name)


def supported_languages() -> list[str]:
    return [lang.name for lang in LANGUAGES]
