"""Tests for entropyx.scanning.languages, sloc and coupling."""

import pytest

from entropyx.scanning.coupling import count_coupling
from entropyx.scanning.languages import detect_language, get_language, supported_languages
from entropyx.scanning.sloc import count_sloc


class TestDetectLanguage:
    @pytest.mark.parametrize(
        "path,language",
        [
            ("Main.java", "Java"),
            ("Program.cs", "CSharp"),
            ("lib.c", "C"),
            ("lib.h", "C"),
            ("engine.cpp", "Cpp"),
            ("engine.cc", "Cpp"),
            ("engine.cxx", "Cpp"),
            ("engine.hpp", "Cpp"),
            ("app.ts", "TypeScript"),
            ("view.tsx", "TypeScript"),
            ("app.js", "JavaScript"),
            ("view.jsx", "JavaScript"),
            ("mod.mjs", "JavaScript"),
            ("mod.cjs", "JavaScript"),
            ("main.rs", "Rust"),
            ("tool.py", "Python"),
            ("src/deep/Main.JAVA", "Java"),
        ],
    )
    def test_known_extensions(self, path, language):
        assert detect_language(path) == language

    def test_unknown_extension(self):
        assert detect_language("README.md") == ""
        assert detect_language("Makefile") == ""

    def test_lookup(self):
        assert get_language("Python").line_comment_prefixes == ("#",)
        assert get_language("Cobol") is None
        assert "Rust" in supported_languages()


class TestCountSloc:
    def test_c_style_comments(self):
        lines = [
            "int a;",
            "// line comment",
            "",
            "/* block starts",
            "still inside",
            "block ends */",
            "int b;",
            "/* one-line block */",
            "int c; // trailing comment",
        ]
        assert count_sloc(lines, "C") == 3

    def test_python_hash_comments(self):
        assert count_sloc(["import os", "# comment", "   ", "x = 1"], "Python") == 2

    def test_python_has_no_block_comments(self):
        assert count_sloc(["/* not a comment", "x = 1"], "Python") == 2

    def test_unknown_language_counts_non_blank(self):
        assert count_sloc(["a", "", "# b"], "") == 2

    def test_empty(self):
        assert count_sloc([], "Java") == 0


class TestCountCoupling:
    def test_csharp_using_directives(self):
        lines = [
            "using System;",
            "using static System.Math;",
            "using Alias = Some.Namespace;",
            "using var stream = Open();",
            "using (var s = Open());",
            "using Stream s = File.Open();",
        ]
        assert count_coupling(lines, "CSharp") == 3

    def test_java_imports(self):
        assert count_coupling(["import java.util.List;", "import static a.B.c;", "important();"], "Java") == 2

    def test_javascript_imports_and_requires(self):
        lines = ["import x from 'y';", "const a = require('a');", 'const b = require("b");', "requireFoo();"]
        assert count_coupling(lines, "JavaScript") == 3

    def test_python_imports(self):
        assert count_coupling(["import os", "from x import y", "    import sys", "x = 1"], "Python") == 3

    def test_c_includes(self):
        assert count_coupling(["#include <stdio.h>", '#include "local.h"', "int x;"], "Cpp") == 2

    def test_rust_use(self):
        assert count_coupling(["use std::io;", "extern crate serde;", "fn main() {}"], "Rust") == 2

    def test_unknown_language(self):
        assert count_coupling(["import os"], "") == 0
