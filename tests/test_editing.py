"""Tests for selection unquoting, replacement and import insertion."""

import pytest

from arb_extractor.editing import ensure_import, has_import, replace_range, strip_literal_quotes

L10N_IMPORT = "import 'package:app/generated/l10n.dart';"


class TestStripLiteralQuotes:
    @pytest.mark.parametrize("selected, expected", [
        ("'Hello'", "Hello"),
        ('"Hello"', "Hello"),
        ("  'Hello $name'  ", "Hello $name"),
        ("'''Multi\nline'''", "Multi\nline"),
        ("r'C:\\path'", "C:\\path"),
        ("plain text", "plain text"),
        ("'unbalanced", "'unbalanced"),
    ])
    def test_strip(self, selected, expected):
        assert strip_literal_quotes(selected) == expected


class TestReplaceRange:
    def test_replaces_selection(self):
        source = "Text('Hello');"
        assert replace_range(source, (5, 12), "S.current.hello") == "Text(S.current.hello);"

    def test_out_of_range(self):
        with pytest.raises(ValueError):
            replace_range("abc", (2, 10), "x")


class TestEnsureImport:
    def test_inserted_after_last_import(self):
        source = "import 'package:flutter/material.dart';\n\nvoid main() {}\n"

        updated, offset = ensure_import(source, L10N_IMPORT)

        assert updated == (
            "import 'package:flutter/material.dart';\n"
            + L10N_IMPORT + "\n"
            + "\nvoid main() {}\n"
        )
        assert offset == len("import 'package:flutter/material.dart';\n")

    def test_inserted_at_top_without_imports(self):
        updated, offset = ensure_import("void main() {}\n", L10N_IMPORT)

        assert updated == L10N_IMPORT + "\nvoid main() {}\n"
        assert offset == 0

    def test_last_line_import_without_newline(self):
        updated, _ = ensure_import("import 'a.dart';", L10N_IMPORT)

        assert updated == "import 'a.dart';\n" + L10N_IMPORT + "\n"

    def test_idempotent(self):
        source = 'import "package:app/generated/l10n.dart";\nvoid main() {}\n'

        assert has_import(source, L10N_IMPORT)
        assert ensure_import(source, L10N_IMPORT) == (source, None)

    def test_missing_semicolon_is_added(self):
        updated, _ = ensure_import("", "import 'package:app/l10n.dart'")

        assert updated == "import 'package:app/l10n.dart';\n"

    def test_no_statement_configured(self):
        assert ensure_import("void main() {}", None) == ("void main() {}", None)
        assert ensure_import("void main() {}", "  ") == ("void main() {}", None)
