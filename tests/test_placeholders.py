"""Tests for interpolation to ARB placeholder conversion."""

import re

import pytest

from arb_extractor.core.placeholders import (
    build_replacement,
    derive_placeholder_name,
    detect_and_convert_placeholders,
    find_arb_placeholders,
)


class TestDetectAndConvertPlaceholders:
    """Conversion of Dart interpolations."""

    def test_braced_expression_uses_last_segment(self):
        info = detect_and_convert_placeholders("Order not found ${data.order.code}")

        assert info.arb_text == "Order not found {code}"
        assert info.arb_placeholders == ["code"]
        assert info.original_placeholders == ["data.order.code"]
        assert info.has_placeholders

    def test_bare_identifier(self):
        info = detect_and_convert_placeholders("Hello $name, welcome")

        assert info.arb_text == "Hello {name}, welcome"
        assert info.original_placeholders == ["name"]

    def test_text_without_interpolation_is_unchanged(self):
        info = detect_and_convert_placeholders("Just text")

        assert info.arb_text == "Just text"
        assert info.arb_placeholders == []
        assert not info.has_placeholders

    def test_repeated_expression_reuses_its_name(self):
        info = detect_and_convert_placeholders("Hi ${user.name}, bye ${user.name}")

        assert info.arb_text == "Hi {name}, bye {name}"
        assert info.arb_placeholders == ["name"]
        assert info.original_placeholders == ["user.name"]

    def test_different_expressions_with_same_name_get_distinct_names(self):
        info = detect_and_convert_placeholders("${sender.name} wrote to ${receiver.name}")

        assert info.arb_text == "{name} wrote to {name2}"
        assert info.arb_placeholders == ["name", "name2"]
        assert info.original_placeholders == ["sender.name", "receiver.name"]

    def test_lists_stay_parallel(self):
        info = detect_and_convert_placeholders("$a ${b.c} $a ${d.e!}")

        assert len(info.arb_placeholders) == len(info.original_placeholders)
        assert info.arb_placeholders == ["a", "c", "e"]

    @pytest.mark.parametrize("text", [
        "{name} ${user.name}",
        "${a.name} ${b.name} {name2}",
        "$a ${b.c} $a",
        "Order ${data.order.code} for $customer, total ${items.length + 1}",
    ])
    def test_expressions_fill_every_placeholder(self, text):
        info = detect_and_convert_placeholders(text)
        expressions = dict(zip(info.arb_placeholders, info.original_placeholders))

        replayed = re.sub(
            r'(?<!\$)\{(\w+)\}',
            lambda match: expressions.get(match.group(1), match.group(0)),
            info.arb_text,
        )

        assert re.search(r'(?<!\$)\{\w+\}', replayed) is None

    def test_conversion_is_idempotent(self):
        first = detect_and_convert_placeholders("Order ${data.order.code} for $customer")
        second = detect_and_convert_placeholders(first.arb_text)

        assert second.arb_text == first.arb_text
        assert second.arb_placeholders == first.arb_placeholders
        assert second.original_placeholders == ["code", "customer"]

    def test_malformed_interpolation_passes_through(self):
        info = detect_and_convert_placeholders("Price: ${unclosed")

        assert info.arb_text == "Price: ${unclosed"
        assert info.arb_placeholders == []

    def test_trailing_arithmetic_is_ignored_for_the_name(self):
        info = detect_and_convert_placeholders("Page ${index + 1}")

        assert info.arb_text == "Page {index}"
        assert info.original_placeholders == ["index + 1"]


class TestDerivePlaceholderName:
    def test_null_assertion_is_stripped(self):
        assert derive_placeholder_name("user.name!") == "name"

    def test_method_call_keeps_identifier_characters(self):
        assert derive_placeholder_name("items.length.toString()") == "toString"

    def test_fallback_name(self):
        assert derive_placeholder_name("!") == "variable"


class TestFindArbPlaceholders:
    def test_distinct_names_in_order(self):
        assert find_arb_placeholders("Hi {name}, {count} new, {count} total") == ["name", "count"]

    def test_interpolation_sigil_is_not_a_placeholder(self):
        assert find_arb_placeholders("${name}") == []


class TestBuildReplacement:
    def test_with_arguments(self):
        replacement = build_replacement("S.current", "orderNotFound", ["data.order.code", "user.name"])
        assert replacement == "S.current.orderNotFound(data.order.code, user.name)"

    def test_without_arguments(self):
        assert build_replacement("S.of(context)", "hello", []) == "S.of(context).hello"
