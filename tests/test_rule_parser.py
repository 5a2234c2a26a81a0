"""Tests for alert test classification."""

from topic_alerts.rules import models
from topic_alerts.rules.models import AlertTest
from topic_alerts.rules.parser import parse_test


class TestParseTest:
    def test_star_is_wildcard(self):
        assert parse_test("*").kind is models.TestKind.WILDCARD

    def test_less_than(self):
        test = parse_test("<20")
        assert test.kind is models.TestKind.LESS_THAN
        assert test.threshold == 20.0
        assert test.display == "20"

    def test_greater_than_decimal(self):
        test = parse_test(">80.5")
        assert test.kind is models.TestKind.GREATER_THAN
        assert test.threshold == 80.5
        assert test.display == "80.5"

    def test_negative_threshold(self):
        test = parse_test("<-5")
        assert test.kind is models.TestKind.LESS_THAN
        assert test.threshold == -5.0

    def test_operator_without_number_is_regex(self):
        """'<abc' is not a threshold, but it is a valid pattern."""
        test = parse_test("<abc")
        assert test.kind is models.TestKind.REGEX
        assert test.display == "<abc"

    def test_plain_word_is_regex(self):
        test = parse_test("open")
        assert test.kind is models.TestKind.REGEX
        assert test.pattern.search("OPEN") is not None

    def test_regex_prefers_over_equals(self):
        assert parse_test("^(asleep|offline)$").kind is models.TestKind.REGEX

    def test_invalid_regex_falls_back_to_equals(self):
        """Compilation errors never propagate."""
        test = parse_test("(unclosed")
        assert test.kind is models.TestKind.EQUALS
        assert test.literal == "(unclosed"

    def test_invalid_character_class_is_equals(self):
        assert parse_test("[a-").kind is models.TestKind.EQUALS

    def test_equals_constructor(self):
        test = AlertTest.equals("1.0")
        assert test.kind is models.TestKind.EQUALS
        assert test.display == "1.0"
