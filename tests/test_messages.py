"""
Tests for message rendering.

Run with: pytest tests/test_messages.py -v
"""
from datetime import date, time, timedelta

import pytest

from app.services.delivery.messages import (
    default_message,
    format_countdown,
    format_cutoff,
    format_date,
    render,
    render_or_default,
)
from app.services.delivery.types import DateFormat


class TestRender:

    def test_substitutes_known_placeholders(self):
        message = render("Arrives {minDate} - {maxDate}", {"minDate": "Mar 13", "maxDate": "Mar 14"})
        assert message == "Arrives Mar 13 - Mar 14"

    def test_repeated_placeholder_replaced_everywhere(self):
        assert render("{eta_min} or {eta_min}", {"eta_min": 2}) == "2 or 2"

    def test_unknown_placeholder_left_verbatim(self):
        assert render("Ships via {courier} in {minDays}", {"minDays": 3}) == "Ships via {courier} in 3"

    def test_none_value_left_verbatim(self):
        assert render("By {courier}", {"courier": None}) == "By {courier}"

    @pytest.mark.parametrize("variables", [{}, {"minDate": "Mar 1", "maxDays": 4}])
    def test_template_without_placeholders_unchanged(self, variables):
        assert render("Fast shipping on all orders!", variables) == "Fast shipping on all orders!"


class TestDefaultMessage:

    def test_range(self):
        assert default_message(2, 5) == "Delivery in 2-5 business days"

    def test_single_day(self):
        assert default_message(1, 1) == "Delivery in 1 business day"

    def test_same_day_rule(self):
        assert default_message(0, 0) == "Delivery in 0 business day"

    @pytest.mark.parametrize("template", [None, "", "   "])
    def test_blank_template_falls_back(self, template):
        assert render_or_default(template, {"minDays": 9}, 2, 3) == "Delivery in 2-3 business days"


class TestFormatting:

    def test_short_date(self):
        assert format_date(date(2025, 3, 4)) == "Mar 4"

    def test_long_date(self):
        assert format_date(date(2025, 3, 14), DateFormat.LONG) == "Mar 14, 2025"

    @pytest.mark.parametrize("cutoff,label", [
        (time(14, 0), "2:00 PM"),
        (time(0, 5), "12:05 AM"),
        (time(12, 30), "12:30 PM"),
        (time(9, 0), "9:00 AM"),
    ])
    def test_cutoff_label(self, cutoff, label):
        assert format_cutoff(cutoff) == label

    def test_countdown(self):
        assert format_countdown(timedelta(hours=4, minutes=5, seconds=30)) == "4h 5m"
        assert format_countdown(None) == "tomorrow"
