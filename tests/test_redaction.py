"""Redaction tests."""

import json
import logging
import pickle

import pytest
from urlroute_core.metrics.collector import MetricsCollector
from urlroute_core.redaction.aggregate import AggregateRedactor
from urlroute_core.redaction.logging import (
    UNRECOGNIZED,
    JSONFormatter,
    RedactingFilter,
)
from urlroute_core.redaction.redactor import (
    ClientRouteRedactor,
    NotApplicable,
    Redacted,
    URLRedactor,
)
from urlroute_core.routing.router import RouteParser


class StubRedactor(URLRedactor):
    """Redactor returning a fixed result and counting calls."""

    def __init__(self, result):
        self.result = result
        self.calls = []

    def redact(self, url):
        self.calls.append(url)
        return self.result


class TestRedactionResult:
    """Test the Redacted/NotApplicable variant."""

    def test_not_applicable_singleton(self):
        """Test NotApplicable is a singleton."""
        assert type(NotApplicable)() is NotApplicable
        assert pickle.loads(pickle.dumps(NotApplicable)) is NotApplicable

    def test_distinguishable_from_unchanged(self):
        """Test redacting to the same string is not NotApplicable."""
        result = Redacted("/home")
        assert result != NotApplicable
        assert result.is_redacted
        assert not NotApplicable.is_redacted
        assert not NotApplicable


class TestClientRouteRedactor:
    """Test client route redaction."""

    def test_redact_parameter_route(self):
        """Test parameter values are replaced."""
        redactor = ClientRouteRedactor(RouteParser.default())
        result = redactor.redact("/feature/123")

        assert result == Redacted("/feature/:id")
        assert "123" not in result.value

    def test_redact_literal_route(self):
        """Test literal routes redact to themselves."""
        redactor = ClientRouteRedactor(RouteParser.default())
        assert redactor.redact("/profile") == Redacted("/profile")

    def test_redact_full_url(self):
        """Test full URLs reduce to the template."""
        redactor = ClientRouteRedactor(RouteParser.default())
        result = redactor.redact("https://example.com/feature/secret-id?token=abc")
        assert result == Redacted("/feature/:id")
        assert "secret-id" not in result.value
        assert "abc" not in result.value

    def test_unknown_url(self):
        """Test unknown URLs are not applicable."""
        redactor = ClientRouteRedactor(RouteParser.default())
        assert redactor.redact("/unknown/path") is NotApplicable

    def test_custom_placeholder(self):
        """Test placeholder formatting."""
        parser = RouteParser(["/users/:user/posts/:post"])
        redactor = ClientRouteRedactor(parser, placeholder="<{name}>")
        assert redactor.redact("/users/ann/posts/9") == Redacted("/users/<user>/posts/<post>")

    def test_fixed_placeholder(self):
        """Test a placeholder without a name field."""
        parser = RouteParser(["/users/:user"])
        redactor = ClientRouteRedactor(parser, placeholder="<redacted>")
        assert redactor.redact("/users/ann") == Redacted("/users/<redacted>")

    def test_invalid_placeholder(self):
        """Test placeholders with unknown fields are rejected."""
        with pytest.raises(ValueError):
            ClientRouteRedactor(RouteParser.default(), placeholder="{other}")

    @pytest.mark.parametrize("placeholder", ["{name[1]}", "{name.upper}", "{}", "{0}", "{name"])
    def test_placeholder_only_bare_name(self, placeholder):
        """Test indexed, attribute and positional fields fail at construction."""
        with pytest.raises(ValueError):
            ClientRouteRedactor(RouteParser.default(), placeholder=placeholder)

    def test_placeholder_not_a_string(self):
        """Test a non-string placeholder is a ValueError."""
        with pytest.raises(ValueError):
            ClientRouteRedactor(RouteParser.default(), placeholder=5)

    def test_placeholder_format_spec_allowed(self):
        """Test literal text and format specs around {name} still work."""
        redactor = ClientRouteRedactor(RouteParser.default(), placeholder="<{name}>")
        assert redactor.redact("/feature/9") == Redacted("/feature/<id>")
        redactor = ClientRouteRedactor(RouteParser.default(), placeholder="{{{name:>3}}}")
        assert redactor.redact("/feature/9") == Redacted("/feature/{ id}")

    def test_parses_once(self):
        """Test one redact call is one parse."""
        metrics = MetricsCollector()
        redactor = ClientRouteRedactor(RouteParser.default(metrics=metrics))

        redactor.redact("/feature/1")
        redactor.redact("/nope")

        assert metrics.parses.get({"result": "hit"}) == 1
        assert metrics.parses.get({"result": "miss"}) == 1

    def test_no_capability_probe(self):
        """Test redact is the only entry point."""
        assert not hasattr(ClientRouteRedactor, "is_capable_of_redacting")


class TestAggregateRedactor:
    """Test aggregate redaction."""

    def test_first_redacted_wins(self):
        """Test short-circuit on the first Redacted result."""
        first = StubRedactor(NotApplicable)
        second = StubRedactor(Redacted("/second"))
        third = StubRedactor(Redacted("/third"))
        aggregate = AggregateRedactor([first, second, third])

        assert aggregate.redact("/x") == Redacted("/second")
        assert first.calls == ["/x"]
        assert second.calls == ["/x"]
        assert third.calls == []

    def test_all_not_applicable(self):
        """Test NotApplicable when every member declines."""
        members = [StubRedactor(NotApplicable), StubRedactor(NotApplicable)]
        aggregate = AggregateRedactor(members)

        assert aggregate.redact("/x") is NotApplicable
        assert [m.calls for m in members] == [["/x"], ["/x"]]

    def test_empty_aggregate(self):
        """Test an empty aggregate is never applicable."""
        assert AggregateRedactor([]).redact("/home") is NotApplicable

    def test_with_client_route_redactor(self):
        """Test aggregate over a client route redactor."""
        aggregate = AggregateRedactor([ClientRouteRedactor(RouteParser.default())])
        assert aggregate.redact("/feature/456") == Redacted("/feature/:id")
        assert aggregate.redact("/unknown") is NotApplicable

    def test_precedence_is_list_order(self):
        """Test member order decides which redaction is used."""
        narrow = ClientRouteRedactor(RouteParser(["/feature/:id"]))
        broad = ClientRouteRedactor(RouteParser(["/:section/:id"]))

        assert AggregateRedactor([narrow, broad]).redact("/feature/1") == Redacted("/feature/:id")
        assert AggregateRedactor([broad, narrow]).redact("/feature/1") == Redacted("/:section/:id")

    def test_outcomes_counted(self):
        """Test aggregate outcomes are counted."""
        metrics = MetricsCollector()
        aggregate = AggregateRedactor(
            [ClientRouteRedactor(RouteParser.default())], metrics=metrics
        )
        aggregate.redact("/home")
        aggregate.redact("/nope")

        labels = {"redactor": "aggregate"}
        assert metrics.redactions.get({"result": "redacted", **labels}) == 1
        assert metrics.redactions.get({"result": "not_applicable", **labels}) == 1


class TestRedactingFilter:
    """Test the redacting log filter."""

    def _record(self, **extra):
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "tap", None, None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_redacts_url_attribute(self):
        """Test known URLs are replaced by their redacted form."""
        log_filter = RedactingFilter(ClientRouteRedactor(RouteParser.default()))
        record = self._record(url="/feature/123")

        assert log_filter.filter(record) is True
        assert record.url == "/feature/:id"

    def test_unrecognized_url(self):
        """Test unknown URLs are masked entirely."""
        log_filter = RedactingFilter(ClientRouteRedactor(RouteParser.default()))
        record = self._record(url="/account/555-1234")

        log_filter.filter(record)
        assert record.url == UNRECOGNIZED

    def test_record_without_url(self):
        """Test records without a url pass untouched."""
        log_filter = RedactingFilter(ClientRouteRedactor(RouteParser.default()))
        record = self._record()

        assert log_filter.filter(record) is True
        assert not hasattr(record, "url")

    def test_logger_integration(self, caplog):
        """Test the filter on a real logger."""
        logger = logging.getLogger("urlroute.test.analytics")
        log_filter = RedactingFilter(ClientRouteRedactor(RouteParser.default()))
        logger.addFilter(log_filter)
        try:
            with caplog.at_level(logging.INFO, logger="urlroute.test.analytics"):
                logger.info("tap", extra={"url": "/feature/987"})
        finally:
            logger.removeFilter(log_filter)

        assert caplog.records[0].url == "/feature/:id"

    def test_json_formatter(self):
        """Test JSON output includes the redacted url."""
        record = self._record(url="/feature/:id")
        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "tap"
        assert data["url"] == "/feature/:id"
        assert data["level"] == "INFO"
