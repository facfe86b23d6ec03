from unittest.mock import MagicMock

import pytest

from cdkrun.executor.state_machine import StateMachineExecutor
from cdkrun.observability import trace_utils
from cdkrun.observability.trace_utils import set_span_attributes, traced_span


def test_set_span_attributes_prefixes_and_skips_none():
    span = MagicMock()

    set_span_attributes(span, execution_arn="arn:exec", polls=3, status=None)

    span.set_attribute.assert_any_call("cdkrun.execution_arn", "arn:exec")
    span.set_attribute.assert_any_call("cdkrun.polls", 3)
    assert span.set_attribute.call_count == 2


def test_set_span_attributes_without_span():
    set_span_attributes(None, execution_arn="arn:exec")


@pytest.mark.asyncio
async def test_traced_span_disabled_yields_none(monkeypatch):
    monkeypatch.setattr(trace_utils, "ENABLE_OTEL", False)

    async with traced_span("cdkrun.test", construct_path="App/Fn") as span:
        assert span is None


@pytest.mark.asyncio
async def test_execute_records_execution_on_span(monkeypatch):
    span = MagicMock()
    tracer = MagicMock()
    tracer.start_as_current_span.return_value.__enter__.return_value = span
    monkeypatch.setattr(trace_utils, "ENABLE_OTEL", True)
    monkeypatch.setattr(trace_utils.trace, "get_tracer", lambda name: tracer)

    client = MagicMock(name="stepfunctions")
    client.start_execution.return_value = {"executionArn": "arn:exec"}
    client.describe_execution.side_effect = [
        {"status": "RUNNING"},
        {"status": "SUCCEEDED", "output": "{}"},
    ]
    executor = StateMachineExecutor("arn:sm", client, poll_interval=0)

    await executor.execute()

    tracer.start_as_current_span.assert_called_once_with("cdkrun.execute")
    span.set_attribute.assert_any_call("cdkrun.physical_resource_id", "arn:sm")
    span.set_attribute.assert_any_call("cdkrun.execution_arn", "arn:exec")
    span.set_attribute.assert_any_call("cdkrun.polls", 2)
    span.set_attribute.assert_any_call("cdkrun.status", "success")
